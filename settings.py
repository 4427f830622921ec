"""
Django settings for reference example.
"""
import os
import environ
from django.utils.translation import gettext_lazy as _

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

env = environ.Env()
env_file = env("ENV_PATH") if os.environ.get("ENV_PATH") else os.path.join(BASE_DIR, ".env")
if os.path.exists(env_file):
    environ.Env.read_env(env_file)

SECRET_KEY = env("DJANGO_SECRET_KEY", default="offramp-insecure-development-key")

DEBUG = env.bool("DJANGO_DEBUG", False)

ALLOWED_HOSTS = env.list(
    "DJANGO_ALLOWED_HOSTS", default=["localhost", "127.0.0.1", "[::1]", "0.0.0.0"]
)

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "offramp",
]

DATABASES = {
    "default": env.db("DATABASE_URL", default="sqlite://:memory:")
}
DEFAULT_AUTO_FIELD = "django.db.models.AutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True
LANGUAGES = [
    ("en", _("English")),
    ("pt", _("Portuguese")),
]

OFFRAMP_AGGREGATOR_URL = env("OFFRAMP_AGGREGATOR_URL", default="https://aggregator.test/v1")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": True,
    "formatters": {
        "offramp": {
            "format": "{asctime} - {levelname} - {name}:{lineno} - {message}",
            "style": "{",
            "datefmt": "%Y-%m-%dT%H:%M:%SZ",
        },
        "default": {
            "format": "{asctime} - {levelname} - {name} - {message}",
            "style": "{",
            "datefmt": "%Y-%m-%dT%H:%M:%SZ",
        },
    },
    "handlers": {
        "offramp-console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "offramp",
        },
        "default-console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "default",
        },
    },
    "loggers": {
        "offramp": {
            "handlers": ["offramp-console"],
            "propagate": False,
            "level": "DEBUG",
        },
        "django": {
            "handlers": ["default-console"],
            "propagate": False,
            "level": "INFO",
        },
    },
}
