from setuptools import setup, find_packages


with open("README.rst") as f:
    long_description = f.read()

setup(
    name="django-offramp",
    version="0.1.0",
    description="A reusable Django app for crypto-to-fiat swap forms",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    license="Apache license 2.0",
    classifiers=[
        "Environment :: Web Environment",
        "Framework :: Django",
        "Framework :: Django :: 3.2",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.8",
    ],
    keywords=["offramp", "swap", "exchange", "stablecoin", "django"],
    include_package_data=True,
    package_dir={"": "offramp"},
    packages=find_packages("offramp", exclude=["offramp.tests", "offramp.tests.*"]),
    install_requires=[
        "django>=3.2,<5.0",
        "django-environ",
        "django-model-utils>=4.1,<5.0",
        "aiohttp<4,>=3.7",
        "toml",
    ],
    extras_require={
        "test": ["pytest", "pytest-django", "pytest-asyncio"],
    },
    python_requires=">=3.8",
)
