from django.apps import AppConfig


class OfframpConfig(AppConfig):
    name = "offramp"
    verbose_name = "Django Offramp"

    def ready(self):
        """
        Initialize the app
        """
        from decimal import setcontext, DefaultContext
        from offramp import settings  # loads internal settings
        from offramp.utils import getLogger

        # Bounds scaled by a fiat price can exceed the default 28 digits
        DefaultContext.prec = 30
        setcontext(DefaultContext)

        if not settings.AGGREGATOR_URL:
            getLogger(__name__).debug(
                "OFFRAMP_AGGREGATOR_URL is not set, the default rate and "
                "verification integrations will not work"
            )
