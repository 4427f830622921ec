import sys
from offramp.integrations.rates import RateIntegration, registered_rate_integration
from offramp.integrations.verification import (
    VerificationIntegration,
    VERIFICATION_STATUS,
    registered_verification_integration,
)
from offramp.integrations.locale import (
    LocaleIntegration,
    registered_locale_integration,
)


def register_integrations(
    rates: RateIntegration = None,
    verification: VerificationIntegration = None,
    locale: LocaleIntegration = None,
):
    """
    Registers the integration classes used to reach external services.

    Call this function in your app's Django AppConfig.ready() function:
    ::

        from django.apps import AppConfig

        class MyOfframpApp(AppConfig):
            name = 'My Offramp App'
            verbose_name = name

            def ready(self):
                from offramp.integrations import register_integrations
                from myapp.integrations import (
                    MyRateIntegration,
                    MyVerificationIntegration,
                )

                register_integrations(
                    rates=MyRateIntegration(),
                    verification=MyVerificationIntegration(),
                )

    Simply pass the integrations you want to replace.

    :param rates: the ``RateIntegration`` subclass instance used to price assets
    :param verification: the ``VerificationIntegration`` subclass instance used
        to check the user's verification status
    :param locale: the ``LocaleIntegration`` subclass instance used to infer the
        user's country
    :raises TypeError: arguments are not subclasses of the integration classes
    """
    this = sys.modules[__name__]

    if rates and not issubclass(rates.__class__, RateIntegration):
        raise TypeError("rates must be a subclass of RateIntegration")
    elif verification and not issubclass(
        verification.__class__, VerificationIntegration
    ):
        raise TypeError("verification must be a subclass of VerificationIntegration")
    elif locale and not issubclass(locale.__class__, LocaleIntegration):
        raise TypeError("locale must be a subclass of LocaleIntegration")

    for obj, attr in [
        (rates, "registered_rate_integration"),
        (verification, "registered_verification_integration"),
        (locale, "registered_locale_integration"),
    ]:
        if obj:
            setattr(this, attr, obj)
