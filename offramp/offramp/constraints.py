from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from django.utils.translation import gettext

from offramp import settings
from offramp.catalog import network_slug
from offramp.exceptions import NoQuoteError, RateServiceError
from offramp.integrations import RateIntegration
from offramp.utils import getLogger, RequestGeneration

logger = getLogger(__name__)


@dataclass(frozen=True)
class AssetConstraint:
    min_send: Decimal
    max_send: Decimal

    @classmethod
    def default(cls) -> "AssetConstraint":
        return cls(settings.DEFAULT_MIN_SEND, settings.DEFAULT_MAX_SEND)

    def scaled(self, price: Decimal) -> "AssetConstraint":
        return AssetConstraint(self.min_send * price, self.max_send * price)

    def __contains__(self, amount: Decimal) -> bool:
        return self.min_send <= amount <= self.max_send


def parse_price(price) -> Decimal:
    try:
        value = Decimal(str(price))
    except InvalidOperation:
        raise NoQuoteError(gettext("invalid price: %s") % price)
    if not value.is_finite() or value <= 0:
        raise NoQuoteError(gettext("invalid price: %s") % price)
    return value


class ConstraintResolver:
    """
    Resolves the minimum and maximum amount that can be sent of an asset.

    Most assets use the default bounds, which are expressed in dollar terms.
    The reference-pegged asset is worth a fraction of a dollar, so its bounds
    are the defaults multiplied by the price of one probe asset (a dollar
    stablecoin) in the reference currency.

    :meth:`resolve` may be called again before a previous call has returned.
    Only the most recent call updates :attr:`constraint`. If it fails, the last
    known-good bounds are kept and :attr:`error` describes the failure.
    """

    def __init__(
        self,
        rates: RateIntegration,
        on_error: Optional[Callable[[str], None]] = None,
    ):
        self.rates = rates
        self.on_error = on_error
        self.constraint = AssetConstraint.default()
        self.error: Optional[str] = None
        self.generation = RequestGeneration("constraints")

    async def resolve(
        self, selected_asset: Optional[str], network: str
    ) -> AssetConstraint:
        generation = self.generation.begin()
        if selected_asset != settings.REFERENCE_PEGGED_ASSET:
            self.constraint = AssetConstraint.default()
            self.error = None
            return self.constraint

        try:
            price = parse_price(
                await self.rates.fetch_rate(
                    asset=settings.REFERENCE_PROBE_ASSET,
                    amount=1,
                    currency=settings.REFERENCE_CURRENCY,
                    network=network_slug(network),
                )
            )
        except RateServiceError as e:
            if not self.generation.is_current(generation):
                return self.constraint
            self.error = str(e) or gettext("Unknown error")
            logger.warning(
                f"keeping {self.constraint} for {selected_asset}: {self.error}"
            )
            if self.on_error:
                self.on_error(self.error)
            return self.constraint

        if not self.generation.is_current(generation):
            logger.debug(f"discarding stale bounds for {selected_asset}")
            return self.constraint

        self.constraint = AssetConstraint.default().scaled(price)
        self.error = None
        return self.constraint

    def cancel(self):
        self.generation.cancel()
