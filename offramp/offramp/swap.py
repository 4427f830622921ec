"""
This module defines :class:`SwapSession`, the state behind one mounted swap form.

Every derived value has explicit inputs and is recomputed by an explicit call:

- the non-driving amount from the driving amount, the direction and the rate
  (:meth:`SwapSession.recompute`),
- the send bounds from the selected token and network
  (:meth:`SwapSession.resolve_constraint`),
- the currency list from the selected token and the user's country
  (:meth:`SwapSession.refresh_currencies`).

The asynchronous methods may be awaited concurrently on one event loop. Each
family of requests is sequenced with a :class:`~offramp.utils.RequestGeneration`
so that a response is dropped once a newer request of the same family has
started or the session has been unmounted.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_DOWN
from typing import List, Optional

from django.utils.translation import gettext

from offramp import integrations, settings
from offramp.amounts import AmountEditor, AmountField
from offramp.catalog import Catalog, get_catalog
from offramp.constraints import AssetConstraint, ConstraintResolver
from offramp.conversion import DIRECTION, DirectionTracker, recompute
from offramp.currencies import CurrencyCatalog
from offramp.exceptions import InputRejected, LocaleLookupError, VerificationError
from offramp.forms import SwapForm
from offramp.integrations import (
    LocaleIntegration,
    RateIntegration,
    VerificationIntegration,
    VERIFICATION_STATUS,
)
from offramp.seed import SeedParams
from offramp.utils import getLogger, RequestGeneration

logger = getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    """A transient message for the user, such as a toast."""

    level: str
    title: str
    description: str = ""


class SwapSession:
    def __init__(
        self,
        network: str,
        catalog: Optional[Catalog] = None,
        rates: Optional[RateIntegration] = None,
        verification: Optional[VerificationIntegration] = None,
        locale: Optional[LocaleIntegration] = None,
    ):
        self.catalog = catalog or get_catalog()
        self.rates = rates or integrations.registered_rate_integration
        self.verification = (
            verification or integrations.registered_verification_integration
        )
        self.locale = locale or integrations.registered_locale_integration

        self.network = network
        self.token: Optional[str] = None
        self.currency: Optional[str] = None
        self.memo = ""
        self.rate: Optional[Decimal] = None

        self.amount_sent = AmountEditor(settings.SEND_DECIMAL_PLACES)
        self.amount_received = AmountEditor(settings.RECEIVE_DECIMAL_PLACES)
        self.direction = DirectionTracker()

        self.constraints = ConstraintResolver(
            self.rates, on_error=self._on_constraint_error
        )
        self.currencies: CurrencyCatalog = self.catalog.currencies
        self.country_code: Optional[str] = None
        self.locale_generation = RequestGeneration("locale")
        self.verification_generation = RequestGeneration("verification")

        self.is_verified = False
        self.kyc_prompt_open = False
        self.notices: List[Notice] = []
        self.first_load = True

        self._apply_network(network)

    @property
    def supported_tokens(self):
        return self.catalog.supported_tokens(self.network)

    @property
    def constraint(self) -> AssetConstraint:
        return self.constraints.constraint

    def notify(self, level: str, title: str, description: str = ""):
        notice = Notice(level, title, description)
        self.notices.append(notice)
        logger.info(f"{title}: {description}" if description else title)
        return notice

    # Seed parameters and selections

    def apply_seed(self, params: SeedParams):
        """
        Apply the initial values passed to the page. Call this once when the
        form is first displayed and again whenever the parameters change, then
        await :meth:`select_asset` with :attr:`token` to resolve its bounds.
        """
        supported = self.supported_tokens
        if params.token and params.token in supported:
            self.token = params.token
        elif params.token and not self.first_load:
            self.notify(
                "warning",
                gettext("Unsupported Token"),
                gettext("%s token is not supported on the current network.")
                % params.token,
            )

        self.refresh_currencies()
        if params.currency and self.currencies.is_enabled(params.currency):
            self.currency = params.currency

        if params.token_amount and params.fiat_amount:
            self.amount_received.set_value(params.fiat_amount)
            self.direction.mark(DIRECTION.receive_driven)
        elif params.token_amount:
            self.amount_sent.set_value(params.token_amount)
            self.direction.mark(DIRECTION.send_driven)
        elif params.fiat_amount:
            self.amount_received.set_value(params.fiat_amount)
            self.direction.mark(DIRECTION.receive_driven)

        self.first_load = False
        self.refresh_currencies()
        self.recompute()

    async def select_network(self, network: str) -> AssetConstraint:
        """
        Switch to `network`, falling back to its first token when the selected
        one is not available there, and resolve the bounds again.
        """
        self._apply_network(network)
        return await self.resolve_constraint()

    def _apply_network(self, network: str):
        self.network = network
        supported = self.supported_tokens
        if supported and self.token not in supported:
            self.token = supported[0]
        self.refresh_currencies()

    async def select_asset(self, token: str) -> AssetConstraint:
        """
        Select `token` and re-derive everything that depends on it. The
        currency list is updated before the bounds are requested, so a caller
        can render it while the bounds are still resolving.
        """
        self.token = token
        self.refresh_currencies()
        return await self.resolve_constraint()

    def select_currency(self, code: str) -> bool:
        if not self.currencies.is_enabled(code):
            return False
        self.currency = code
        return True

    # Amounts

    def on_send_input(self, raw: str) -> bool:
        return self._on_input(self.amount_sent, raw, DIRECTION.send_driven)

    def on_receive_input(self, raw: str) -> bool:
        return self._on_input(self.amount_received, raw, DIRECTION.receive_driven)

    def _on_input(self, editor: AmountEditor, raw: str, direction: str) -> bool:
        try:
            editor.on_input(raw)
        except InputRejected:
            return False
        self.direction.mark(direction)
        self.recompute()
        return True

    def set_rate(self, rate: Optional[Decimal]):
        self.rate = Decimal(str(rate)) if rate is not None else None
        self.recompute()

    def use_max_balance(self, balance: Decimal) -> bool:
        """Fill the send amount with the whole `balance`, if there is any."""
        if not balance or balance <= 0:
            return False
        places = Decimal(1).scaleb(-settings.SEND_DECIMAL_PLACES)
        self.amount_sent.set_value(Decimal(balance).quantize(places, ROUND_DOWN))
        self.direction.mark(DIRECTION.send_driven)
        self.recompute()
        return True

    def recompute(self) -> Optional[AmountField]:
        result = recompute(
            self.direction.direction,
            self.amount_sent.numeric_value,
            self.amount_received.numeric_value,
            self.rate,
            send_places=settings.SEND_DECIMAL_PLACES,
            receive_places=settings.RECEIVE_DECIMAL_PLACES,
        )
        if result is None:
            return None
        field_name, value = result
        return getattr(self, field_name).set_value(value)

    # Derived collections

    async def resolve_constraint(self) -> AssetConstraint:
        return await self.constraints.resolve(self.token, self.network)

    def _on_constraint_error(self, message: str):
        self.notify("error", gettext("No available quote"), message)

    def refresh_currencies(self) -> CurrencyCatalog:
        self.currencies = self.catalog.currencies.apply_asset_rule(
            self.token, self.currency
        ).apply_locale_rank(self.country_code)
        if self.currencies.forced_currency:
            self.currency = self.currencies.forced_currency
        return self.currencies

    # Lifecycle

    async def mount(self) -> CurrencyCatalog:
        """
        Look up the user's country once and move their currency to the top of
        the list. A failed lookup leaves the list in its default order.
        """
        if self.country_code is not None:
            return self.currencies
        generation = self.locale_generation.begin()
        try:
            country_code = await self.locale.country_code()
        except LocaleLookupError as e:
            logger.debug(f"not reordering currencies: {e}")
            return self.currencies
        if not self.locale_generation.is_current(generation):
            return self.currencies
        self.country_code = country_code
        return self.refresh_currencies()

    def unmount(self):
        self.constraints.cancel()
        self.locale_generation.cancel()
        self.verification_generation.cancel()

    async def check_verification(self, address: Optional[str]) -> Optional[str]:
        """
        Fetch the verification status of the wallet at `address`. A pending
        verification opens the KYC prompt and a successful one marks the user
        as verified. Failures are logged and leave the state unchanged.
        """
        if not address:
            return None
        generation = self.verification_generation.begin()
        try:
            response = await self.verification.fetch_status(address)
        except VerificationError as e:
            if e.status_code != 404:
                logger.error(f"unable to fetch verification status: {e}")
            return None
        if not self.verification_generation.is_current(generation):
            return None

        status = response.get("status")
        if status == VERIFICATION_STATUS.pending:
            self.kyc_prompt_open = True
        elif status == VERIFICATION_STATUS.success:
            self.is_verified = True
        return status

    # Validation

    def form(self, balance: Optional[Decimal] = None) -> SwapForm:
        data = {
            "token": self.token or "",
            "currency": self.currency or "",
            "amount_sent": self.amount_sent.field.normalized,
            "amount_received": self.amount_received.field.normalized,
            "memo": self.memo,
        }
        return SwapForm(
            self.constraint,
            self.currencies,
            self.supported_tokens,
            balance,
            data=data,
        )
