import asyncio
from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError

from offramp.amounts import decimal_to_text, format_amount
from offramp.catalog import get_catalog, network_slug
from offramp.constraints import parse_price
from offramp.exceptions import RateServiceError
from offramp.swap import SwapSession
from offramp.utils import getLogger

logger = getLogger(__name__)


class Command(BaseCommand):
    """
    Runs a swap form session from the command line.

    Selects the token and currency, fetches the current rate from the
    registered rate integration, enters the amount the same way a user would
    and prints both amounts, the send bounds, the currency order and any
    validation errors.
    """

    help = "Preview the amounts and validation of a swap"

    def add_arguments(self, parser):  # pragma: no cover
        parser.add_argument("--network", "-n", required=True, help="ex. 'Base'")
        parser.add_argument("--token", "-t", required=True, help="ex. 'USDC'")
        parser.add_argument("--currency", "-c", required=True, help="ex. 'NGN'")
        amounts = parser.add_mutually_exclusive_group(required=True)
        amounts.add_argument("--send", help="the amount of the token to send")
        amounts.add_argument("--receive", help="the amount of currency to receive")
        parser.add_argument(
            "--address", "-a", help="a wallet address to check verification for"
        )
        parser.add_argument(
            "--balance", type=Decimal, help="the wallet's balance of the token"
        )

    def handle(self, *_args, **options):
        if options["network"] not in get_catalog().networks:
            raise CommandError(f"unknown network: {options['network']}")
        asyncio.run(self.preview(**options))

    async def preview(self, **options):
        session = SwapSession(options["network"])
        if options["token"] not in session.supported_tokens:
            raise CommandError(
                f"{options['token']} is not supported on {options['network']}"
            )

        await asyncio.gather(
            session.select_asset(options["token"]),
            session.mount(),
            session.check_verification(options.get("address")),
        )
        if not session.select_currency(options["currency"]):
            raise CommandError(f"{options['currency']} is not available")

        try:
            price = await session.rates.fetch_rate(
                asset=session.token,
                amount=1,
                currency=session.currency,
                network=network_slug(session.network),
            )
            session.set_rate(parse_price(price))
        except RateServiceError as e:
            logger.error(f"unable to fetch rate: {e}")
            raise CommandError(f"no rate available: {e}")

        if options.get("send") is not None:
            accepted = session.on_send_input(options["send"])
        else:
            accepted = session.on_receive_input(options["receive"])
        if not accepted:
            raise CommandError("invalid amount")

        self.write_summary(session, options.get("balance"))

    def write_summary(self, session: SwapSession, balance):
        constraint = session.constraint
        self.stdout.write(f"Network:  {session.network}")
        self.stdout.write(
            f"Rate:     1 {session.token} = {session.rate} {session.currency}"
        )
        self.stdout.write(
            f"Send:     {session.amount_sent.display_text or '0'} {session.token}"
        )
        self.stdout.write(
            f"Receive:  {session.amount_received.display_text or '0'} "
            f"{session.currency}"
        )
        self.stdout.write(
            "Bounds:   {} - {} {}".format(
                format_amount(decimal_to_text(constraint.min_send)),
                format_amount(decimal_to_text(constraint.max_send)),
                session.token,
            )
        )
        self.stdout.write(
            "Currencies: "
            + ", ".join(
                f"{e.code}{' (disabled)' if e.disabled else ''}"
                for e in session.currencies
            )
        )
        if session.is_verified:
            self.stdout.write("Verified: yes")
        elif session.kyc_prompt_open:
            self.stdout.write("Verified: pending")

        for notice in session.notices:
            self.stderr.write(f"{notice.title}: {notice.description}")

        form = session.form(balance=balance)
        if form.is_valid():
            self.stdout.write(self.style.SUCCESS("The swap is valid"))
        else:
            for field, errors in form.errors.items():
                for error in errors:
                    self.stdout.write(self.style.ERROR(f"{field}: {error}"))
