import asyncio
from decimal import Decimal, InvalidOperation
from typing import Union

import aiohttp
from django.core.exceptions import ImproperlyConfigured

from offramp import settings
from offramp.exceptions import NetworkError, NoQuoteError
from offramp.utils import getLogger

logger = getLogger(__name__)


class RateIntegration:
    async def fetch_rate(
        self,
        asset: str,
        amount: Union[Decimal, int, str],
        currency: str,
        network: str,
    ) -> str:
        """
        Return the price of one unit of `asset` in `currency` on `network`, as a
        string, for a transfer of `amount` units of `asset`.

        The default implementation queries the aggregator's rate endpoint at
        ``OFFRAMP_AGGREGATOR_URL``. Replace it by passing a subclass instance to
        ``register_integrations()``.

        Raise :class:`~offramp.exceptions.NetworkError` if the rate service
        could not be reached and :class:`~offramp.exceptions.NoQuoteError` if it
        answered without a usable price.

        :param asset: the token symbol, ex. ``USDC``
        :param amount: the amount of `asset` to be sent
        :param currency: the settlement currency code, ex. ``NGN``
        :param network: the network slug, ex. ``arbitrum-one``
        """
        if not settings.AGGREGATOR_URL:
            raise ImproperlyConfigured("OFFRAMP_AGGREGATOR_URL is not configured")
        url = f"{settings.AGGREGATOR_URL}/rates/{asset}/{amount}/{currency}"
        timeout = aiohttp.ClientTimeout(total=settings.REQUEST_TIMEOUT)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, params={"network": network}) as response:
                    body = await response.json(content_type=None)
                    status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(f"unable to reach rate service: {e.__class__.__name__}")
        except ValueError:
            raise NoQuoteError("rate service returned an invalid response")

        if not isinstance(body, dict):
            raise NoQuoteError("rate service returned an invalid response")
        if status >= 400:
            raise NoQuoteError(body.get("message") or f"rate service returned {status}")

        price = body.get("data")
        if not isinstance(price, str):
            raise NoQuoteError(body.get("message") or "no quote available")
        try:
            valid = Decimal(price) > 0
        except InvalidOperation:
            valid = False
        if not valid:
            raise NoQuoteError(f"invalid price returned: {price}")
        logger.debug(f"{asset}/{currency} on {network}: {price}")
        return price


registered_rate_integration = RateIntegration()
