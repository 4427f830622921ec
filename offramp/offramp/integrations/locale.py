import asyncio

import aiohttp

from offramp import settings
from offramp.exceptions import LocaleLookupError


class LocaleIntegration:
    async def country_code(self) -> str:
        """
        Return the ISO 3166-1 alpha-2 code of the country the user is most
        likely in. It is used to move the user's local currency to the top of
        the currency list.

        The default implementation asks the IP geolocation service at
        ``OFFRAMP_LOCALE_LOOKUP_URL``. Raise
        :class:`~offramp.exceptions.LocaleLookupError` if the country cannot be
        determined.
        """
        timeout = aiohttp.ClientTimeout(total=settings.REQUEST_TIMEOUT)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(settings.LOCALE_LOOKUP_URL) as response:
                    response.raise_for_status()
                    body = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise LocaleLookupError(f"locale lookup failed: {e.__class__.__name__}")

        code = body.get("country_code") if isinstance(body, dict) else None
        if not code or not isinstance(code, str):
            raise LocaleLookupError("locale lookup returned no country code")
        return code.upper()


registered_locale_integration = LocaleIntegration()
