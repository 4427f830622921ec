import asyncio
from typing import Dict

import aiohttp
from django.core.exceptions import ImproperlyConfigured
from model_utils import Choices

from offramp import settings
from offramp.exceptions import VerificationError

VERIFICATION_STATUS = Choices("pending", "success", "not_found")


class VerificationIntegration:
    async def fetch_status(self, address: str) -> Dict:
        """
        Return a dictionary with a ``status`` key describing the verification
        state of the wallet at `address`: one of ``pending``, ``success`` or
        ``not_found``.

        A wallet the verification service has never seen is ``not_found``, not
        an error. Raise :class:`~offramp.exceptions.VerificationError` for any
        other failure.

        :param address: the wallet address of the user
        """
        if not settings.AGGREGATOR_URL:
            raise ImproperlyConfigured("OFFRAMP_AGGREGATOR_URL is not configured")
        url = f"{settings.AGGREGATOR_URL}/kyc-status/{address}"
        timeout = aiohttp.ClientTimeout(total=settings.REQUEST_TIMEOUT)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url) as response:
                    if response.status == 404:
                        return {"status": VERIFICATION_STATUS.not_found}
                    response.raise_for_status()
                    body = await response.json(content_type=None)
        except aiohttp.ClientResponseError as e:
            raise VerificationError(
                f"verification service returned {e.status}", status_code=e.status
            )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise VerificationError(
                f"unable to reach verification service: {e.__class__.__name__}"
            )
        except ValueError:
            raise VerificationError("verification service returned invalid JSON")

        try:
            status = body["data"]["status"]
        except (KeyError, TypeError):
            raise VerificationError("verification response is missing 'status'")
        return {"status": status}


registered_verification_integration = VerificationIntegration()
