"""Relay Protocol HTTP API client.

API docs: https://docs.relay.link/references/api/overview

Every request carries the bearer credential and the x-relay-source header.
No retries, rate limiting or caching: failures are logged and raised as
RelayApiError.
"""

import logging
from typing import Any, Optional

import httpx

from relaybridge.config import Settings
from relaybridge.exceptions import RelayApiError
from relaybridge.models import Quote, QuoteRequest, StatusResult
from relaybridge.poller import wait_for_success

logger = logging.getLogger(__name__)


class RelayApiClient:
    """Authenticated client for the Relay bridging API."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize Relay API client.

        Args:
            settings: Application settings (API URL, key and source)
            transport: Optional httpx transport, mainly for tests
        """
        self.settings = settings
        self.base_url = settings.relay_api_url.rstrip("/")
        self._transport = transport

    def _get_headers(self) -> dict:
        """Get API headers with authorization."""
        return {
            "Authorization": f"Bearer {self.settings.relay_api_key}",
            "Content-Type": "application/json",
            "x-relay-source": self.settings.relay_source,
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._get_headers(),
            timeout=self.settings.http_timeout,
            transport=self._transport,
        )

    async def _request(
        self,
        phase: str,
        method: str,
        path: str,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        """Issue a request and return the decoded JSON body."""
        logger.debug(f"{method} {path} params={params} body={json}")
        try:
            async with self._client() as client:
                response = await client.request(method, path, json=json, params=params)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            body = _response_body(e.response)
            logger.error(f"Relay {phase} error: {e.response.status_code} {body}")
            raise RelayApiError(
                phase,
                f"Relay API {phase} request failed",
                status_code=e.response.status_code,
                body=body,
            ) from e

        except httpx.HTTPError as e:
            logger.error(f"Relay {phase} error: {type(e).__name__}: {e}")
            raise RelayApiError(phase, f"Relay API {phase} request failed: {e}") from e

        except ValueError as e:
            logger.error(f"Relay {phase} returned invalid JSON: {e}")
            raise RelayApiError(phase, f"Relay API {phase} returned invalid JSON") from e

    async def get_chains(self) -> Any:
        """List chains supported by Relay."""
        return await self._request("chains", "GET", "/chains")

    async def get_quote(self, request: QuoteRequest) -> Quote:
        """Request a quote for a cross-chain move.

        Args:
            request: Quote parameters (amount in origin smallest units)

        Returns:
            Parsed quote with its execution steps
        """
        logger.info(
            f"Requesting quote: {request.amount} {request.origin_currency} "
            f"({request.origin_chain_id}) -> {request.destination_currency} "
            f"({request.destination_chain_id})"
        )
        data = await self._request("quote", "POST", "/quote", json=request.to_dict())
        if not isinstance(data, dict):
            logger.error(f"Relay quote returned unexpected body: {data!r}")
            raise RelayApiError("quote", "Malformed quote response", body=data)
        quote = Quote.from_dict(data)
        logger.info(f"Quote received with {len(quote.steps)} step(s)")
        return quote

    async def get_status(self, request_id: str) -> StatusResult:
        """Get intent status by request ID."""
        data = await self._request(
            "status", "GET", "/intents/status", params={"requestId": request_id}
        )
        if not isinstance(data, dict):
            logger.error(f"Relay status returned unexpected body: {data!r}")
            raise RelayApiError("status", "Malformed status response", body=data)
        return StatusResult.from_dict(data)

    async def index_transaction(
        self,
        tx_hash: str,
        chain_id: int,
        referrer: Optional[str] = None,
    ) -> Any:
        """Register a completed transaction with Relay for indexing.

        Args:
            tx_hash: Hash of the confirmed transaction
            chain_id: Chain the transaction was mined on
            referrer: Referrer for attribution (defaults to settings)
        """
        payload = {
            "txHash": tx_hash,
            "chainId": str(chain_id),
            "referrer": referrer or self.settings.relay_referrer,
        }
        data = await self._request("index", "POST", "/transactions/index", json=payload)
        logger.info(f"Transaction indexed: {tx_hash}")
        return data

    async def get(self, endpoint: str) -> Any:
        """GET a relative endpoint, e.g. a step item's check endpoint."""
        return await self._request("status", "GET", endpoint)

    async def wait_for_success(
        self,
        endpoint: str,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> dict:
        """Poll a status endpoint until it reports success."""
        return await wait_for_success(
            lambda: self.get(endpoint),
            interval=interval if interval is not None else self.settings.poll_interval,
            timeout=timeout if timeout is not None else self.settings.poll_timeout,
        )


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
