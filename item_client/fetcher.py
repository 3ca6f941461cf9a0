"""
Fetch a single item over HTTP and decode it into an ItemDetail
"""
import json
import time
from datetime import datetime, timezone
from typing import Optional

import httpx
import structlog
from pydantic import ValidationError

from .config import EndpointConfig
from .errors import DecodeError, RequestError
from .models import ItemDetail

logger = structlog.get_logger(__name__)


class FetchResult:
    def __init__(
        self,
        url: str,
        item: ItemDetail = None,
        status_code: int = 0,
        fetch_time: float = 0.0,
        error: str = None,
        error_kind: str = None
    ):
        """Initialize a FetchResult with the decoded item or the failure that stopped it."""
        self.url = url
        self.item = item
        self.status_code = status_code
        self.fetch_time = fetch_time
        self.error = error
        self.error_kind = error_kind
        self.timestamp = datetime.now(timezone.utc)

    @property
    def success(self) -> bool:
        """Check if the fetch produced an item."""
        return self.error is None and self.item is not None

    def __repr__(self) -> str:
        if self.success:
            return f"FetchResult(url={self.url!r}, item={self.item!r})"
        return f"FetchResult(url={self.url!r}, error_kind={self.error_kind!r}, error={self.error!r})"


class ItemFetcher:
    def __init__(self, endpoint: EndpointConfig = None, transport: httpx.AsyncBaseTransport = None):
        """Initialize the fetcher for one endpoint.

        Args:
            endpoint: Target endpoint, defaults to http://localhost:3000/items/1
            transport: Optional httpx transport, used to talk to in-process servers
        """
        self.endpoint = endpoint or EndpointConfig()
        self.transport = transport
        self.max_redirects = 5

    @property
    def url(self) -> str:
        return self.endpoint.url

    def _new_client(self) -> httpx.AsyncClient:
        # One client per call: nothing is pooled or reused between fetches.
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.endpoint.timeout),
            follow_redirects=True,
            max_redirects=self.max_redirects,
            transport=self.transport,
        )

    async def fetch(self) -> ItemDetail:
        """GET the endpoint and decode the body. Raises RequestError or DecodeError."""
        item, _, _ = await self._fetch()
        return item

    async def try_fetch(self) -> FetchResult:
        """Like fetch(), but report failure in the returned FetchResult instead of raising."""
        start_time = time.time()
        try:
            item, status_code, fetch_time = await self._fetch()
        except RequestError as e:
            return FetchResult(
                url=self.url,
                fetch_time=time.time() - start_time,
                error=str(e),
                error_kind="request"
            )
        except DecodeError as e:
            return FetchResult(
                url=self.url,
                status_code=e.status_code or 0,
                fetch_time=time.time() - start_time,
                error=str(e),
                error_kind="decode"
            )

        return FetchResult(
            url=self.url,
            item=item,
            status_code=status_code,
            fetch_time=fetch_time
        )

    async def _fetch(self):
        url = self.url
        start_time = time.time()
        logger.debug("fetching_item", url=url, timeout=self.endpoint.timeout)

        try:
            async with self._new_client() as client:
                async with client.stream("GET", url) as response:
                    logger.debug("item_response",
                                 url=url,
                                 status_code=response.status_code,
                                 elapsed=round(time.time() - start_time, 4))
                    content = await response.aread()
                    status_code = response.status_code

        except httpx.TimeoutException as e:
            logger.warning("item_request_failed", url=url, reason="timeout", error=str(e))
            raise RequestError(f"Timeout after {self.endpoint.timeout}s: {e}", url=url) from e

        except httpx.ConnectError as e:
            logger.warning("item_request_failed", url=url, reason="connect", error=str(e))
            raise RequestError(f"Connection error: {e}", url=url) from e

        except httpx.RequestError as e:
            logger.warning("item_request_failed", url=url, reason=type(e).__name__, error=str(e))
            raise RequestError(f"Request failed: {e}", url=url) from e

        fetch_time = time.time() - start_time

        if not 200 <= status_code < 300:
            logger.warning("non_success_status", url=url, status_code=status_code)

        try:
            item = decode_item(content)
        except DecodeError as e:
            e.url = url
            e.status_code = status_code
            logger.warning("item_decode_failed", url=url, status_code=status_code, error=str(e))
            raise

        logger.info("item_fetched", url=url, status_code=status_code, fetch_time=round(fetch_time, 4))
        return item, status_code, fetch_time


def decode_item(content: bytes) -> ItemDetail:
    """Parse a JSON body into an ItemDetail, raising DecodeError on any mismatch."""
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise DecodeError(f"Response body is not valid JSON: {e}") from e

    try:
        return ItemDetail.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]) or "<root>" for error in e.errors()
        )
        raise DecodeError(f"Response body does not match ItemDetail ({fields})") from e


def create_fetcher(endpoint: Optional[EndpointConfig] = None) -> ItemFetcher:
    """Create an ItemFetcher for the given endpoint (or the default one)."""
    return ItemFetcher(endpoint=endpoint)


async def fetch_item(endpoint: Optional[EndpointConfig] = None) -> ItemDetail:
    """Fetch and decode the item at endpoint, defaulting to http://localhost:3000/items/1."""
    return await create_fetcher(endpoint).fetch()
