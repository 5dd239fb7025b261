"""
Paged record fetcher for the NocoDB v2 records API.

This module walks an offset-paginated endpoint until the source reports the
last page, with:
- Exponential backoff on rate limiting (HTTP 429), budgeted per page
- Partial-result tolerance: any other failure ends pagination and the
  records collected so far are returned
- An injectable HTTP client and wait primitive for testing
"""

import asyncio
import httpx
from typing import List, Dict, Any, Optional, Callable, Awaitable
from schemas.records import Page, RawRecord
from schemas.tables import FetchRequest
from core.exceptions import (
    ExtractionError,
    RateLimitError,
    TransportError,
    ResponseFormatError
)
import logging

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


class PagedFetcher:
    """
    Fetch every record of a table, one page at a time.

    Pages are requested strictly in order; the cursor for the next page is
    the number of records received so far. On HTTP 429 the same page is
    retried after ``retry_delay`` seconds (capped by ``max_retry_delay``), doubling the delay after each
    further 429, until the page's retry budget is spent. The budget and the
    delay are restored once a page succeeds.

    Attributes:
        client: Shared ``httpx.AsyncClient`` (one is created per call when None)
        sleep: Wait primitive awaited with the backoff delay in seconds
        last_error: Error that stopped the last ``fetch_all`` early, if any
        pages_fetched: Pages successfully read by the last ``fetch_all``
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        sleep: Sleep = asyncio.sleep
    ):
        self.client = client
        self.sleep = sleep
        self.last_error: Optional[ExtractionError] = None
        self.pages_fetched = 0

    @staticmethod
    def build_params(request: FetchRequest, offset: int) -> Dict[str, Any]:
        """Query parameters for the page starting at ``offset``"""
        params: Dict[str, Any] = {
            **request.query_params,
            "offset": offset,
            "limit": request.page_size,
        }
        if request.fields:
            params["fields"] = ",".join(request.fields)
        return params

    @staticmethod
    def build_headers(request: FetchRequest) -> Dict[str, str]:
        return {
            "xc-token": request.api_key,
            "Content-Type": "application/json",
        }

    @staticmethod
    def initial_delay(request: FetchRequest) -> float:
        """Base delay, held under the optional ceiling"""
        if request.max_retry_delay is not None:
            return min(request.retry_delay, request.max_retry_delay)
        return request.retry_delay

    @staticmethod
    def next_delay(delay: float, request: FetchRequest) -> float:
        """Double the delay, honouring the optional ceiling"""
        delay = delay * 2
        if request.max_retry_delay is not None:
            delay = min(delay, request.max_retry_delay)
        return delay

    async def fetch_all(self, request: FetchRequest) -> List[RawRecord]:
        """
        Fetch all records for a request.

        Never raises for rate limiting or transport failures: the records
        gathered before the failure are returned and the failure is logged
        and kept in ``last_error``.

        Args:
            request: Endpoint, credentials, query and retry policy

        Returns:
            Records of every page fetched, in page order
        """
        self.last_error = None
        self.pages_fetched = 0

        if self.client is not None:
            return await self._fetch_pages(self.client, request)

        async with httpx.AsyncClient(timeout=request.timeout) as client:
            return await self._fetch_pages(client, request)

    async def _fetch_pages(
        self,
        client: httpx.AsyncClient,
        request: FetchRequest
    ) -> List[RawRecord]:
        results: List[RawRecord] = []
        offset = 0
        retries_left = request.retries
        delay = self.initial_delay(request)

        while True:
            params = self.build_params(request, offset)

            try:
                page = await self._fetch_page(client, request, params)

            except RateLimitError as e:
                if retries_left > 0:
                    logger.warning(
                        f"Rate limited (429) at offset {offset}, waiting {delay}s "
                        f"({retries_left} retries left)"
                    )
                    await self.sleep(delay)
                    retries_left -= 1
                    delay = self.next_delay(delay, request)
                    continue

                e.retry_after = delay
                e.context["retry_after"] = delay
                e.context["retry_count"] = request.retries
                self.last_error = e
                logger.error(
                    f"Exceeded retry limit for 429 error at offset {offset}, "
                    f"returning {len(results)} records",
                    extra={"error_context": e.to_dict()}
                )
                return results

            except TransportError as e:
                self.last_error = e
                logger.error(
                    f"Error fetching NocoDB records at offset {offset}: {e.message}, "
                    f"returning {len(results)} records",
                    extra={"error_context": e.to_dict()}
                )
                return results

            results.extend(page.records)
            self.pages_fetched += 1
            logger.debug(
                f"Fetched {len(page.records)} records at offset {offset} "
                f"(last page: {page.is_last_page})"
            )

            # An empty page is a last page even if the source says otherwise
            if page.is_last_page or not page.records:
                break

            offset += len(page.records)
            retries_left = request.retries
            delay = self.initial_delay(request)

        logger.info(
            f"Fetched {len(results)} records from {request.endpoint} "
            f"({self.pages_fetched} pages)"
        )
        return results

    async def _fetch_page(
        self,
        client: httpx.AsyncClient,
        request: FetchRequest,
        params: Dict[str, Any]
    ) -> Page:
        """
        Request and decode a single page.

        Raises:
            RateLimitError: HTTP 429, returned or raised by the client
            TransportError: Any other network or HTTP failure
            ResponseFormatError: Body is not a records page
        """
        context = {"api_url": request.endpoint, "offset": params["offset"]}

        try:
            response = await client.get(
                request.endpoint,
                params=params,
                headers=self.build_headers(request),
                timeout=request.timeout
            )

            if response.status_code == 429:
                raise RateLimitError(
                    f"Rate limit exceeded for {request.endpoint}",
                    context={**context, "status_code": 429}
                )

            response.raise_for_status()

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code == 429:
                raise RateLimitError(
                    f"Rate limit exceeded for {request.endpoint}",
                    context={**context, "status_code": 429},
                    original_exception=e
                )
            raise TransportError(
                f"HTTP {status_code} from {request.endpoint}",
                context={**context, "status_code": status_code},
                original_exception=e
            )

        except httpx.HTTPError as e:
            raise TransportError(
                f"Request to {request.endpoint} failed",
                context=context,
                original_exception=e
            )

        try:
            return Page.from_response(response.json())
        except (ValueError, TypeError) as e:
            raise ResponseFormatError(
                "Failed to parse records page",
                context={**context, "response_body": response.text[:500]},
                original_exception=e
            )
