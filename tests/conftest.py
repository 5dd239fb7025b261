"""
Pytest configuration and fixtures
"""

import pytest
import httpx
from typing import Any, Dict, List, Optional, Union
from unittest.mock import AsyncMock

from schemas.tables import FetchRequest

BASE_URL = "https://nocodb.example.com"
TABLE_ID = "mtest123"
RECORDS_URL = f"{BASE_URL}/api/v2/tables/{TABLE_ID}/records"


def make_records(count: int, start: int = 1) -> List[Dict[str, Any]]:
    return [
        {"Id": i, "Title": f"Record {i}", "content": f"Body of record {i}"}
        for i in range(start, start + count)
    ]


def page_body(records: List[Dict[str, Any]], is_last_page: bool) -> Dict[str, Any]:
    return {
        "list": records,
        "pageInfo": {
            "totalRows": len(records),
            "isLastPage": is_last_page,
        },
    }


class NocoDBSource:
    """
    Fake NocoDB records endpoint served through ``httpx.MockTransport``.

    Without a script it pages over ``records`` using the request's
    offset/limit. A script is a list consumed one item per request: an int
    is returned as a bare status code, a dict as a 200 JSON body, an
    exception instance is raised by the transport.
    """

    def __init__(
        self,
        records: Optional[List[Dict[str, Any]]] = None,
        script: Optional[List[Union[int, Dict[str, Any], Exception]]] = None
    ):
        self.records = records or []
        self.script = list(script) if script is not None else None
        self.requests: List[httpx.Request] = []

    @property
    def offsets(self) -> List[int]:
        return [int(r.url.params["offset"]) for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.script is not None:
            step = self.script.pop(0)
            if isinstance(step, Exception):
                raise step
            if isinstance(step, int):
                return httpx.Response(step, json={"msg": "error"})
            return httpx.Response(200, json=step)

        offset = int(request.url.params.get("offset", 0))
        limit = int(request.url.params.get("limit", 100))
        chunk = self.records[offset:offset + limit]
        return httpx.Response(
            200,
            json=page_body(chunk, offset + limit >= len(self.records))
        )

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fetch_request() -> FetchRequest:
    """Request with a short base delay"""
    return FetchRequest(
        endpoint=RECORDS_URL,
        api_key="test_token",
        retries=3,
        retry_delay=1.0,
    )


@pytest.fixture
def mock_sleep() -> AsyncMock:
    """Wait primitive that records the delays it is awaited with"""
    return AsyncMock(return_value=None)


@pytest.fixture
def mock_records() -> List[Dict[str, Any]]:
    """Raw NocoDB rows for the sample table"""
    return [
        {
            "Id": 1,
            "Album": "Summer",
            "Thumbnail": [
                {
                    "url": "https://cdn.example.com/a.png",
                    "signedUrl": "https://cdn.example.com/a.png?sig=1",
                    "title": "a.png",
                    "mimetype": "image/png"
                }
            ],
            "Platform": "Instagram",
            "Budget": 120.5
        },
        {
            "Id": 2,
            "Album": "Winter",
            "Thumbnail": None,
            "Platform": "Instagram",
            "Budget": 80
        }
    ]
