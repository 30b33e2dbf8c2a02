"""Shared fakes for SSDP streams and aiohttp sessions."""

from __future__ import annotations

import errno
import json
import os
import socket
from typing import Any, Dict, List, Optional, Tuple, Union

import aiohttp

from sony_discovery.models import SsdpResponse


def advertisement(location: str, sender: Optional[Tuple[str, int]] = None) -> SsdpResponse:
    return SsdpResponse(
        location=location,
        st="urn:schemas-sony-com:service:ScalarWebAPI:1",
        usn=f"uuid:{location}::urn:schemas-sony-com:service:ScalarWebAPI:1",
        sender=sender,
    )


def interface_information(*entries: Tuple[str, str, str]) -> str:
    """JSON body for (modelName, productCategory, productName) entries."""
    return json.dumps(
        {
            "result": [
                {"modelName": model, "productCategory": category, "productName": product}
                for model, category, product in entries
            ],
            "id": 33,
        }
    )


async def stream(*items: Union[SsdpResponse, Exception]):
    """Async iterator of replies, raising any exception item in place."""
    for item in items:
        if isinstance(item, Exception):
            raise item
        yield item


class FakeSearch:
    """Stands in for ssdp.search(): an async context manager yielding a reply stream."""

    def __init__(self, *items: Union[SsdpResponse, Exception], error: Optional[Exception] = None):
        self.items = items
        self.error = error
        self.closed = False

    async def __aenter__(self):
        if self.error is not None:
            raise self.error
        return stream(*self.items)

    async def __aexit__(self, *exc_info) -> bool:
        self.closed = True
        return False


class UnreachableSocket(socket.socket):
    """UDP socket whose sends fail the way an unroutable multicast send does."""

    def sendto(self, *args):
        raise OSError(errno.ENETUNREACH, os.strerror(errno.ENETUNREACH))


class UnbindableSocket(socket.socket):
    def bind(self, address):
        raise OSError(errno.EADDRINUSE, os.strerror(errno.EADDRINUSE))


class RecordingSocket(socket.socket):
    """UDP socket that keeps outgoing datagrams instead of sending them."""

    created: List["RecordingSocket"] = []

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sent: List[Tuple[bytes, Any]] = []
        RecordingSocket.created.append(self)

    def sendto(self, data, address):
        self.sent.append((data, address))
        return len(data)


class FakeResponse:
    def __init__(self, status: int = 200, body: str = ""):
        self.status = status
        self._body = body

    async def text(self) -> str:
        return self._body


class _RequestContext:
    def __init__(self, outcome: Union[FakeResponse, BaseException]):
        self._outcome = outcome

    async def __aenter__(self) -> FakeResponse:
        if isinstance(self._outcome, BaseException):
            raise self._outcome
        return self._outcome

    async def __aexit__(self, *exc_info) -> bool:
        return False


class FakeSession:
    """Minimal aiohttp.ClientSession replacement keyed by request URL."""

    def __init__(self, routes: Optional[Dict[str, Union[FakeResponse, BaseException]]] = None):
        self.routes = routes or {}
        self.calls: List[Tuple[str, Any]] = []
        self.closed = False

    def post(self, url: str, json: Any = None) -> _RequestContext:
        self.calls.append((url, json))
        outcome = self.routes.get(url)
        if outcome is None:
            outcome = aiohttp.ClientConnectionError(f"Cannot connect to {url}")
        return _RequestContext(outcome)

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, *exc_info) -> bool:
        self.closed = True
        return False
