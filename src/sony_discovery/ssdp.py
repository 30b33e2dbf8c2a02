"""
SSDP M-SEARCH client built on asyncio datagram endpoints
"""

import asyncio
import socket
import logging
from typing import AsyncIterator, Dict, Optional, Tuple, Union
from .models import SsdpResponse

logger = logging.getLogger(__name__)

SSDP_MULTICAST = ('239.255.255.250', 1900)
SSDP_MX = 2

class SsdpError(Exception):
    """Base class for SSDP search failures"""

class DiscoveryStartError(SsdpError):
    """The search socket could not be opened or the query could not be sent"""

    def __init__(self, message: str = "Failed to start SSDP search"):
        super().__init__(message)

class SsdpResponseError(SsdpError):
    """A reply could not be read or parsed"""

def build_search_request(search_target: str, mx: int = SSDP_MX) -> bytes:
    """Build the M-SEARCH datagram"""
    host, port = SSDP_MULTICAST
    return (
        "M-SEARCH * HTTP/1.1\r\n"
        f"HOST: {host}:{port}\r\n"
        "MAN: \"ssdp:discover\"\r\n"
        f"MX: {mx}\r\n"
        f"ST: {search_target}\r\n"
        "\r\n"
    ).encode('utf-8')

def parse_search_response(data: bytes, sender: Optional[Tuple[str, int]] = None) -> SsdpResponse:
    """
    Parse an M-SEARCH reply.
    Raises SsdpResponseError unless the status is 200 and LOCATION, ST and USN are all present.
    """
    try:
        text = data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise SsdpResponseError(f"Undecodable response from {sender}") from e

    lines = text.splitlines()
    if not lines:
        raise SsdpResponseError(f"Empty response from {sender}")

    status = lines[0].split(None, 2)
    if len(status) < 2 or not status[0].upper().startswith('HTTP/') or status[1] != '200':
        raise SsdpResponseError(f"Unexpected status line from {sender}: {lines[0]!r}")

    headers: Dict[str, str] = {}
    for line in lines[1:]:
        if not line.strip():
            break
        if ':' not in line:
            raise SsdpResponseError(f"Malformed header line from {sender}: {line!r}")
        key, value = line.split(':', 1)
        headers[key.strip().upper()] = value.strip()

    for required in ('LOCATION', 'ST', 'USN'):
        if required not in headers:
            raise SsdpResponseError(f"Response from {sender} is missing the {required} header")

    return SsdpResponse(
        location=headers['LOCATION'],
        st=headers['ST'],
        usn=headers['USN'],
        server=headers.get('SERVER'),
        sender=sender,
    )

class _SearchProtocol(asyncio.DatagramProtocol):
    """Queues every datagram and socket error in arrival order"""

    def __init__(self, queue: asyncio.Queue):
        self.queue = queue

    def datagram_received(self, data: bytes, addr):
        self.queue.put_nowait((data, addr))

    def error_received(self, exc: Exception):
        self.queue.put_nowait(exc)

class SsdpSearch:
    """
    One M-SEARCH and the replies to it.

    Entering the context binds the socket and sends the query, raising
    DiscoveryStartError if either fails. It then returns an async iterator
    that ends after `timeout` seconds and raises SsdpResponseError on the
    first reply it cannot parse. The socket is closed on exit whether or not
    the iterator was consumed.

        async with search(target, timeout) as responses:
            async for response in responses:
                ...
    """

    def __init__(self, search_target: str, timeout: float, mx: int = SSDP_MX):
        self.search_target = search_target
        self.timeout = timeout
        self.mx = mx
        self._transport = None

    async def __aenter__(self) -> AsyncIterator[SsdpResponse]:
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue = asyncio.Queue()

        # Sent on the plain socket so send errors raise here; the asyncio
        # transport would route them to error_received instead.
        sock = None
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
            sock.bind(('0.0.0.0', 0))
            sock.sendto(build_search_request(self.search_target, self.mx), SSDP_MULTICAST)
            sock.setblocking(False)
            self._transport, _ = await loop.create_datagram_endpoint(
                lambda: _SearchProtocol(queue),
                sock=sock
            )
        except OSError as e:
            if sock is not None:
                sock.close()
            logger.error(f"Error during SSDP search: {e}")
            raise DiscoveryStartError() from e

        logger.debug(f"M-SEARCH sent for {self.search_target} (mx={self.mx}, timeout={self.timeout}s)")
        return _iter_responses(queue, loop.time() + self.timeout)

    async def __aexit__(self, *exc_info) -> bool:
        self.close()
        return False

    def close(self):
        if self._transport is not None:
            self._transport.close()
            self._transport = None

def search(search_target: str, timeout: float, mx: int = SSDP_MX) -> SsdpSearch:
    """Build an SSDP search; use it with `async with`"""
    return SsdpSearch(search_target, timeout, mx)

async def _iter_responses(queue: asyncio.Queue, deadline: float) -> AsyncIterator[SsdpResponse]:
    loop = asyncio.get_running_loop()
    while True:
        remaining = deadline - loop.time()
        if remaining <= 0:
            break
        try:
            item: Union[Exception, Tuple[bytes, Tuple[str, int]]] = await asyncio.wait_for(queue.get(), remaining)
        except asyncio.TimeoutError:
            break

        if isinstance(item, Exception):
            raise SsdpResponseError(f"Socket error while receiving: {item}") from item

        data, addr = item
        yield parse_search_response(data, addr)
