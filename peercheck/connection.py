import ssl
from asyncio import open_connection
from asyncio import wait_for
from contextlib import asynccontextmanager
from logging import getLogger
from typing import AsyncContextManager
from typing import AsyncIterator
from typing import Callable

from aioquic.asyncio import connect
from aioquic.asyncio import QuicConnectionProtocol
from aioquic.quic.configuration import QuicConfiguration

from peercheck.config import Settings

logger = getLogger(__name__)

Dialer = Callable[[str, int, Settings], AsyncContextManager[object]]


@asynccontextmanager
async def open_stream(address: str, port: int, settings: Settings) -> AsyncIterator[object]:
    """TCP connect to ``address:port``; used for both tcp:// and tls:// peers.

    No TLS handshake is attempted, a tls:// peer counts as reachable once its
    transport connection is established.
    """
    reader, writer = await wait_for(open_connection(address, port), settings.connect_timeout)
    try:
        yield writer
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            logger.debug(f"[peercheck]: closing {address}:{port} failed: {e}")


def quic_configuration(settings: Settings) -> QuicConfiguration:
    # reachability only, the server certificate is never checked
    return QuicConfiguration(
        is_client=True,
        alpn_protocols=list(settings.quic_alpn) or None,
        verify_mode=ssl.CERT_NONE,
        idle_timeout=settings.quic_timeout,
    )


@asynccontextmanager
async def open_quic(address: str, port: int, settings: Settings) -> AsyncIterator[QuicConnectionProtocol]:
    """Complete a QUIC handshake with ``address:port``."""
    client = connect(address, port, configuration=quic_configuration(settings), wait_connected=True)
    protocol = await wait_for(client.__aenter__(), settings.quic_timeout)
    try:
        yield protocol
    finally:
        await client.__aexit__(None, None, None)
