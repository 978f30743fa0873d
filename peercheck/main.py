from __future__ import annotations

from asyncio import create_task
from asyncio import gather
from logging import getLogger
from time import perf_counter
from typing import List

from peercheck.config import Settings
from peercheck.connection import Dialer
from peercheck.connection import open_quic
from peercheck.connection import open_stream
from peercheck.errors import DialError
from peercheck.errors import ResolveError
from peercheck.finder import BaseFinder
from peercheck.peer import Peer
from peercheck.peer import Transport
from peercheck.resolver import Lookup
from peercheck.resolver import resolve

logger = getLogger(__name__)
logger.debug("[peercheck]: importing peercheck checker module")


class Checker:
    def __init__(
        self,
        finders: List[BaseFinder] | None = None,
        settings: Settings | None = None,
        lookup: Lookup | None = None,
        dial_stream: Dialer = open_stream,
        dial_quic: Dialer = open_quic,
    ):
        self.finders: List[BaseFinder] = finders or []
        self.settings = settings or Settings()
        self.lookup = lookup
        self.dial_stream = dial_stream
        self.dial_quic = dial_quic

    async def find_peers(self) -> List[Peer]:
        peers: List[Peer] = []
        for finder in self.finders:
            peers.extend(await finder.get_all_peers())
        return peers

    async def run(self) -> List[Peer]:
        return await self.check(await self.find_peers())

    async def check(self, peers: List[Peer]) -> List[Peer]:
        """Probe every peer at once and return them, in input order, once all are done."""
        slots = list(peers)
        logger.info(f"[peercheck]: probing {len(slots)} peers")
        tasks = [create_task(self.probe_slot(slots, index)) for index in range(len(slots))]
        await gather(*tasks)
        alive = sum(1 for peer in slots if peer.up)
        logger.info(f"[peercheck]: {alive} of {len(slots)} peers are up")
        return slots

    async def probe_slot(self, slots: List[Peer], index: int):
        peer = slots[index]
        try:
            await self.probe(peer)
        except Exception as e:
            logger.error(f"[peercheck]: probe of {peer.uri} crashed: {e!r}")

    def dialer_for(self, protocol: Transport) -> Dialer | None:
        match protocol:
            case Transport.TCP | Transport.TLS:
                return self.dial_stream
            case Transport.QUIC:
                return self.dial_quic
            case _:
                return None

    async def probe(self, peer: Peer):
        """Dial ``peer`` once and record whether it is up and how fast it answered."""
        try:
            address = await resolve(peer.host, self.lookup)
        except ResolveError as e:
            logger.debug(f"[peercheck]: resolve error {e}, type {type(e.__cause__).__name__}")
            return

        dial = self.dialer_for(peer.protocol)
        if dial is None:
            logger.debug(f"[peercheck]: unsupported transport for {peer.uri}")
            return

        try:
            latency = await self.measure(dial, address, peer.port)
        except DialError as e:
            logger.debug(f"[peercheck]: connection error {e}, type {e.category}")
            return
        peer.mark_up(latency)

    async def measure(self, dial: Dialer, address: str, port: int) -> float:
        start = perf_counter()
        try:
            connection = dial(address, port, self.settings)
            await connection.__aenter__()
        except Exception as e:
            raise DialError(address, port, type(e).__name__) from e
        latency = perf_counter() - start

        # the peer already answered, a failed close does not make it dead
        try:
            await connection.__aexit__(None, None, None)
        except Exception as e:
            logger.debug(f"[peercheck]: closing {address}:{port} failed: {e!r}")
        return latency
