from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

PEER_PATTERN = re.compile(r"(tcp|tls|quic)://([a-z0-9\.\-\:\[\]]+):([0-9]+)")


class Transport(str, Enum):
    TCP = "tcp"
    TLS = "tls"
    QUIC = "quic"
    UNSUPPORTED = "unsupported"

    @classmethod
    def parse(cls, scheme: str) -> Transport:
        try:
            transport = cls(scheme)
        except ValueError:
            return cls.UNSUPPORTED
        return transport


@dataclass
class Peer:
    uri: str
    protocol: Transport
    host: str
    port: int
    region: str = ""
    country: str = ""
    up: bool = False
    latency: float | None = None

    @classmethod
    def from_match(cls, match: re.Match, region: str = "", country: str = "") -> Peer:
        return cls(
            uri=match.group(0),
            protocol=Transport.parse(match.group(1)),
            host=match.group(2),
            port=int(match.group(3)),
            region=region,
            country=country,
        )

    @classmethod
    def from_uri(cls, uri: str, region: str = "", country: str = "") -> Peer:
        match = PEER_PATTERN.fullmatch(uri)
        if match is None:
            raise ValueError(f"not a peer uri: {uri!r}")
        return cls.from_match(match, region, country)

    @property
    def location(self) -> str:
        return f"{self.region}/{self.country}"

    @property
    def latency_ms(self) -> float | None:
        if self.latency is None:
            return None
        return self.latency * 1000

    def mark_up(self, latency: float):
        # written once, by the task that owns this peer
        if self.up:
            raise RuntimeError(f"peer {self.uri} already marked up")
        self.latency = latency
        self.up = True
