"""Runtime settings for a check run.

Every value can be overridden from the environment:

    PEERCHECK_CONNECT_TIMEOUT   seconds allowed for a TCP/TLS connect
    PEERCHECK_QUIC_TIMEOUT      seconds allowed for a QUIC handshake
    PEERCHECK_QUIC_ALPN         comma separated ALPN ids offered over QUIC
    PEERCHECK_LOG_LEVEL         logging level name for the command line
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from logging import getLevelName
from logging import getLogger
from typing import Mapping
from typing import Tuple

logger = getLogger(__name__)

DEFAULT_CONNECT_TIMEOUT = 5.0
DEFAULT_QUIC_TIMEOUT = 5.0
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    quic_timeout: float = DEFAULT_QUIC_TIMEOUT
    quic_alpn: Tuple[str, ...] = ()
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        if environ is None:
            environ = os.environ
        alpn = environ.get("PEERCHECK_QUIC_ALPN", "")
        return cls(
            connect_timeout=_positive_float(environ, "PEERCHECK_CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT),
            quic_timeout=_positive_float(environ, "PEERCHECK_QUIC_TIMEOUT", DEFAULT_QUIC_TIMEOUT),
            quic_alpn=tuple(name.strip() for name in alpn.split(",") if name.strip()),
            log_level=_level_name(environ.get("PEERCHECK_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        )


def _positive_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"[peercheck]: {name}={raw!r} is not a number, using {default}")
        return default
    if value <= 0:
        logger.warning(f"[peercheck]: {name}={raw!r} must be positive, using {default}")
        return default
    return value


def _level_name(raw: str) -> str:
    level = raw.strip().upper()
    if not isinstance(getLevelName(level), int):
        logger.warning(f"[peercheck]: unknown log level {raw!r}, using {DEFAULT_LOG_LEVEL}")
        return DEFAULT_LOG_LEVEL
    return level
