from asyncio import get_running_loop
from logging import getLogger
from typing import Awaitable
from typing import Callable
from typing import List

from peercheck.errors import ResolveError

logger = getLogger(__name__)

Lookup = Callable[[str], Awaitable[List[str]]]


async def dns_lookup(host: str) -> List[str]:
    loop = get_running_loop()
    infos = await loop.getaddrinfo(host, None)
    return [info[4][0] for info in infos]


async def resolve(host: str, lookup: Lookup | None = None) -> str:
    """Turn a peer host into one dialable address.

    Bracketed literals such as ``[2001:db8::1]`` are returned without the
    brackets and never touch DNS. Anything else is looked up and the first
    answer wins.
    """
    if host.startswith("[") and host.endswith("]"):
        return host[1:-1]

    lookup = lookup or dns_lookup
    try:
        addresses = await lookup(host)
    except (OSError, UnicodeError) as e:
        raise ResolveError(host, str(e)) from e
    if not addresses:
        raise ResolveError(host, "no addresses returned")
    logger.debug(f"[peercheck]: {host} resolved to {addresses[0]}")
    return str(addresses[0])
