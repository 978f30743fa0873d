import socket

import pytest

from peercheck.errors import ResolveError
from peercheck.resolver import resolve


async def no_lookup(host):
    raise AssertionError(f"unexpected lookup of {host}")


@pytest.mark.asyncio
class TestResolve:
    async def test_first_address_wins(self):
        async def lookup(host):
            assert host == "example.com"
            return ["93.184.216.34", "2606:2800:220:1:248:1893:25c8:1946"]

        assert await resolve("example.com", lookup) == "93.184.216.34"

    async def test_bracketed_literal_skips_lookup(self):
        assert await resolve("[2001:4860:4860::8888]", no_lookup) == "2001:4860:4860::8888"

    async def test_bracketed_content_is_not_validated(self):
        assert await resolve("[definitely.not.resolvable.invalid]", no_lookup) == "definitely.not.resolvable.invalid"

    async def test_lookup_error_becomes_resolve_error(self):
        cause = socket.gaierror(socket.EAI_NONAME, "Name or service not known")

        async def lookup(host):
            raise cause

        with pytest.raises(ResolveError) as excinfo:
            await resolve("nowhere.invalid", lookup)
        assert excinfo.value.host == "nowhere.invalid"
        assert excinfo.value.__cause__ is cause

    async def test_empty_answer_is_an_error(self):
        async def lookup(host):
            return []

        with pytest.raises(ResolveError):
            await resolve("example.com", lookup)

    async def test_default_lookup_resolves_localhost_literal(self):
        assert await resolve("127.0.0.1") == "127.0.0.1"
