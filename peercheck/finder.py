import os
from asyncio import to_thread
from logging import getLogger
from typing import Iterable
from typing import List

from peercheck.errors import DirectoryReadError
from peercheck.peer import Peer
from peercheck.peer import PEER_PATTERN

logger = getLogger(__name__)

IGNORED_REGIONS = (".git", "other")
COUNTRY_SUFFIX = ".md"


class BaseFinder(object):
    async def get_all_peers(self) -> List[Peer]:
        raise NotImplementedError("Subclasses must implement this method")


class StaticFinder(BaseFinder):
    def __init__(self, peers: List[Peer]) -> None:
        self.all_peers: List[Peer] = peers

    async def get_all_peers(self) -> List[Peer]:
        return self.all_peers


def peers_in_text(text: str, region: str = "", country: str = "") -> List[Peer]:
    return [Peer.from_match(match, region, country) for match in PEER_PATTERN.finditer(text)]


class DirectoryFinder(BaseFinder):
    """Reads peers out of a public peers repository.

    The layout is ``<root>/<region>/<country>.md``; every connection uri found
    in a country file becomes a peer tagged with its region and country.
    ``regions`` and ``countries`` narrow the scan when given.
    """

    def __init__(
        self,
        root: str,
        regions: Iterable[str] | None = None,
        countries: Iterable[str] | None = None,
    ) -> None:
        self.root = root
        self.regions = list(regions) if regions else []
        self.countries = list(countries) if countries else []

    def _list(self, path: str) -> List[os.DirEntry]:
        try:
            with os.scandir(path) as entries:
                return sorted(entries, key=lambda entry: entry.name)
        except OSError as e:
            raise DirectoryReadError(path) from e

    def _layout(self) -> tuple[List[str], List[str]]:
        all_regions: List[str] = []
        all_countries: set[str] = set()
        for entry in self._list(self.root):
            if entry.name in IGNORED_REGIONS or not entry.is_dir():
                continue
            all_regions.append(entry.name)
            for country in self._list(entry.path):
                if country.name.endswith(COUNTRY_SUFFIX):
                    all_countries.add(country.name)
        return all_regions, sorted(all_countries)

    def _read(self, path: str) -> str:
        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError as e:
            raise DirectoryReadError(path) from e

    async def get_all_peers(self) -> List[Peer]:
        return await to_thread(self.scan)

    def scan(self) -> List[Peer]:
        all_regions, all_countries = self._layout()
        regions = [region for region in all_regions if not self.regions or region in self.regions]
        countries = [country for country in all_countries if not self.countries or country in self.countries]

        peers: List[Peer] = []
        for region in regions:
            for country in countries:
                country_file = os.path.join(self.root, region, country)
                if not os.path.isfile(country_file):
                    continue
                found = peers_in_text(self._read(country_file), region, country)
                logger.debug(f"[peercheck]: {len(found)} peers in {region}/{country}")
                peers.extend(found)

        logger.info(f"[peercheck]: found {len(peers)} peers under {self.root}")
        return peers
