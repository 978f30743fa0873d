from peercheck.config import Settings
from peercheck.errors import DialError
from peercheck.errors import DirectoryReadError
from peercheck.errors import PeerCheckError
from peercheck.errors import ResolveError
from peercheck.finder import DirectoryFinder
from peercheck.finder import StaticFinder
from peercheck.main import Checker
from peercheck.peer import Peer
from peercheck.peer import Transport
from peercheck.report import render_report
from peercheck.resolver import resolve

__all__ = [
    "Checker",
    "DialError",
    "DirectoryFinder",
    "DirectoryReadError",
    "Peer",
    "PeerCheckError",
    "ResolveError",
    "Settings",
    "StaticFinder",
    "Transport",
    "render_report",
    "resolve",
]
