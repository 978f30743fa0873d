from datetime import datetime
from typing import Iterable
from typing import List

from rich.console import Console
from rich.table import Table
from rich.text import Text

from peercheck.peer import Peer

RFC1123 = "%a, %d %b %Y %H:%M:%S %Z"
MEASURE_WIDTH = 10_000


def report_date(now: datetime | None = None) -> str:
    now = now or datetime.now().astimezone()
    return now.strftime(RFC1123)


def split_peers(peers: Iterable[Peer]) -> tuple[List[Peer], List[Peer]]:
    """Dead peers in input order, alive peers fastest first."""
    peers = list(peers)
    dead = [peer for peer in peers if not peer.up]
    alive = sorted((peer for peer in peers if peer.up), key=lambda peer: peer.latency)
    return dead, alive


def _table(*columns: str) -> Table:
    table = Table(box=None, show_edge=False, pad_edge=False, header_style="bold")
    for column in columns:
        table.add_column(column, no_wrap=True)
    return table


def print_table(console: Console, table: Table):
    """Print ``table`` at its natural width, even past the console's edge.

    URIs are the peers' identity, so no cell is ever ellipsized.
    """
    needed = console.measure(table, options=console.options.update_width(MEASURE_WIDTH)).maximum
    width = console.width
    if needed > width:
        console.width = needed
    try:
        console.print(table, crop=False)
    finally:
        console.width = width


def render_report(peers: List[Peer], console: Console | None = None):
    console = console or Console()
    dead, alive = split_peers(peers)

    console.print("Dead peers:")
    dead_table = _table("URI", "Location")
    for peer in dead:
        dead_table.add_row(Text(peer.uri), Text(peer.location))
    print_table(console, dead_table)

    console.print("\n\nAlive peers (sorted by latency):")
    alive_table = _table("URI", "Latency (ms)", "Location")
    for peer in alive:
        alive_table.add_row(Text(peer.uri), f"{peer.latency_ms:.3f}", Text(peer.location))
    print_table(console, alive_table)
