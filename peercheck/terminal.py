import os
import sys
from asyncio import run
from logging import basicConfig
from logging import getLogger
from typing import List

from rich.console import Console
from rich.logging import RichHandler

from peercheck.config import Settings
from peercheck.errors import DirectoryReadError
from peercheck.finder import DirectoryFinder
from peercheck.main import Checker
from peercheck.report import render_report
from peercheck.report import report_date

logger = getLogger(__name__)


def setup_logging(level: str):
    FORMAT = "%(message)s"
    basicConfig(
        level=level,
        format=FORMAT,
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True))],
    )


def usage(prog: str, console: Console):
    console.print(f"Usage: {prog} [path to public_peers repository on a disk]", markup=False)
    console.print(f"I.e.:  {prog} ~/Projects/yggdrasil/public_peers", markup=False)


async def check_directory(root: str, settings: Settings, console: Console) -> bool:
    checker = Checker(finders=[DirectoryFinder(root)], settings=settings)
    try:
        peers = await checker.find_peers()
    except DirectoryReadError as e:
        logger.debug(f"[peercheck]: {e}, cause {e.__cause__!r}")
        console.print(f"Can't find peers in a directory: {root}", markup=False)
        return False

    console.print(f"Report date: {report_date()}")
    await checker.check(peers)
    render_report(peers, console)
    return True


def entrypoint(argv: List[str] | None = None, console: Console | None = None) -> int:
    argv = sys.argv if argv is None else argv
    console = console or Console()
    prog = os.path.basename(argv[0]) if argv else "peercheck"

    if len(argv) != 2:
        usage(prog, console)
        return 0

    settings = Settings.from_env()
    setup_logging(settings.log_level)
    run(check_directory(argv[1], settings, console))
    return 0


def main():
    sys.exit(entrypoint())


if __name__ == "__main__":
    main()
