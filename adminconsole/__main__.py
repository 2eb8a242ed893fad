#!/usr/bin/env python3
# adminconsole/__main__.py
from __future__ import annotations
"""Entry point: python -m adminconsole [--host server|client]"""

import argparse
import asyncio
import contextlib
import signal
import sys
from typing import Optional, Sequence

from adminconsole.boot import boot_console
from adminconsole.interface import HOSTS


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="adminconsole", description="Interactive operator console.")
    parser.add_argument(
        "--host", choices=sorted(HOSTS), default=None,
        help="host profile (default: HOST from config, else 'server')")
    return parser.parse_args(argv)


async def _run(host: Optional[str]) -> None:
    state = boot_console(host)
    loop = asyncio.get_running_loop()
    with contextlib.suppress(NotImplementedError):
        loop.add_signal_handler(signal.SIGTERM, state.console.stop)
    await state.console.start()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        asyncio.run(_run(args.host))
    except (ValueError, ImportError):
        # Already reported by the failing boot step.
        return 2
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
