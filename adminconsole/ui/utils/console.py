#!/usr/bin/env python3
# adminconsole/ui/utils/console.py
from __future__ import annotations

import sys
import threading

# Single shared print mutex for all UI output (editor redraws and logging).
PRINT_MUTEX = threading.RLock()


def print_line(text: str = "", *, file=None, flush: bool = False) -> None:
    """Thread-safe single-line print that cooperates with the line editor."""
    stream = file or sys.stdout
    with PRINT_MUTEX:
        stream.write(f"{text}\n")
        if flush:
            stream.flush()
