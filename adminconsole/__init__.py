#!/usr/bin/env python3
# adminconsole/__init__.py
from __future__ import annotations
"""
Interactive operator console for the license server and client hosts.

Keep this module free of eager imports; subpackages expose their APIs via
their own __init__.py files.
"""

__version__ = "1.0.0"
