"""Noir playground: run toolchain commands against submitted source in a sandbox."""

from __future__ import annotations

__version__ = "0.1.0"
