"""
W-2 vs 1099 take-home calculator for Los Angeles, CA.

The engine lives in :mod:`takehome.core`; :mod:`takehome.main` exposes it over
HTTP and as a command line tool.
"""
from __future__ import annotations

__version__ = "0.1.0"
