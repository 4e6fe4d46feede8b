"""
pseudograph.formats
===================

Import formats producing the json graph exchange form.

- json_graph    : helpers on the exchange form itself.
- arrows        : ``a->b->c`` lines.
- matrix_market : MatrixMarket coordinate files.
"""

from __future__ import annotations

from . import json_graph
from .arrows import parse_arrows
from .matrix_market import parse_mtx

__all__ = ["json_graph", "parse_arrows", "parse_mtx"]
