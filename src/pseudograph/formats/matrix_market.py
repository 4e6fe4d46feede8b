"""
MatrixMarket coordinate import.

Only the coordinate body is used: the header must name the format, the
dimension line is skipped and every remaining line is ``row col [value]``.
Row and column labels become node ids as written.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from ..errors import FormatError
from . import json_graph

logger = logging.getLogger(__name__)

HEADER_MARKER = "%MatrixMarket"


def _to_number(token: str) -> Union[int, float]:
    try:
        return int(token)
    except ValueError:
        pass
    try:
        return float(token)
    except ValueError:
        raise FormatError(f"Invalid MatrixMarket value {token!r}.") from None


def parse_mtx(source: Union[str, Sequence[str]]) -> Optional[json_graph.JsonGraph]:
    if isinstance(source, str):
        lines = source.split("\n")
    elif isinstance(source, Sequence) and all(isinstance(line, str) for line in source):
        lines = list(source)
    else:
        raise FormatError("MatrixMarket input should be a string or a sequence of strings.")

    lines = [line.strip() for line in lines]
    lines = [line for line in lines if line]
    if not lines:
        return None
    if HEADER_MARKER not in lines[0]:
        raise FormatError("Not a MatrixMarket file: missing '%MatrixMarket' header.")

    g = json_graph.empty()
    body = [line for line in lines[1:] if not line.startswith("%")]
    # first non-comment line holds the dimensions
    for line in body[1:]:
        tokens = line.split()
        if len(tokens) < 2:
            raise FormatError(f"Invalid MatrixMarket entry {line!r}.")
        edge = {"sourceId": tokens[0], "targetId": tokens[1]}
        if len(tokens) > 2:
            edge["weight"] = _to_number(tokens[2])
        json_graph.add_edge(g, edge)
    logger.debug("Parsed MatrixMarket body into %d edges", len(g["edges"]))
    return g
