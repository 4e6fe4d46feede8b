from __future__ import annotations

import logging
from typing import Sequence, Union

from ..errors import FormatError
from . import json_graph

logger = logging.getLogger(__name__)


def parse_arrows(source: Union[str, Sequence[str]]) -> json_graph.JsonGraph:
    """
    Parse arrow notation into a json graph.

    Every line is split on ``->``; a single item declares an isolated node,
    consecutive items become edges::

        a->b->c
        d
    """
    if isinstance(source, str):
        lines = source.split("\n")
    elif isinstance(source, Sequence) and all(isinstance(line, str) for line in source):
        lines = list(source)
    else:
        raise FormatError("Arrow input should be a string or a sequence of strings.")

    g = json_graph.empty()
    for line in lines:
        line = line.strip()
        if not line:
            continue
        ids = [part.strip() for part in line.split("->")]
        if any(not part for part in ids):
            raise FormatError(f"Empty node in arrow line {line!r}.")
        if len(ids) == 1:
            json_graph.add_node(g, ids[0])
            continue
        for source_id, target_id in zip(ids, ids[1:]):
            json_graph.add_edge(g, (source_id, target_id))
    logger.debug("Parsed arrows into %d nodes and %d edges", len(g["nodes"]), len(g["edges"]))
    return g
