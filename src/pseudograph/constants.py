"""Type-name sentinels shared by the graph model and the parsers."""

THING_TYPE = "Thing"
UNKNOWN_TYPE = "Unknown"
GENERIC_LINK_TYPE = "Link"
GRAPH_TYPE = "Graph"
