"""
pseudograph CLI - load a graph file and inspect or export it
"""

import json
import logging
from pathlib import Path

import click

from .config import get_settings
from .errors import GraphError
from .graph import Graph
from .logs import configure_logging

logger = logging.getLogger(__name__)

FORMATS = ("cypher", "arrows", "mtx", "json")
_SUFFIXES = {".mtx": "mtx", ".arrows": "arrows", ".json": "json"}


def load_graph(path, fmt=None):
    """Read `path` as the given format (guessed from the suffix when None)."""
    fmt = fmt or _SUFFIXES.get(Path(path).suffix.lower(), "cypher")
    text = Path(path).read_text(encoding="utf-8")
    logger.info("Loading %s as %s", path, fmt)
    if fmt == "arrows":
        return Graph.from_arrows(text)
    if fmt == "mtx":
        return Graph.from_mtx(text)
    if fmt == "json":
        return Graph.from_json(text)
    return Graph.from_pseudo_cypher(text)


def _load_or_fail(path, fmt):
    try:
        return load_graph(path, fmt)
    except GraphError as exc:
        raise click.ClickException(f"{path}: {exc}") from exc


@click.group()
@click.option("--debug", is_flag=True, help="Log at DEBUG level")
def cli(debug):
    """pseudograph - build and inspect graphs from pseudo-cypher and friends"""
    settings = get_settings()
    if debug:
        settings = settings.model_copy(update={"debug": True})
    configure_logging(settings)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "fmt", type=click.Choice(FORMATS), default=None, help="Input format")
def info(path, fmt):
    """Print node, edge and component counts and the shortest cycle"""
    g = _load_or_fail(path, fmt)
    cycle = g.get_cycle()
    click.echo(f"nodes: {g.node_count}")
    click.echo(f"edges: {g.edge_count}")
    click.echo(f"components: {len(g.get_components())}")
    click.echo(f"loops: {'yes' if g.has_loops else 'no'}")
    click.echo(f"shortest cycle: {' -> '.join(cycle) if cycle else 'none'}")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "fmt", type=click.Choice(FORMATS), default=None, help="Input format")
@click.option("--indent", default=2, help="JSON indentation")
def export(path, fmt, indent):
    """Print the graph in the json exchange form"""
    g = _load_or_fail(path, fmt)
    click.echo(json.dumps(g.to_json(), indent=indent, default=str))


def main():
    cli()


if __name__ == "__main__":
    main()
