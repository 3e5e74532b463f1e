import logging
import sys
from pathlib import Path
from typing import List

import click

from phylonetview.config import (
    DEFAULT_HEIGHT,
    DEFAULT_MARGIN,
    DEFAULT_WIDTH,
    ENV_PREFIX,
    LOG_FORMAT,
    LOG_LEVEL,
)
from phylonetview.exceptions import PhyloNetViewError
from phylonetview.io import read_newick_trees, write_layout_json, write_png, write_svg
from phylonetview.render import NetworkDiagram

logger = logging.getLogger(__name__)


def output_paths(out: str, fmt: str, count: int) -> List[str]:
    """
    Target path for each tree. A directory becomes ``<dir>/{0}.<fmt>``; several
    trees need a ``{0}`` placeholder, which is otherwise appended before the
    suffix.
    """
    if Path(out).is_dir():
        out = str(Path(out) / f"{{0}}.{fmt}")
    if count > 1 and "{0}" not in out:
        path = Path(out)
        out = str(path.with_name(f"{path.stem}_{{0}}{path.suffix}"))
    return [out.format(i) for i in range(count)]


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.argument("out")
@click.option(
    "--width", type=float, default=DEFAULT_WIDTH, envvar=ENV_PREFIX + "WIDTH", show_default=True
)
@click.option(
    "--height", type=float, default=DEFAULT_HEIGHT, envvar=ENV_PREFIX + "HEIGHT", show_default=True
)
@click.option(
    "--margin", type=float, default=DEFAULT_MARGIN, envvar=ENV_PREFIX + "MARGIN", show_default=True
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["svg", "png", "json"]),
    default="svg",
    show_default=True,
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=LOG_LEVEL,
    envvar=ENV_PREFIX + "LOG_LEVEL",
    show_default=True,
)
def export(path, out, width, height, margin, fmt, log_level):
    """Lay out the Newick tree(s) in PATH and write them to OUT."""
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)

    diagram = NetworkDiagram(width=width, height=height, margin=margin)
    try:
        trees = read_newick_trees(path)
        for tree, target in zip(trees, output_paths(out, fmt, len(trees))):
            if fmt == "svg":
                write_svg(tree, target, diagram)
            elif fmt == "png":
                write_png(tree, target, diagram)
            else:
                write_layout_json(tree, target, width, height)
            logger.info("Wrote %s", target)
    except PhyloNetViewError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    export()
