"""Text output for graphs and reduction results."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from jinja2 import Environment, PackageLoader

if TYPE_CHECKING:
    # pylint: disable=cyclic-import
    from dicograph.graph import Graph


class Renderer:

    """Renders the templates in dicograph/templates.

    The output is plain text, so there is no autoescaping. Block tags sit on
    their own lines in the templates and trim_blocks removes those lines.
    """

    def __init__(self):
        self.env = Environment(
            loader=PackageLoader("dicograph", "templates"),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.graph_template = self.env.get_template("graph.dot.jinja")
        self.summary_template = self.env.get_template("summary.txt.jinja")

    def graphviz(self, graph: Graph) -> str:
        to_str = graph.to_str
        return self.graph_template.render(
            vertices=[to_str(u) for u in graph],
            edges=[(to_str(u), to_str(v)) for u, v in graph.edges()],
        )

    def summary(self, words: int, links: int, essential: int) -> str:
        return self.summary_template.render(
            words=words, links=links, essential=essential
        )


@lru_cache(maxsize=None)
def renderer() -> Renderer:
    """Return the shared renderer, loading the templates on first use."""
    return Renderer()


def graphviz(graph: Graph) -> str:
    """Return a description of graph for the dot command.

    Vertices come first, then edges, each on its own line and in ascending
    order. Vertices are converted to text with graph.to_str.
    """
    return renderer().graphviz(graph)


def summary(words: int, links: int, essential: int) -> str:
    """Return the two-line summary of a dictionary reduction."""
    return renderer().summary(words, links, essential)
