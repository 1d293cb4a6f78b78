"""Dictionary file reader.

A dictionary is a whitespace-separated stream of word pairs. Each pair
(source, destination) means the definition of source refers to destination.
Line breaks carry no meaning; tokens are simply paired up in order.
"""

import logging
from pathlib import Path
from typing import Iterator, TextIO, Tuple

from dicograph.graph import Graph
from dicograph.logs import fatal


def read_pairs(stream: TextIO) -> Iterator[Tuple[str, str]]:
    """Yield (source, destination) pairs of tokens from stream.

    A final token without a partner is ignored with a warning.
    """
    pending = None
    for line in stream:
        for token in line.split():
            if pending is None:
                pending = token
            else:
                yield pending, token
                pending = None
    if pending is not None:
        logging.warning("ignoring unpaired word %r at end of input", pending)


def load_graph(stream: TextIO) -> Graph[str]:
    """Build the word-dependency graph of the dictionary in stream."""
    graph: Graph[str] = Graph()
    for src, dest in read_pairs(stream):
        graph.insert_vertex(src)
        graph.insert_vertex(dest)
        graph.insert_edge(src, dest)
    logging.info("loaded %r", graph)
    return graph


def load_path(path: Path) -> Graph[str]:
    """Build the word-dependency graph of the dictionary file at path.

    The file must be UTF-8. Exits with a fatal log if it cannot be read or
    decoded.
    """
    logging.info("reading dictionary %s", path)
    try:
        with open(path, encoding="utf-8") as f:
            return load_graph(f)
    except UnicodeDecodeError as ex:
        fatal("cannot decode %s: %s", path, ex)
    except OSError as ex:
        fatal("cannot read %s: %s", path, ex.strerror or ex)
