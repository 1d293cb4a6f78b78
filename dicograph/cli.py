"""Command-line interface."""

import logging
import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Mapping, Optional, Tuple

from dicograph.config import RunConfig
from dicograph.dictionary import load_graph, load_path
from dicograph.graph import Graph
from dicograph.logs import fatal, setup_logging
from dicograph.reduction import PASSES, reduce_graph
from dicograph.render import summary
from dicograph.selftest import run_selftest


def main():
    parser, commands = get_parser()
    args = parser.parse_args()
    if args.command == "help":
        if args.help_target:
            commands[args.help_target].print_help()
        else:
            parser.print_help()
        return

    log_level = logging.WARNING
    if args.verbose and args.verbose == 1:
        log_level = logging.INFO
    elif args.verbose and args.verbose >= 2:
        log_level = logging.DEBUG
    exit_level = logging.ERROR
    # Self-test failures are reported through the exit status instead.
    if args.keep_going or args.command == "selftest":
        exit_level = logging.FATAL
    setup_logging(sys.stderr, log_level, exit_level)

    command = globals()[f"command_{args.command}"]
    assert command, "unexpected command name"
    sys.exit(command(args))


def get_parser() -> Tuple[ArgumentParser, Mapping[str, ArgumentParser]]:
    parser = ArgumentParser(
        prog="dg", description="reduce a dictionary to its essential words"
    )
    commands = parser.add_subparsers(metavar="command", dest="command", required=True)

    parser_help = commands.add_parser("help", help="show this help message and exit")
    parser_help.add_argument(
        metavar="command",
        dest="help_target",
        nargs="?",
        help="get help for a specific command",
    )

    parser_reduce = commands.add_parser("reduce", help="find the essential words")
    parser_reduce.add_argument(
        "-p",
        "--pass",
        dest="passes",
        action="append",
        choices=PASSES.keys(),
        help="reduction to apply (can use multiple times, default: basic)",
    )
    parser_reduce.add_argument(
        "-c",
        "--config",
        type=Path,
        help=f"config file (default: {RunConfig.FILENAME})",
    )
    parser_reduce.add_argument(
        "--dot", action="store_true", help="also print the essential graph"
    )

    parser_dot = commands.add_parser("dot", help="print the graph for dot")
    parser_dot.add_argument(
        "-r", "--reduce", action="store_true", help="reduce the graph first"
    )
    parser_dot.add_argument(
        "-c",
        "--config",
        type=Path,
        help=f"config file (default: {RunConfig.FILENAME})",
    )

    for subparser in [parser_reduce, parser_dot]:
        subparser.add_argument(
            "file",
            nargs="?",
            default="-",
            help="dictionary of word pairs (default: stdin)",
        )

    parser_selftest = commands.add_parser(
        "selftest", help="check the reductions on a reference graph"
    )

    for subparser in [parser_reduce, parser_dot, parser_selftest]:
        subparser.add_argument(
            "-k",
            "--keep-going",
            action="store_true",
            help="keep going if there are errors",
        )
        subparser.add_argument(
            "-v",
            "--verbose",
            action="count",
            help="increase logging (can use multiple times)",
        )

    return parser, commands.choices


def read_dictionary(file: str) -> Graph[str]:
    if file == "-":
        logging.info("reading dictionary from stdin")
        try:
            return load_graph(sys.stdin)
        except UnicodeDecodeError as ex:
            fatal("cannot decode stdin: %s", ex)
    return load_path(Path(file))


def command_reduce(args: Namespace) -> Optional[int]:
    cfg = RunConfig.find(args.config)
    passes = args.passes or cfg.passes
    graph = read_dictionary(args.file)
    words, links = graph.num_vertices(), graph.num_edges()
    reduce_graph(graph, passes, cfg["max_rounds"])
    print(summary(words, links, graph.num_vertices()), end="")
    if args.dot or cfg["graphviz"]:
        print(graph.graphviz(), end="")
    return None


def command_dot(args: Namespace) -> Optional[int]:
    graph = read_dictionary(args.file)
    if args.reduce:
        cfg = RunConfig.find(args.config)
        reduce_graph(graph, cfg.passes, cfg["max_rounds"])
    print(graph.graphviz(), end="")
    return None


def command_selftest(args: Namespace) -> Optional[int]:
    del args  # unused
    return run_selftest()
