"""
Try definitions from the shell.

    python -m clausal "file, !name, #Load a file" "quit" -- file=a.txt quit

Every argument before "--" is one definition; everything after it is the
argument vector parsed against them. The produced commands are pretty-printed;
a fault is rendered on stderr with exit status 1. Set CLAUSAL_DEBUG to any
value to see the matcher's diagnostics.
"""
import logging
import os
import sys

from rich.console import Console
from rich.pretty import pprint

from . import __title__, __version__
from .logs import configure
from .session import CommandLine

SEPARATOR = "--"


def main(argv=None):
    argv = sys.argv[1:] if argv is None else list(argv)
    console = Console()

    if SEPARATOR not in argv:
        console.print("usage: python -m %s DEFINITION... -- ARGUMENT..." % __title__)
        return 2

    cut = argv.index(SEPARATOR)
    sources, arguments = argv[:cut], argv[cut + 1:]

    if os.environ.get("CLAUSAL_DEBUG"):
        configure(logging.DEBUG)

    cli = CommandLine(__title__, __version__, shell=True)
    for source in sources:
        cli.define(source)

    if not arguments:
        cli.help(console)
        return 0

    for command in cli.parse(arguments):
        pprint(command, console=console, expand_all=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
