"""
Clausal session: the host-facing entry point.

What this module provides
- CommandLine: owns one Registry, a property sink, an optional listener and the
  application name/version. Definitions are added with define(), argument
  vectors are consumed with parse(), and the registered grammar renders itself
  as a rich help table.

Quick start
    from clausal import CommandLine

    cli = (
        CommandLine("copier", "1.0.0")
        .define("-f, --file, !fileNames..., #files to copy")
        .define("-q, --quiet, #no progress output")
    )
    for command in cli.parse(["-f", "a.txt,b.txt", "-q"]):
        print(command.name, command.values("fileNames"))

Design notes
- Sessions are independent: two CommandLine objects never share definitions,
  variables or suggestions.
- define(), listen() and clear() return the session for chaining.
- shell=True turns every fault into a rendered message on stderr followed by
  exit status 1; otherwise faults propagate to the caller.
"""
import sys
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .faults import CommandException, trigger
from .logs import get_logger
from .matcher import Matcher
from .properties import Properties
from .registry import Registry
from .tokenizer import tokenize
from .utils import Unset, coalesce, validate

logger = get_logger(__name__)


class CommandLine:
    """
    A definition registry plus the parser that consumes arguments against it.

    Parameters
    - name: application name (shown in help and fault headers).
    - version: application version string.
    - sink: property sink receiving -D<key> values (defaults to Properties()).
    - listener: callable receiving each Command as it is produced.
    - shell: print faults and exit instead of raising them.
    - colorful / fancy: fault and help rendering flags.
    """

    def __init__(
        self,
        name=Unset,
        version=Unset,
        *,
        sink=None,
        listener=None,
        shell=False,
        colorful=True,
        fancy=False,
    ):
        if name is not Unset:
            validate(name, "application name")
        if version is not Unset:
            validate(version, "application version")
        if sink is not None and not callable(getattr(sink, "set", None)):
            raise TypeError("CommandLine() sink must provide a set(key, value) method")
        if listener is not None and not callable(listener):
            raise TypeError("CommandLine() listener must be callable")

        self._name = coalesce(name, None)
        self._version = coalesce(version, None)
        self._sink = Properties() if sink is None else sink
        self._listener = listener
        self._registry = Registry()
        self.shell = shell
        self.colorful = colorful
        self.fancy = fancy

    @property
    def name(self):
        return self._name

    @property
    def version(self):
        return self._version

    @property
    def sink(self):
        return self._sink

    @property
    def listener(self):
        return self._listener

    @property
    def registry(self):
        return self._registry

    @property
    def definitions(self):
        """Distinct definitions in registration order."""
        return self._registry.unique()

    def trigger(self, fault, /, **options):
        """Surface fault using this session's rendering flags."""
        trigger(
            fault,
            shell=self.shell,
            colorful=self.colorful,
            fancy=self.fancy,
            prog=self._name or "clausal",
            **options,
        )

    def define(self, *source):
        """
        Compile and register one definition.

        Accepts either one comma-delimited string or several pre-split clauses:

            cli.define("file, !fileName, ?fileTypes..., #a file command")
            cli.define("file", "!fileName", r":[\\w,]+\\.txt")
        """
        if not source:
            raise TypeError("define() takes at least 1 argument (0 given)")
        try:
            self._registry.register(source[0] if len(source) == 1 else list(source))
        except CommandException as fault:
            self.trigger(fault)
        return self

    def listen(self, listener, /):
        """Replace the session listener (None removes it)."""
        if listener is not None and not callable(listener):
            raise TypeError("listen() argument must be callable or None")
        self._listener = listener
        return self

    def clear(self):
        """Forget every definition; safe to call repeatedly."""
        self._registry.clear()
        logger.debug("session %r cleared", self._name)
        return self

    def parse(self, arguments=Unset, listener=Unset, /):
        """
        Consume an argument vector and return the produced Commands.

        Parameters
        - arguments:
          • Unset: read sys.argv[1:].
          • str: shell-like string; split with shlex.split.
          • Sequence[str]: the argument vector as delivered to the process.
        - listener: overrides the session listener for this call only.

        Raises
        - ValidationError, MissingError, UnsupportedError, MatchError (library
          mode). Listener calls already made for earlier commands stand.
        """
        if arguments is Unset:
            arguments = sys.argv[1:]
        listener = coalesce(listener, self._listener)
        if listener is not None and not callable(listener):
            raise TypeError("parse() listener must be callable")

        try:
            tokens = tokenize(arguments)
            return Matcher(self._registry, self._sink, listener).match(tokens)
        except CommandException as fault:
            self.trigger(fault)

    def __rich__(self):
        """
        Build the help renderable.

        Palette keys
        - program-name, program-version, table-title, table, table-header
        - command, required-value, optional-value, pattern, description
        - panel-title

        Overrides are read from __main__.__styles__; colorful=False drops styling.
        """
        styles = defaultdict(str, {
            "program-name": "bold #FF4D94",  # magenta-pink brand pop
            "program-version": "bold #00E6FF",  # cyan version
            "table-title": "bold #FFFFFF",
            "table": "#4B5563",  # slate border
            "table-header": "bold #FFFFFF",
            "command": "bold #36C5F0",  # sky-blue names
            "required-value": "bold #FFD600",  # amber
            "optional-value": "italic #FFD600",
            "pattern": "#22C55E",  # green
            "description": "#9CA3AF",  # muted gray
            "panel-title": "bold #FF4D94",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self.colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not self.colorful:
                return Text(str(fragment))
            return Text(str(fragment), style)

        def values(definition):
            required = styler("required-value")
            optional = styler("optional-value")
            parts = [text("<%s>" % name, required) for name in definition.required]
            if definition.required_list:
                parts.append(text("<%s...>" % definition.required_list, required))
            parts.extend(text("[%s]" % name, optional) for name in definition.optional)
            if definition.optional_list:
                parts.append(text("[%s...]" % definition.optional_list, optional))
            if definition.regex is not None:
                parts.append(text("~ %s" % definition.regex, styler("pattern")))
            return Text(" ").join(parts)

        renders = []
        if self._name:
            header = text(self._name, styler("program-name"))
            if self._version:
                header = Text.assemble(header, " ", text(self._version, styler("program-version")))
            renders.append(header)

        table = Table(
            "name", "values", "description",
            title=text("commands", styler("table-title")),
            box=ROUNDED,
            style=styler("table"),
            header_style=styler("table-header"),
        )
        for definition in self._registry.unique():
            table.add_row(
                Text(" | ").join(text(name, styler("command")) for name in definition.names),
                values(definition),
                text(definition.description, styler("description")),
            )
        renders.append(table)

        renderable = Group(*renders)
        if self.fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[ ", "%s HELP" % (self._name or "clausal").upper(), " ]", style=styler("panel-title")),
                title_align="left",
            )
        return renderable

    def help(self, console=None):
        """Print the registered definitions as a table."""
        (console or Console()).print(self)

    def __repr__(self):
        return "command-line(name=%r, version=%r, definitions=%d)" % (self._name, self._version, len(self._registry))


__all__ = (
    "CommandLine",
)
