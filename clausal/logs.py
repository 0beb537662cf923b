"""
Diagnostic logging for clausal.

Every module logs through a child of the "clausal" logger obtained with
get_logger(__name__). The package attaches a NullHandler, so a host that never
configures logging sees nothing; configure() installs a rich handler on the
package logger for interactive use.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT = "clausal"

logging.getLogger(ROOT).addHandler(logging.NullHandler())


def get_logger(name=ROOT):
    """Return the logger for a clausal module (names outside the package are nested under it)."""
    if name != ROOT and not name.startswith(ROOT + "."):
        name = "%s.%s" % (ROOT, name)
    return logging.getLogger(name)


def configure(level=logging.INFO, *, console=None, markup=False):
    """
    Route clausal diagnostics to a rich console handler.

    Calling it again replaces the handler installed by a previous call instead
    of stacking a second one. Returns the package logger.
    """
    logger = logging.getLogger(ROOT)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=markup,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


__all__ = (
    "get_logger",
    "configure",
)
