"""
Logging setup for the ``style-rebaser`` command line.

Library modules only log to ``log``; ``setup_logging`` picks one console
formatter:

* GitHub Actions: plain text, warnings and errors become ``::warning::`` /
  ``::error::`` annotations
* colorlog installed: coloured levels, and message tags coloured by the
  stage that logged them
* otherwise: plain text
"""

import logging
import os
from pathlib import Path

try:
    import colorlog
    from colorlog.escape_codes import parse_colors
    _COLORLOG_AVAILABLE = True
except ImportError:
    _COLORLOG_AVAILABLE = False

log = logging.getLogger("style-rebaser")

_CONSOLE_FMT = "%(asctime)s [%(levelname)s] %(message)s"
_CONSOLE_DATEFMT = "%H:%M:%S"
_FILE_FMT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Message tags, grouped by the stage that logs them, and the colorlog
# colour used for each stage
TAGS_BY_STAGE: dict[str, tuple[str, ...]] = {
    "lookup":  ("[LISTDIR]", "[RESOLVE]", "[INDEX]"),
    "rewrite": ("[REBASE]", "[SKIP]"),
    "output":  ("[SAVE]",),
    "problem": ("[MISSING]", "[AMBIGUOUS]"),
}
_STAGE_COLOURS: dict[str, str] = {
    "lookup":  "cyan",
    "rewrite": "purple",
    "output":  "green",
    "problem": "bold_yellow",
}
_LEVEL_COLOURS: dict[str, str] = {
    "DEBUG":    "cyan",
    "INFO":     "green",
    "WARNING":  "yellow",
    "ERROR":    "red",
    "CRITICAL": "bold_red",
}


def running_in_ci() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


class WorkflowCommandFormatter(logging.Formatter):
    """Prefixes warnings and errors with GitHub Actions workflow commands,
    so a missing or ambiguous import shows up as a job annotation."""

    _COMMANDS: dict[int, str] = {
        logging.WARNING:  "::warning::",
        logging.ERROR:    "::error::",
        logging.CRITICAL: "::error::",
    }

    def format(self, record: logging.LogRecord) -> str:
        return self._COMMANDS.get(record.levelno, "") + super().format(record)


if _COLORLOG_AVAILABLE:
    class TagColourFormatter(colorlog.ColoredFormatter):
        """``colorlog`` formatter that also colours the stage tags."""

        _reset = parse_colors("reset")
        _tag_styles = {
            tag: parse_colors(_STAGE_COLOURS[stage])
            for stage, tags in TAGS_BY_STAGE.items()
            for tag in tags
        }

        def format(self, record: logging.LogRecord) -> str:
            message = super().format(record)
            for tag, style in self._tag_styles.items():
                if tag in message:
                    message = message.replace(tag, f"{style}{tag}{self._reset}")
            return message


def _console_formatter() -> logging.Formatter:
    if running_in_ci():
        return WorkflowCommandFormatter(_CONSOLE_FMT, datefmt=_CONSOLE_DATEFMT)
    if _COLORLOG_AVAILABLE:
        return TagColourFormatter(
            "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(message)s",
            datefmt=_CONSOLE_DATEFMT,
            log_colors=_LEVEL_COLOURS,
        )
    return logging.Formatter(_CONSOLE_FMT, datefmt=_CONSOLE_DATEFMT)


def setup_logging(debug: bool = False, log_file: str | None = None) -> None:
    """Attach console (and optional file) handlers to the package logger.

    Calling it again replaces the handlers of the previous call.  The file
    handler always records DEBUG messages, whatever *debug* says.
    """
    log.setLevel(logging.DEBUG if debug or log_file else logging.INFO)
    log.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG if debug else logging.INFO)
    console.setFormatter(_console_formatter())
    log.addHandler(console)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FMT))
        log.addHandler(file_handler)
        log.info("Logging to file: %s", log_path.resolve())
