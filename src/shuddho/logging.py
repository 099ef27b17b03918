import logging
import sys
from typing import TextIO

APP_NAMESPACE = "shuddho"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the application namespace."""
    if name != APP_NAMESPACE and not name.startswith(f"{APP_NAMESPACE}."):
        name = f"{APP_NAMESPACE}.{name}"
    return logging.getLogger(name)


class _OnlyAppOrThirdPartyWarnings(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        name = getattr(record, "name", "") or ""
        if name == APP_NAMESPACE or name.startswith(f"{APP_NAMESPACE}."):
            return True
        return record.levelno >= logging.WARNING


def setup_logging(
    level: int | str = "WARNING",
    *,
    stream: TextIO | None = None,
    include_time: bool = True,
    quiet_third_party: bool = True,
) -> None:
    """Configure root logging.

    Parameters
    ----------
    level:
        Log level as int or name (e.g., "DEBUG"). Defaults to "WARNING" so the
        interactive console stays readable.
    stream:
        Where records go. Defaults to stderr: stdout belongs to the console
        renderer and to the MCP stdio transport.
    include_time:
        Whether to include timestamps in log records.
    quiet_third_party:
        If true, only WARNING+ records from non-``shuddho`` loggers pass
        (google-genai, httpx, mcp, ...).
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Re-configuring must not duplicate output
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=stream or sys.stderr)

    parts = ["%(asctime)s"] if include_time else []
    parts.extend(["%(levelname)s", "%(name)s", "-", "%(message)s"])
    handler.setFormatter(logging.Formatter(fmt=" ".join(parts), datefmt="%Y-%m-%d %H:%M:%S"))

    if quiet_third_party:
        handler.addFilter(_OnlyAppOrThirdPartyWarnings())

    root.addHandler(handler)
