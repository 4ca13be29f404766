import logging
import sys


class _ThirdPartyFilter(logging.Filter):
    """Only let warnings and errors through from chatty libraries."""

    _NOISY = ("sqlalchemy", "httpx", "httpcore", "multipart", "python_multipart",
              "asyncio", "watchfiles")

    def filter(self, record: logging.LogRecord) -> bool:
        root_name = record.name.split(".", 1)[0]
        if record.name == "py.warnings" or root_name in self._NOISY:
            return record.levelno >= logging.WARNING
        return True


def setup_logging(level: str | int = logging.INFO) -> None:
    """
    Configure the root logger with a single stderr handler.

    Call this once, before the first log line.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_ThirdPartyFilter())
    root.addHandler(ch)

    logging.captureWarnings(True)
