"""Logging configuration shared by the library and the preview server."""

from __future__ import annotations

import logging

from legaldoc.config import LEGALDOC_LOG_LEVEL

_ROOT_LOGGER_NAME = "legaldoc"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _ExtraFormatter(logging.Formatter):
    """Append structured ``extra`` fields to the rendered message."""

    _RESERVED = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {key: value for key, value in record.__dict__.items() if key not in self._RESERVED}
        if not extras:
            return base
        rendered = " ".join(f"{key}={value!r}" for key, value in sorted(extras.items()))
        return f"{base} [{rendered}]"


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a single stream handler to the package root logger.

    Calling it again only updates the level.
    """
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.setLevel(getattr(logging, (level or LEGALDOC_LOG_LEVEL).upper(), logging.INFO))
    if not any(getattr(handler, "_legaldoc", False) for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(_ExtraFormatter(_LOG_FORMAT))
        handler._legaldoc = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``legaldoc`` hierarchy.

    Modules outside the package (``server.*``) are nested under it so they
    share the same handler.
    """
    configure_logging()
    if name == _ROOT_LOGGER_NAME or name.startswith(_ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")
