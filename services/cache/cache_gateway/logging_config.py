"""Root logger setup driven by the LOG_LEVEL setting.

LOG_LEVEL accepts either a plain level name ("debug", "WARNING") or a filter
expression in the "target=level,..." form used by the other services in the
deployment, e.g. "info,cache_gateway=debug". Only the bare default level of
such an expression is honoured here.
"""

import logging

DEFAULT_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# "trace" has no stdlib counterpart
_LEVEL_ALIASES = {
    "trace": logging.DEBUG,
    "warn": logging.WARNING,
    "off": logging.CRITICAL + 10,
}


def parse_log_level(value: str | None) -> int:
    """Resolve a LOG_LEVEL value to a stdlib logging level.

    Unknown or empty values fall back to INFO.
    """
    if not value:
        return DEFAULT_LEVEL

    level = DEFAULT_LEVEL
    for directive in value.split(","):
        directive = directive.strip()
        if not directive or "=" in directive:
            continue
        level = _resolve_name(directive, default=level)
    return level


def _resolve_name(name: str, *, default: int) -> int:
    name = name.lower()
    if name in _LEVEL_ALIASES:
        return _LEVEL_ALIASES[name]
    resolved = logging.getLevelName(name.upper())
    if isinstance(resolved, int):
        return resolved
    return default


def setup_logging(level: int = DEFAULT_LEVEL) -> None:
    """Attach a stream handler to the root logger once and set its level."""
    root = logging.getLogger()
    root.setLevel(level)
    logging.getLogger("uvicorn.error").setLevel(level)
    if any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
