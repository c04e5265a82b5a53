"""Root logger setup for the portal client.

Level precedence, highest first: an explicit level (``--log-level``), the
``PORTAL_LOG_LEVEL`` variable, the debug flag (``PortalSettings.debug_logging``
or a truthy ``PORTAL_DEBUG``), then WARNING.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional, Union

LevelLike = Union[int, str, None]

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"
_DATEFMT = "%H:%M:%S"
_DEFAULT_LEVEL = logging.WARNING

# Transport loggers pulled in by requests; they log every connection at DEBUG.
_TRANSPORT_LOGGERS = ("urllib3", "requests")


def parse_level(value: LevelLike) -> Optional[int]:
    """Return a numeric level for a name or number, or None when unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else None


def env_debug_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    return (env.get("PORTAL_DEBUG") or "").strip().lower() in {"1", "true", "yes", "on"}


def resolve_level(
    requested: LevelLike = None,
    *,
    debug: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    env = os.environ if environ is None else environ
    for candidate in (requested, env.get("PORTAL_LOG_LEVEL")):
        level = parse_level(candidate)
        if level is not None:
            return level
    if debug or env_debug_enabled(env):
        return logging.DEBUG
    return _DEFAULT_LEVEL


def configure_root(requested: LevelLike = None, *, debug: bool = False) -> int:
    """Configure the root logger and return the effective level.

    Transport loggers stay at WARNING unless the effective level is DEBUG, so
    ``--log-level info`` shows portal messages without connection chatter.
    """
    level = resolve_level(requested, debug=debug)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=_FORMAT, datefmt=_DATEFMT)
    root.setLevel(level)

    transport_level = logging.DEBUG if level <= logging.DEBUG else max(level, logging.WARNING)
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
    return level


__all__ = ["configure_root", "env_debug_enabled", "parse_level", "resolve_level"]
