# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Process-wide switches read from the environment.

``CLAUSE_DISABLED``
    Any of ``1``/``true``/``yes`` bypasses validation in every wrapper.
``CLAUSE_FAILURE_MODE``
    ``raise`` (default), ``log`` or ``abort``: the failure callback given to
    contracts built without an explicit ``on_failure``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

from ..validation.policy import FAILURE_MODES, RAISE

logger = logging.getLogger(__name__)

ENV_DISABLED = "CLAUSE_DISABLED"
ENV_FAILURE_MODE = "CLAUSE_FAILURE_MODE"

_FALSEY = ("", "0", "false", "no", "off")

_enabled_override: Optional[bool] = None


@dataclass(frozen=True)
class Settings:
    enabled: bool = True
    failure_mode: str = RAISE


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build a :class:`Settings` snapshot from *environ* (defaults to ``os.environ``)."""

    if environ is None:
        return _environment_settings()
    return _parse(environ)


@lru_cache(maxsize=1)
def _environment_settings() -> Settings:
    return _parse(os.environ)


def _parse(environ: Mapping[str, str]) -> Settings:
    disabled = environ.get(ENV_DISABLED, "0").strip().lower() not in _FALSEY
    mode = environ.get(ENV_FAILURE_MODE, RAISE).strip().lower() or RAISE
    if mode not in FAILURE_MODES:
        logger.warning("Ignoring %s=%r; expected one of %s", ENV_FAILURE_MODE, mode, ", ".join(FAILURE_MODES))
        mode = RAISE
    return Settings(enabled=not disabled, failure_mode=mode)


def reload_settings() -> Settings:
    """Forget the cached environment snapshot and read it again."""

    _environment_settings.cache_clear()
    return _environment_settings()


def set_enabled(enabled: Optional[bool]) -> None:
    """Force validation on or off for the whole process; ``None`` defers to the environment."""

    global _enabled_override
    _enabled_override = enabled


def is_enabled() -> bool:
    if _enabled_override is not None:
        return _enabled_override
    return _environment_settings().enabled


__all__ = [
    "ENV_DISABLED",
    "ENV_FAILURE_MODE",
    "Settings",
    "is_enabled",
    "load_settings",
    "reload_settings",
    "set_enabled",
]
