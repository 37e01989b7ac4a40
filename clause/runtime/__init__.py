"""Runtime package - call binding, guarded checks and wrapper construction."""

from .binding import BoundCall, CallLayout
from .guard import check_arguments, check_return
from .settings import (
    ENV_DISABLED,
    ENV_FAILURE_MODE,
    Settings,
    is_enabled,
    load_settings,
    reload_settings,
    set_enabled,
)
from .wrapping import DEFAULT_BLOCK_PARAM, resolve_abort, wrap_callable

__all__ = [
    "DEFAULT_BLOCK_PARAM",
    "ENV_DISABLED",
    "ENV_FAILURE_MODE",
    "BoundCall",
    "CallLayout",
    "Settings",
    "check_arguments",
    "check_return",
    "is_enabled",
    "load_settings",
    "reload_settings",
    "resolve_abort",
    "set_enabled",
    "wrap_callable",
]
