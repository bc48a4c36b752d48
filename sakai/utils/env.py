"""Environment variable helpers used by the settings dataclasses."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar, cast, get_origin

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")

TRUE_VALUES = {"True", "true", "1", "yes", "Y", "T"}


class _UnsetType:
    pass


_UNSET = _UnsetType()


def _parse_list(value: str) -> list[str]:
    if value.startswith("[") and value.endswith("]"):
        try:
            return list(json.loads(value))
        except (SyntaxError, ValueError):
            msg = f"{value!r} is not a valid list representation."
            raise ValueError(msg) from None
    return [item.strip() for item in value.split(",") if item.strip()]


def get_config_val(key: str, default: Any, type_hint: Any = _UNSET) -> Any:
    """Parse an environment variable into the type of its default.

    Args:
        key: Environment variable name
        default: Value returned when the variable is not set
        type_hint: Explicit target type, for defaults whose type is ambiguous

    Returns:
        The parsed value, or ``default`` when unset
    """
    value = os.getenv(key)
    if value is None:
        return default

    target = type_hint if type_hint is not _UNSET else type(default)
    if get_origin(target) is list or target is list:
        return _parse_list(value)
    if target is bool:
        return value in TRUE_VALUES
    if target is int:
        return int(value)
    if target is float:
        return float(value)
    if target is Path or isinstance(default, Path):
        return Path(value)
    return value


def get_env(key: str, default: T, type_hint: Any = _UNSET) -> Callable[[], T]:
    """Return a ``default_factory`` reading ``key`` from the environment."""
    return lambda: cast("T", get_config_val(key=key, default=default, type_hint=type_hint))
