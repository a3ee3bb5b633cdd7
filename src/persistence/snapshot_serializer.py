"""
Snapshot Serializer

Converts league snapshots (and any other engine dataclass) to JSON-ready
primitives and back. The engine has no save-slot opinions; callers decide
where the JSON goes.

Conversion is driven by dataclass type hints:
- dataclasses become dicts of their fields
- Enums become their values
- tuples become lists
- dict keys become strings (int and Enum keys are restored on load)

Usage:
    from persistence.snapshot_serializer import save_snapshot, load_snapshot

    save_snapshot(league, "saves/slot1.json")
    league = load_snapshot("saves/slot1.json")
"""

import dataclasses
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union, get_args, get_origin, get_type_hints

from shared.league_state import LeagueState


logger = logging.getLogger(__name__)

SNAPSHOT_FORMAT_VERSION = 1

_NONE_TYPE = type(None)


def to_primitive(obj: Any) -> Any:
    """Recursively convert an engine value to JSON-compatible primitives."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_primitive(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (tuple, list)):
        return [to_primitive(item) for item in obj]
    if isinstance(obj, dict):
        return {_key_to_primitive(key): to_primitive(value) for key, value in obj.items()}
    return obj


def _key_to_primitive(key: Any) -> str:
    if isinstance(key, Enum):
        return str(key.value)
    return str(key)


def from_primitive(target_type: Any, value: Any) -> Any:
    """
    Rebuild a typed value from primitives.

    Args:
        target_type: Annotation to rebuild (dataclass, Enum, Tuple[...], ...)
        value: Primitive produced by ``to_primitive`` or parsed JSON

    Returns:
        Value of ``target_type``

    Raises:
        TypeError, ValueError, KeyError: If the value does not fit the type
    """
    if target_type is Any:
        return value

    origin = get_origin(target_type)
    args = get_args(target_type)

    if origin is Union:
        if value is None and _NONE_TYPE in args:
            return None
        candidates = [arg for arg in args if arg is not _NONE_TYPE]
        if len(candidates) != 1:
            raise TypeError(f"Cannot rebuild ambiguous union {target_type}")
        return from_primitive(candidates[0], value)

    if origin is tuple:
        _require(value, (list, tuple), target_type)
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(from_primitive(args[0], item) for item in value)
        if len(args) != len(value):
            raise ValueError(f"Expected {len(args)} items for {target_type}, got {len(value)}")
        return tuple(from_primitive(arg, item) for arg, item in zip(args, value))

    if origin is list:
        _require(value, (list, tuple), target_type)
        return [from_primitive(args[0], item) for item in value]

    if origin is dict:
        _require(value, dict, target_type)
        key_type, value_type = args
        return {
            _key_from_primitive(key_type, key): from_primitive(value_type, item)
            for key, item in value.items()
        }

    if isinstance(target_type, type) and issubclass(target_type, Enum):
        return target_type(value)

    if dataclasses.is_dataclass(target_type):
        return _dataclass_from_primitive(target_type, value)

    if target_type is bool:
        _require(value, bool, target_type)
        return value
    if target_type is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Expected int, got {value!r}")
        return value
    if target_type is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"Expected float, got {value!r}")
        return float(value)
    if target_type is str:
        _require(value, str, target_type)
        return value

    raise TypeError(f"Unsupported type for deserialization: {target_type}")


def _dataclass_from_primitive(cls: type, value: Any) -> Any:
    _require(value, dict, cls)
    hints = get_type_hints(cls)
    init_fields = {f.name: f for f in dataclasses.fields(cls) if f.init}

    unknown = set(value) - set(init_fields)
    if unknown:
        raise ValueError(f"Unknown fields for {cls.__name__}: {sorted(unknown)}")

    kwargs = {
        name: from_primitive(hints[name], value[name])
        for name in init_fields if name in value
    }
    return cls(**kwargs)


def _key_from_primitive(key_type: Any, key: Any) -> Any:
    if key_type is int:
        return int(key)
    if isinstance(key_type, type) and issubclass(key_type, Enum):
        return key_type(key)
    return key


def _require(value: Any, expected, target_type: Any) -> None:
    if not isinstance(value, expected):
        raise TypeError(f"Expected {target_type}, got {type(value).__name__}: {value!r}")


# ============================================================================
# LEAGUE SNAPSHOTS
# ============================================================================

def snapshot_to_dict(league: LeagueState) -> Dict[str, Any]:
    """Wrap a league snapshot with a format version."""
    return {
        "format_version": SNAPSHOT_FORMAT_VERSION,
        "league": to_primitive(league),
    }


def snapshot_from_dict(payload: Dict[str, Any]) -> LeagueState:
    """
    Rebuild a league snapshot.

    Raises:
        ValueError: On an unsupported format version or malformed payload
    """
    version = payload.get("format_version")
    if version != SNAPSHOT_FORMAT_VERSION:
        raise ValueError(f"Unsupported snapshot format version: {version}")
    try:
        return from_primitive(LeagueState, payload["league"])
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed league snapshot: {e}") from e


def save_snapshot(league: LeagueState, path: Union[str, Path]) -> Path:
    """Write a snapshot as JSON, creating parent directories."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        json.dump(snapshot_to_dict(league), f, indent=2)
    logger.info(f"Saved {league.calendar} snapshot to {target}")
    return target


def load_snapshot(path: Union[str, Path]) -> LeagueState:
    """Read a snapshot written by ``save_snapshot``."""
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    league = snapshot_from_dict(payload)
    logger.info(f"Loaded {league.calendar} snapshot from {path}")
    return league
