"""Parameter bags and the typed parameter structs decoded from them.

A parameter bag is the loosely typed ``{name: value}`` mapping a user hands to
an action. It is merged from two sources: repeated ``key=value`` pairs and a
JSON object given as text. The JSON text is merged second, so it wins when
both sources name the same key.

Every action declares an ``ActionParams`` dataclass. The dispatcher decodes the
bag into that dataclass once, at the boundary, so action code only ever sees
validated, typed arguments.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, fields as dataclass_fields
from typing import Any, TypeVar

from rest_cli_interface.errors import InvalidParameterError, MissingParameterError, MissingPrimaryKeyError

__all__ = [
    "ActionParams",
    "NoParams",
    "merge_bags",
    "param",
    "parse_pairs",
    "to_bool",
    "to_int",
    "to_list",
    "to_mapping",
    "to_str",
]

P = TypeVar("P", bound="ActionParams")


# ---------------------------------------------------------------------------
# Bag construction
# ---------------------------------------------------------------------------

_JSON_PREFIXES = ("{", "[", '"')


def _decode_value(text: str) -> Any:
    if not text.lstrip().startswith(_JSON_PREFIXES):
        return text
    try:
        return json.loads(text)
    except ValueError:
        return text


def parse_pairs(pairs: Iterable[str] | None) -> dict[str, Any]:
    """Turn ``["size=10", "query={...}"]`` into a dict.

    Values that look like JSON objects, arrays or quoted strings are decoded.
    Everything else, numbers and booleans included, stays the text the user
    typed; the field converter decides what it means, so ``id=1e3`` stays
    ``"1e3"`` and ``body=true`` stays ``"true"``.
    """
    bag: dict[str, Any] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise InvalidParameterError(f"Expected key=value, got '{pair}'")
        bag[key.strip()] = _decode_value(value)
    return bag


def merge_bags(structured: Mapping[str, Any] | None, json_text: str | None) -> dict[str, Any]:
    """Merge the structured bag with the JSON-text bag; JSON text wins on collision."""
    merged: dict[str, Any] = dict(structured or {})
    if json_text:
        try:
            decoded = json.loads(json_text)
        except ValueError as exc:
            raise InvalidParameterError(f"Parameter JSON is not valid: {exc}") from exc
        if not isinstance(decoded, dict):
            raise InvalidParameterError("Parameter JSON must be an object")
        merged.update(decoded)
    return merged


# ---------------------------------------------------------------------------
# Converters
# ---------------------------------------------------------------------------

def to_str(value: Any) -> str:
    if isinstance(value, (dict, list)):
        raise ValueError("expected a string")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("expected an integer")
    return int(value)


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "1", "yes", "y"):
        return True
    if text in ("false", "0", "no", "n"):
        return False
    raise ValueError(f"expected a boolean, got '{value}'")


def to_mapping(value: Any) -> dict:
    if isinstance(value, str):
        value = json.loads(value)
    if not isinstance(value, dict):
        raise ValueError("expected an object")
    return value


def to_list(value: Any) -> list:
    if isinstance(value, str):
        if value.lstrip().startswith("["):
            return json.loads(value)
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ValueError("expected a list or a comma separated string")


# ---------------------------------------------------------------------------
# Typed parameter structs
# ---------------------------------------------------------------------------

def param(
    key: str | None = None,
    *,
    required: bool = False,
    default: Any = None,
    convert: Callable[[Any], Any] | None = None,
    primary: bool = False,
) -> Any:
    """Declare one action parameter.

    Args:
        key:      Bag key the value is read from, defaults to the field name
        required: Missing values raise MissingParameterError
        default:  Value used when the key is absent (immutable values only)
        convert:  Callable applied to the raw bag value
        primary:  Read from the positional key argument instead of the bag
    """
    return field(
        default=default,
        metadata={"key": key, "required": required, "convert": convert, "primary": primary},
    )


@dataclass(frozen=True)
class ActionParams:
    """Base class for per-action parameter structs."""

    @classmethod
    def from_bag(
        cls: type[P],
        action: str,
        bag: Mapping[str, Any],
        primary_key: str | None = None,
    ) -> P:
        """Decode and validate a bag. Unknown keys are ignored.

        Raises:
            MissingPrimaryKeyError: If a primary field is required and no key was given.
            MissingParameterError:  If a required bag key is absent or empty,
                                    or validate() rejects the combination.
            InvalidParameterError:  If a converter rejects a value.
        """
        values: dict[str, Any] = {}
        for f in dataclass_fields(cls):
            meta = f.metadata
            key = meta.get("key") or f.name
            raw = primary_key if meta.get("primary") else bag.get(key)

            if raw is None or raw == "":
                if meta.get("required"):
                    if meta.get("primary"):
                        raise MissingPrimaryKeyError(key, action)
                    raise MissingParameterError(key, action)
                continue

            convert = meta.get("convert")
            if convert is not None:
                try:
                    raw = convert(raw)
                except (TypeError, ValueError) as exc:
                    raise InvalidParameterError(
                        f"Parameter '{key}' for action '{action}' is invalid: {exc}"
                    ) from exc
            values[f.name] = raw
        instance = cls(**values)
        instance.validate(action)
        return instance

    def validate(self, action: str) -> None:
        """Cross-field checks that no single field can express; raise MissingParameterError."""

    @classmethod
    def describe(cls) -> tuple[list[str], list[str]]:
        """Return (required, optional) bag keys for usage text; primary fields excluded."""
        required: list[str] = []
        optional: list[str] = []
        for f in dataclass_fields(cls):
            if f.metadata.get("primary"):
                continue
            key = f.metadata.get("key") or f.name
            (required if f.metadata.get("required") else optional).append(key)
        return required, optional

    @classmethod
    def primary_label(cls) -> tuple[str, bool] | None:
        """Return (label, required) of the primary field, if the struct has one."""
        for f in dataclass_fields(cls):
            if f.metadata.get("primary"):
                return f.metadata.get("key") or f.name, bool(f.metadata.get("required"))
        return None


@dataclass(frozen=True)
class NoParams(ActionParams):
    """For actions that take no parameters."""
