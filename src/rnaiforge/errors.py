"""Error taxonomy shared by the design engine, the store and the service layer."""

from enum import Enum
from typing import Any, NoReturn, TypeVar

E = TypeVar("E", bound=Enum)


class RNAiForgeError(Exception):
    """Base class for all rnaiforge errors."""


class NotFoundError(RNAiForgeError, LookupError):
    """A referenced target, design or experiment does not exist."""


class InvalidArgumentError(RNAiForgeError, ValueError):
    """Input outside a closed enumeration or otherwise unusable for generation."""


class PersistenceError(RNAiForgeError):
    """Saving a single record failed; already-saved records are unaffected."""


def unsupported(value: Any) -> NoReturn:
    """Default branch for exhaustive enumeration dispatch."""
    raise InvalidArgumentError(f"Unsupported value: {value!r}")


def ensure_member(enum_cls: type[E], value: Any) -> E:
    """Coerce ``value`` into ``enum_cls`` or raise :class:`InvalidArgumentError`.

    Accepts either an enum member or its string value.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(str(member.value) for member in enum_cls)
        raise InvalidArgumentError(f"Unsupported {enum_cls.__name__} {value!r} (expected one of: {allowed})") from exc
