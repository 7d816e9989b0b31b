"""Optional-value wrapper.

Usage:
    port = Maybe(8080)
    port.has_value      # True
    port.unwrap()       # 8080

    missing = Maybe.empty()
    missing.unwrap()    # raises ValueError
"""

from __future__ import annotations

from typing import Any


class Maybe[T]:
    """A value that may or may not be present.

    The wrapper itself is immutable; copying a present ``Maybe`` copies the
    inner value and wraps the result in a new ``Maybe``.
    """

    __slots__ = ("_value", "_present")

    def __init__(self, value: T) -> None:
        self._value = value
        self._present = True

    @classmethod
    def empty(cls) -> Maybe[Any]:
        """Return the absent value."""
        return _EMPTY

    @property
    def has_value(self) -> bool:
        """Whether a value is present."""
        return self._present

    def unwrap(self) -> T:
        """Return the wrapped value.

        Raises:
            ValueError: If no value is present.
        """
        if not self._present:
            raise ValueError("Maybe is empty")
        return self._value

    def value_or(self, default: T) -> T:
        """Return the wrapped value, or ``default`` when absent."""
        return self._value if self._present else default

    @property
    def value_type(self) -> type | None:
        """Runtime type of the wrapped value, None when absent."""
        return type(self._value) if self._present else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Maybe):
            return NotImplemented
        if self._present != other._present:
            return False
        return not self._present or self._value == other._value

    def __hash__(self) -> int:
        return hash((self._present, self._value if self._present else None))

    def __repr__(self) -> str:
        if not self._present:
            return "Maybe.empty()"
        return f"Maybe({self._value!r})"


def _make_empty() -> Maybe[Any]:
    empty: Maybe[Any] = Maybe.__new__(Maybe)
    empty._value = None
    empty._present = False
    return empty


_EMPTY = _make_empty()
