# SPDX-License-Identifier: MIT
"""Ordered values used to build version comparison keys.

A key is assembled from three kinds of part:
- Value: a concrete integer or string
- Infinity / NegativeInfinity: sentinels above / below every other part
- Parts: a sequence of parts compared element-wise left to right

Strings rank below integers at the same position, which gives PEP 440 local
version ordering (``1.0+abc < 1.0+1``) without special cases.
"""

from __future__ import annotations

from typing import Iterable, Optional, Union


class Part:
    """Base class for every comparable key component."""

    __slots__ = ()

    def compare(self, other: Part) -> int:
        """Return -1, 0 or 1 when this part is less than, equal to or greater than other."""
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Part):
            return NotImplemented
        return self.compare(other) == 0

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Part):
            return NotImplemented
        return self.compare(other) != 0

    def __lt__(self, other: Part) -> bool:
        return self.compare(other) < 0

    def __le__(self, other: Part) -> bool:
        return self.compare(other) <= 0

    def __gt__(self, other: Part) -> bool:
        return self.compare(other) > 0

    def __ge__(self, other: Part) -> bool:
        return self.compare(other) >= 0

    __hash__ = object.__hash__


class _InfinityType(Part):
    __slots__ = ()

    def compare(self, other: Part) -> int:
        return 0 if other is self else 1

    def __repr__(self) -> str:
        return "Infinity"

    def __hash__(self) -> int:
        return hash(repr(self))


class _NegativeInfinityType(Part):
    __slots__ = ()

    def compare(self, other: Part) -> int:
        return 0 if other is self else -1

    def __repr__(self) -> str:
        return "-Infinity"

    def __hash__(self) -> int:
        return hash(repr(self))


Infinity = _InfinityType()
NegativeInfinity = _NegativeInfinityType()

_SENTINELS = (_InfinityType, _NegativeInfinityType)


class Value(Part):
    """A concrete integer or string value.

    Integers compare numerically and strings compare as ASCII. When an
    integer meets a string, the string is the smaller of the two.
    """

    __slots__ = ("value",)

    def __init__(self, value: Union[int, str]) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise TypeError(f"Value must be an int or str, got {type(value).__name__}")
        self.value = value

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.value, int)

    def compare(self, other: Part) -> int:
        if isinstance(other, _SENTINELS):
            return -other.compare(self)
        if not isinstance(other, Value):
            raise TypeError(f"Cannot compare Value with {type(other).__name__}")

        if self.is_numeric != other.is_numeric:
            return 1 if self.is_numeric else -1
        if self.value == other.value:
            return 0
        return -1 if self.value < other.value else 1  # type: ignore[operator]

    def __repr__(self) -> str:
        return f"Value({self.value!r})"

    def __hash__(self) -> int:
        return hash(self.value)


Zero = Value(0)


class Parts(Part):
    """An ordered sequence of parts.

    Sequences of unequal length are compared as if the shorter one were
    right-padded with ``fill``. With ``fill=None`` no padding happens and a
    sequence that is a strict prefix of another sorts first.
    """

    __slots__ = ("items", "fill")

    def __init__(self, *items: Part, fill: Optional[Part] = Zero) -> None:
        self.items: tuple[Part, ...] = items
        self.fill = fill

    @classmethod
    def of(cls, values: Iterable[Union[int, str]], fill: Optional[Part] = Zero) -> Parts:
        """Build Parts from raw integers and strings."""
        return cls(*(Value(v) for v in values), fill=fill)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def normalize(self) -> Parts:
        """Return a copy with trailing zero values removed."""
        items = list(self.items)
        while items and items[-1] == Zero:
            items.pop()
        return Parts(*items, fill=self.fill)

    def padding(self, length: int, fill: Part = Zero) -> Parts:
        """Return a copy right-padded with ``fill`` up to ``length`` items."""
        missing = length - len(self.items)
        if missing <= 0:
            return self
        return Parts(*self.items, *([fill] * missing), fill=self.fill)

    def compare(self, other: Part) -> int:
        if isinstance(other, _SENTINELS):
            return -other.compare(self)
        if not isinstance(other, Parts):
            raise TypeError(f"Cannot compare Parts with {type(other).__name__}")

        if self.fill is None:
            for left, right in zip(self.items, other.items):
                result = left.compare(right)
                if result != 0:
                    return result
            if len(self.items) == len(other.items):
                return 0
            return -1 if len(self.items) < len(other.items) else 1

        length = max(len(self.items), len(other.items))
        for i in range(length):
            left = self.items[i] if i < len(self.items) else self.fill
            right = other.items[i] if i < len(other.items) else self.fill
            result = left.compare(right)
            if result != 0:
                return result
        return 0

    def __repr__(self) -> str:
        inner = ", ".join(repr(item) for item in self.items)
        return f"Parts({inner})"

    def __hash__(self) -> int:
        if self.fill is Zero:
            return hash(self.normalize().items)
        return hash(self.items)
