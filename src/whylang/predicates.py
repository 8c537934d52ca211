"""Character predicates used to drive TextWindow scanning.

A predicate is anything callable as ``predicate(ch) -> bool``. The matchers
below cover the shapes the tokenizer needs; ``Where`` adapts any other
one-argument function. Matchers can be combined with ``~`` and ``|``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

Predicate = Callable[[str], bool]


class _Combinable:
    __slots__ = ()

    def __invert__(self) -> Not:
        return Not(self)  # type: ignore[arg-type]

    def __or__(self, other: Predicate) -> Either:
        return Either(self, other)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class Is(_Combinable):
    """Matches one specific character."""

    char: str

    def __call__(self, ch: str) -> bool:
        return ch == self.char


@dataclass(frozen=True, slots=True)
class InRange(_Combinable):
    """Matches ``low <= ch <= high``."""

    low: str
    high: str

    def __call__(self, ch: str) -> bool:
        return self.low <= ch <= self.high


@dataclass(frozen=True, slots=True)
class InRangeExclusive(_Combinable):
    """Matches ``low <= ch < high``."""

    low: str
    high: str

    def __call__(self, ch: str) -> bool:
        return self.low <= ch < self.high


@dataclass(frozen=True, slots=True)
class AtLeast(_Combinable):
    """Matches ``ch >= low``."""

    low: str

    def __call__(self, ch: str) -> bool:
        return ch >= self.low


@dataclass(frozen=True, slots=True)
class Below(_Combinable):
    """Matches ``ch < high``."""

    high: str

    def __call__(self, ch: str) -> bool:
        return ch < self.high


@dataclass(frozen=True, slots=True)
class Anything(_Combinable):
    def __call__(self, ch: str) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Not(_Combinable):
    """Inverts another predicate."""

    inner: Predicate

    def __call__(self, ch: str) -> bool:
        return not self.inner(ch)


@dataclass(frozen=True, slots=True)
class Either(_Combinable):
    """Matches when either predicate matches."""

    left: Predicate
    right: Predicate

    def __call__(self, ch: str) -> bool:
        return self.left(ch) or self.right(ch)


@dataclass(frozen=True, slots=True)
class Where(_Combinable):
    """Adapts an arbitrary ``function(ch) -> bool``."""

    function: Callable[[str], bool]

    def __call__(self, ch: str) -> bool:
        return bool(self.function(ch))


DIGIT = InRange("0", "9")
WHITESPACE = Where(str.isspace)
