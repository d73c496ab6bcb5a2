from dataclasses import dataclass
from enum import Enum
from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, Type
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')
R = TypeVar('R')

Predicate = Callable[[T], bool]
Selector = Callable[[T], U]
KeySelector = Callable[[T], K]
Comparator = Callable[[T, T], int]
Accumulator = Callable[[U, T], U]
SourceGetter = Callable[[], Iterable[T]]

# a key selector (one argument) or a comparator (two arguments)
Order = Union[Callable[[T], Any], Comparator]


@dataclass(frozen=True)
class SourceProperties:
    """what a stream promises about the iterable its source getter returns"""
    one_off: bool = False
    immutable: bool = False

    def __repr__(self) -> str:
        flags = [name for name in ('one_off', 'immutable') if getattr(self, name)]
        return f"SourceProperties({', '.join(flags) or 'live'})"


NO_PROPERTIES = SourceProperties()


class Shape(Enum):
    """the capability class of a concrete container, decided once at the boundary"""
    INDEXED = 'indexed'        # random access and a known length
    HASHED = 'hashed'          # constant-time membership and a known length
    SEQUENTIAL = 'sequential'  # iteration only


class Operation:
    """records which operator built a stream and from what, without running anything"""

    def __init__(self, name: str, args: Tuple = (), upstream: Tuple = ()):
        self.name = name
        self.args = args
        self.upstream = upstream

    def describe(self) -> str:
        shown = [_short_repr(arg) for arg in self.args if arg is not None]
        if not shown:
            return self.name
        return f"{self.name}({', '.join(shown)})"

    def __repr__(self) -> str:
        return f"Operation(name={self.name!r}, args={len(self.args)}, upstream={len(self.upstream)})"


def _short_repr(value: Any) -> str:
    if callable(value):
        return getattr(value, '__name__', type(value).__name__)
    text = repr(value)
    return text if len(text) <= 24 else text[:21] + '...'
