from __future__ import annotations
import typing
from functools import reduce as _reduce
from itertools import zip_longest
import numpy as np
import pandas as pd
from ..types import *
from ..errors import EmptySequenceError, CardinalityError
from .. import iterables

if typing.TYPE_CHECKING:
    from ..stream import Stream

_MISSING = object()


class _BreakSignal:
    """returned from a for_each callback to stop the iteration"""

    def __repr__(self) -> str:
        return 'BREAK'


BREAK = _BreakSignal()


def _same(a, b) -> bool:
    return a is b or a == b


class _TerminalOperations(Generic[T]):
    # --- iteration with side effects ---

    def for_each(self: 'Stream[T]', callback: Callable[[T], Any]) -> 'Stream[T]':
        """
        calls callback on each value, stopping early if it returns BREAK.
        this is an EAGER operation; returns the stream itself for chaining.
        """
        for value in self:
            if callback(value) is BREAK:
                break
        return self

    def for_each_with_index(self: 'Stream[T]', callback: Callable[[T, int], Any]) -> 'Stream[T]':
        """for_each, with the value's index passed as a second argument"""
        for index, value in enumerate(self):
            if callback(value, index) is BREAK:
                break
        return self

    # --- reduction ---

    def reduce(self: 'Stream[T]', reduction: Accumulator[U, T], initial: U = _MISSING) -> U:
        """
        folds the values with reduction(previous, current).
        raises EmptySequenceError on an empty stream without an initial value.
        """
        iterator = iter(self)
        if initial is _MISSING:
            try:
                initial = next(iterator)
            except StopIteration:
                raise EmptySequenceError("reduce of empty stream with no initial value") from None
        return _reduce(reduction, iterator, initial)

    def mk_string(self: 'Stream[T]', *parts: str) -> str:
        """
        joins the values as strings.
        mk_string(separator) or mk_string(start, separator[, end]).
        """
        if len(parts) > 3:
            raise ValueError("mk_string takes at most start, separator and end")
        start, separator, end = "", "", ""
        if len(parts) == 1:
            separator, = parts
        elif len(parts) == 2:
            start, separator = parts
        elif len(parts) == 3:
            start, separator, end = parts
        return f"{start}{iterables.join_strings(self, separator)}{end}"

    # --- queries ---

    def includes(self: 'Stream[T]', value: T) -> bool:
        """whether the stream contains value"""
        return iterables.includes(self._base_source(), value)

    def some(self: 'Stream[T]', test: Optional[Predicate[T]] = None) -> bool:
        """whether any value passes the test, or whether there are any values at all"""
        if test is None:
            for _ in self:
                return True
            return False
        return any(test(value) for value in self)

    def none(self: 'Stream[T]', test: Optional[Predicate[T]] = None) -> bool:
        """whether no value passes the test, or whether the stream is empty"""
        return not self.some(test)

    def every(self: 'Stream[T]', test: Predicate[T]) -> bool:
        """whether all values pass the test"""
        return all(test(value) for value in self)

    def find(self: 'Stream[T]', test: Predicate[T]) -> Optional[T]:
        """the first value that passes the test, or None"""
        for value in self:
            if test(value):
                return value
        return None

    def find_with_index(self: 'Stream[T]', test: Callable[[T, int], bool]) -> Optional[T]:
        """the first value for which test(value, index) passes, or None"""
        for index, value in enumerate(self):
            if test(value, index):
                return value
        return None

    def find_index(self: 'Stream[T]', test: Predicate[T]) -> Optional[int]:
        for index, value in enumerate(self):
            if test(value):
                return index
        return None

    def index_of(self: 'Stream[T]', value: T) -> Optional[int]:
        return self.find_index(lambda item: _same(item, value))

    def first(self: 'Stream[T]') -> Optional[T]:
        """the first value, or None if the stream is empty"""
        for value in self:
            return value
        return None

    def last(self: 'Stream[T]') -> Optional[T]:
        return iterables.last(self._base_source())

    def at(self: 'Stream[T]', index: int) -> Optional[T]:
        """the value at index; negative indices count from the end. None when out of range"""
        return iterables.at(self._base_source(), int(index))

    def count(self: 'Stream[T]') -> int:
        return iterables.count(self._base_source())

    def non_iterated_count(self: 'Stream[T]') -> Optional[int]:
        """the length if the base source knows it without iterating, otherwise None"""
        return iterables.non_iterated_count(self._base_source())

    def single(self: 'Stream[T]', test: Optional[Predicate[T]] = None) -> T:
        """
        the only value that passes the test.
        raises EmptySequenceError for no match and CardinalityError for several.
        """
        found, result = False, None
        for value in self:
            if test is None or test(value):
                if found:
                    raise CardinalityError("more than one value found")
                found, result = True, value
        if not found:
            raise EmptySequenceError("no value found")
        return result

    def single_or_none(self: 'Stream[T]', test: Optional[Predicate[T]] = None) -> Optional[T]:
        """like single(), but returns None instead of raising"""
        found, result = False, None
        for value in self:
            if test is None or test(value):
                if found:
                    return None
                found, result = True, value
        return result

    def sequence_equal(self: 'Stream[T]', other: Iterable[T],
                       equality: Optional[Callable[[T, T], bool]] = None) -> bool:
        """whether both sequences hold equal values in the same order"""
        from ..stream import Stream
        equality = equality or _same
        source = self._base_source()
        other_source = Stream.base_source_of(other)

        length = iterables.non_iterated_count(source)
        other_length = iterables.non_iterated_count(other_source)
        if length is not None and other_length is not None and length != other_length:
            return False

        for value, other_value in zip_longest(source, other_source, fillvalue=_MISSING):
            if value is _MISSING or other_value is _MISSING:
                return False
            if not equality(value, other_value):
                return False
        return True

    # --- numeric stack ---

    def to_numpy(self: 'Stream[T]') -> np.ndarray:
        """convert to numpy array"""
        return np.array(self.as_list())

    def to_series(self: 'Stream[T]') -> pd.Series:
        """convert to pandas series"""
        return pd.Series(self.as_list())

    def to_frame(self: 'Stream[T]') -> pd.DataFrame:
        """convert to pandas dataframe (values should be records or mappings)"""
        return pd.DataFrame(self.as_list())
