from __future__ import annotations
import typing
from ..types import *
from .. import iterables

if typing.TYPE_CHECKING:
    from ..stream import Stream


def _base_of(other: Iterable[T]) -> Iterable[T]:
    from ..stream import Stream
    return Stream.base_source_of(other)


class _SetOperations(Generic[T]):
    """
    set-theoretic operators. membership is by hash/eq for hashable values and by
    identity for unhashable ones (lists, dicts, mutable objects): two equal dicts
    are different members. there is no deep comparison anywhere.
    """

    def distinct(self: 'Stream[T]', identifier: Optional[Selector[T, Any]] = None) -> 'Stream[T]':
        """unique values, in order of first appearance"""
        # an identifier could be impure, so only the plain form keeps immutability
        return self._derive(lambda: iterables.distinct(self, identifier), 'distinct', identifier,
                            properties=SourceProperties(
                                immutable=self._properties.immutable and identifier is None))

    def with_(self: 'Stream[T]', needed: Iterable[T]) -> 'Stream[T]':
        """this stream followed by the values of needed it doesn't already contain"""
        return self._derive(lambda: iterables.including(self, needed), 'with', needed,
                            properties=self._immutable_with(needed))

    def without(self: 'Stream[T]', remove: Iterable[T]) -> 'Stream[T]':
        """the values of this stream not found in remove"""
        return self._derive(lambda: iterables.excluding(self, remove), 'without', remove,
                            properties=self._immutable_with(remove))

    def merge(self: 'Stream[T]', other: Iterable[U]) -> 'Stream[Union[T, U]]':
        """zipper merge with other: one value from each side in turn"""
        return self._derive(lambda: iterables.merge(self, other), 'merge', other,
                            properties=self._immutable_with(other))

    def intersect(self: 'Stream[T]', other: Iterable[T]) -> 'Stream[T]':
        """distinct values found both in this stream and in other"""
        return self._derive(lambda: iterables.intersection(self._base_source(), _base_of(other)),
                            'intersect', other, properties=self._immutable_with(other))
