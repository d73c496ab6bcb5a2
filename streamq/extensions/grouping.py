from __future__ import annotations
import typing
from ..types import *
from ..errors import require_non_negative
from .. import iterables

if typing.TYPE_CHECKING:
    from ..stream import Stream


def _require_interval(interval: int) -> int:
    if interval < 1:
        raise ValueError(f"interval must be 1 or greater but {interval} was given")
    return interval


class _GroupingOperations(Generic[T]):
    def group_by(self: 'Stream[T]', key_selector: KeySelector[T, K],
                 value_selector: Optional[Selector[T, V]] = None) -> 'Stream[Tuple[K, List[V]]]':
        """
        groups the values by key in a single pass. yields (key, values) pairs in
        the order each key was first seen, so .to_dict() gives a key -> list dict.
        """
        return self._derive(lambda: iterables.group_by(self, key_selector, value_selector),
                            'group_by', key_selector, properties=SourceProperties(one_off=True))

    def alternating(self: 'Stream[T]', interval: int = 2) -> 'Stream[T]':
        """every interval-th value, starting with the first"""
        interval = _require_interval(int(interval))
        return self._derive(lambda: iterables.alternating(self, interval), 'alternating', interval,
                            properties=self._inherit_immutable())

    def remove_alternating(self: 'Stream[T]', interval: int = 2) -> 'Stream[T]':
        """every value alternating() would drop"""
        interval = _require_interval(int(interval))
        return self._derive(lambda: iterables.alternating_skip(self, interval), 'remove_alternating',
                            interval, properties=self._inherit_immutable())

    def take_sparse(self: 'Stream[T]', count: int) -> 'Stream[T]':
        """count values spread evenly from the start to the end"""
        count = require_non_negative('count', int(count))
        return self._derive(lambda: iterables.take_sparse(self, count), 'take_sparse', count,
                            properties=SourceProperties(one_off=True,
                                                        immutable=self._properties.immutable))

    def skip_sparse(self: 'Stream[T]', count: int) -> 'Stream[T]':
        """everything except the values take_sparse(count) would pick"""
        count = require_non_negative('count', int(count))
        return self._derive(lambda: iterables.skip_sparse(self, count), 'skip_sparse', count,
                            properties=SourceProperties(one_off=True,
                                                        immutable=self._properties.immutable))
