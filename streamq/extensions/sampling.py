from __future__ import annotations
import typing
from collections.abc import Sequence
from ..types import *
from ..errors import require_non_negative
from .. import iterables
from ..config import get_random

if typing.TYPE_CHECKING:
    from ..stream import Stream


class _SamplingOperations(Generic[T]):
    def shuffle(self: 'Stream[T]') -> 'Stream[T]':
        """the values in random order. the source is copied, never shuffled in place"""
        def shuffled_data():
            values = self.to_list()
            iterables.shuffle(values, get_random())
            return values
        return self._derive(shuffled_data, 'shuffle', properties=SourceProperties(one_off=True))

    def take_random(self: 'Stream[T]', count: int) -> 'Stream[T]':
        """count distinct positions picked at random"""
        count = require_non_negative('count', int(count))
        return self.shuffle().take(count)

    def skip_random(self: 'Stream[T]', count: int) -> 'Stream[T]':
        """the values left after removing count random positions"""
        count = require_non_negative('count', int(count))

        def skipped_data():
            values = self.to_list()
            rng = get_random()
            for _ in range(min(count, len(values))):
                iterables.choose_and_remove(values, rng)
            return values
        return self._derive(skipped_data, 'skip_random', count, properties=SourceProperties(one_off=True))

    def random(self: 'Stream[T]', count: Optional[int] = None) -> Union[T, 'Stream[T]']:
        """
        without a count: one random value, raising EmptySequenceError when empty.
        with a count: a stream of count independent picks (empty if the source is).
        """
        if count is None:
            solid = self.as_solid()
            values = solid if isinstance(solid, Sequence) else list(solid)
            return iterables.choice(values, get_random())

        count = require_non_negative('count', int(count))

        def random_data():
            values = self.as_list()
            if not values:
                return
            rng = get_random()
            for _ in range(count):
                yield iterables.choice(values, rng)
        return self._derive(random_data, 'random', count)
