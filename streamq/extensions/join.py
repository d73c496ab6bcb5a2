from __future__ import annotations
import typing
from ..types import *
from .. import iterables

if typing.TYPE_CHECKING:
    from ..stream import Stream


class _JoinOperations(Generic[T]):
    def group_join(self: 'Stream[T]', inner: Iterable[U],
                   key_selector: KeySelector[T, K],
                   inner_key_selector: KeySelector[U, K],
                   result_selector: Callable[[T, 'Stream[U]'], R],
                   comparison: Optional[Callable[[K, K], bool]] = None) -> 'Stream[R]':
        """
        pairs each value with a stream of the inner values sharing its key.
        the inner sequence is read and grouped before the first result; a custom
        comparison(outer_key, inner_key) checks every pair instead.
        """
        from ..stream import Stream

        def wrap_group(outer_item, group):
            # the group list is private to this pass and never written again
            group_stream = Stream(lambda: group, SourceProperties(immutable=True), Operation('group'))
            return result_selector(outer_item, group_stream)

        return self._derive(
            lambda: iterables.group_join(self, inner, key_selector, inner_key_selector,
                                         wrap_group, comparison),
            'group_join', inner, upstream=(inner,))

    def join(self: 'Stream[T]', inner: Iterable[U],
             key_selector: KeySelector[T, K],
             inner_key_selector: KeySelector[U, K],
             result_selector: Callable[[T, U], R],
             comparison: Optional[Callable[[K, K], bool]] = None) -> 'Stream[R]':
        """inner join: one result for every (value, inner value) pair with matching keys"""
        return self._derive(
            lambda: iterables.inner_join(self, inner, key_selector, inner_key_selector,
                                         result_selector, comparison),
            'join', inner, upstream=(inner,))
