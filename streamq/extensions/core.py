from __future__ import annotations
import typing
from itertools import islice, takewhile, dropwhile
from ..types import *
from ..errors import require_non_negative
from .. import iterables

if typing.TYPE_CHECKING:
    from ..stream import Stream, OrderedStream
    from ..typefilter import TypeFilteredStream, TypeFilteredOutStream


class _CoreOperations(Generic[T]):
    # --- projection and filtering ---

    def map(self: 'Stream[T]', selector: Selector[T, U]) -> 'Stream[U]':
        """project each value to a new form"""
        return self._derive(lambda: (selector(value) for value in self), 'map', selector)

    def map_with_index(self: 'Stream[T]', selector: Callable[[T, int], U]) -> 'Stream[U]':
        """project each value to a new form, using the value's index"""
        return self._derive(lambda: (selector(value, index) for index, value in enumerate(self)),
                            'map_with_index', selector)

    def filter(self: 'Stream[T]', test: Predicate[T]) -> 'Stream[T]':
        """keep the values that pass the test"""
        return self._derive(lambda: (value for value in self if test(value)), 'filter', test)

    def filter_with_index(self: 'Stream[T]', test: Callable[[T, int], bool]) -> 'Stream[T]':
        """keep the values for which test(value, index) passes"""
        return self._derive(lambda: (value for index, value in enumerate(self) if test(value, index)),
                            'filter_with_index', test)

    def filter_to(self: 'Stream[T]', option: Union[str, type]) -> 'TypeFilteredStream[T]':
        """keep values of the given type. chain .and_() to accept more types"""
        from ..typefilter import TypeFilteredStream, type_test
        return TypeFilteredStream(self._get_source, (type_test(option),), self._properties,
                                  Operation('filter_to', (option,), (self,)))

    def filter_out(self: 'Stream[T]', option: Union[str, type]) -> 'TypeFilteredOutStream[T]':
        """drop values of the given type. chain .and_() to drop more types"""
        from ..typefilter import TypeFilteredOutStream, type_test
        return TypeFilteredOutStream(self._get_source, (type_test(option),), self._properties,
                                     Operation('filter_out', (option,), (self,)))

    def non_null(self: 'Stream[T]') -> 'Stream[T]':
        """keep the values that aren't None"""
        return self._derive(lambda: (value for value in self if value is not None), 'non_null',
                            properties=self._inherit_immutable())

    # python has a single null, so both spellings do the same thing
    defined = non_null

    def flat(self: 'Stream[T]') -> 'Stream[Any]':
        """flatten one level of nested iterables. strings are not split"""
        return self._derive(lambda: iterables.flat(self), 'flat')

    # --- ordering ---

    def reverse(self: 'Stream[T]') -> 'Stream[T]':
        """the values in reverse order"""
        return self._derive(lambda: iterables.reverse(self.as_list()), 'reverse',
                            properties=self._inherit_immutable())

    def sort(self: 'Stream[T]', comparator: Optional[Comparator] = None) -> 'Stream[T]':
        """
        an out-of-place sort. without a comparator values are ordered by
        the general comparator, so mixed types sort too.
        """
        from ..compare import sort_key

        def sorted_data():
            values = self.to_list()
            values.sort(key=sort_key(comparator))
            return values
        return self._derive(sorted_data, 'sort', comparator,
                            properties=SourceProperties(one_off=True))

    def order_by(self: 'Stream[T]', order: Order) -> 'OrderedStream[T]':
        """sort by a key selector or a comparator. ties can be broken with then_by()"""
        from ..stream import OrderedStream
        return OrderedStream(self._get_source, (order,), self._properties,
                             Operation('order_by', (order,), (self,)))

    def order_by_descending(self: 'Stream[T]', order: Order) -> 'OrderedStream[T]':
        """sort descending by a key selector or a comparator"""
        from ..stream import OrderedStream
        from ..compare import reverse_order
        return OrderedStream(self._get_source, (reverse_order(order),), self._properties,
                             Operation('order_by_descending', (order,), (self,)))

    def order(self: 'Stream[T]') -> 'OrderedStream[T]':
        """sort the values themselves"""
        return self.order_by(_identity)

    def order_descending(self: 'Stream[T]') -> 'OrderedStream[T]':
        return self.order_by_descending(_identity)

    # --- slicing ---

    def take(self: 'Stream[T]', count: int) -> 'Stream[T]':
        """the first count values, or the last -count values when count is negative"""
        count = int(count)
        if count < 0:
            return self.reverse().take(-count).reverse()
        if count == 0:
            from ..factories import empty
            return empty()
        return self._derive(lambda: islice(self, count), 'take', count,
                            properties=self._inherit_immutable())

    def skip(self: 'Stream[T]', count: int) -> 'Stream[T]':
        """everything after the first count values, or before the last -count values"""
        count = int(count)
        if count < 0:
            return self.reverse().skip(-count).reverse()
        if count == 0:
            return self
        return self._derive(lambda: islice(self, count, None), 'skip', count,
                            properties=self._inherit_immutable())

    def take_while(self: 'Stream[T]', test: Predicate[T]) -> 'Stream[T]':
        """values up to the first one that fails the test"""
        return self._derive(lambda: takewhile(test, self), 'take_while', test,
                            properties=self._inherit_immutable())

    def skip_while(self: 'Stream[T]', test: Predicate[T]) -> 'Stream[T]':
        """values from the first one that fails the test onwards"""
        return self._derive(lambda: dropwhile(test, self), 'skip_while', test,
                            properties=self._inherit_immutable())

    def take_while_with_index(self: 'Stream[T]', test: Callable[[T, int], bool]) -> 'Stream[T]':
        def take_data():
            for index, value in enumerate(self):
                if not test(value, index):
                    return
                yield value
        return self._derive(take_data, 'take_while_with_index', test)

    def skip_while_with_index(self: 'Stream[T]', test: Callable[[T, int], bool]) -> 'Stream[T]':
        """values from the first one where test(value, index) fails onwards"""
        def skip_data():
            iterator = enumerate(self)
            for index, value in iterator:
                if not test(value, index):
                    yield value
                    break
            for _, value in iterator:
                yield value
        return self._derive(skip_data, 'skip_while_with_index', test)

    # --- repetition and combination ---

    def repeat(self: 'Stream[T]', times: int) -> 'Stream[T]':
        """
        the values times times over, reading the source once per pass.
        a negative count repeats from the tail: reverse, repeat, reverse back.
        """
        times = int(times)
        if times < 0:
            return self.reverse().repeat(-times).reverse()
        return self._derive(lambda: iterables.repeat(self, times), 'repeat', times,
                            properties=self._inherit_immutable())

    def concat(self: 'Stream[T]', other: Iterable[U]) -> 'Stream[Union[T, U]]':
        """this stream followed by other"""
        def concat_data():
            yield from self
            yield from other
        return self._derive(concat_data, 'concat', other)

    def unshift(self: 'Stream[T]', other: Iterable[U]) -> 'Stream[Union[T, U]]':
        """other followed by this stream"""
        def unshift_data():
            yield from other
            yield from self
        return self._derive(unshift_data, 'unshift', other)

    def append(self: 'Stream[T]', value: T) -> 'Stream[T]':
        """adds a value to the end"""
        return self._derive(lambda: iterables.append(self, value), 'append', value,
                            properties=self._inherit_immutable())

    def prepend(self: 'Stream[T]', value: T) -> 'Stream[T]':
        """adds a value to the start"""
        return self._derive(lambda: iterables.prepend(self, value), 'prepend', value,
                            properties=self._inherit_immutable())

    def insert(self: 'Stream[T]', other: Iterable[U], at: int) -> 'Stream[Union[T, U]]':
        """the values of other inserted before index at"""
        at = require_non_negative('at', int(at))

        def insert_data():
            iterator = iter(self)
            yield from islice(iterator, at)
            yield from other
            yield from iterator
        return self._derive(insert_data, 'insert', other, at)

    def insert_single(self: 'Stream[T]', value: T, at: int) -> 'Stream[T]':
        """a single value inserted before index at"""
        at = require_non_negative('at', int(at))

        def insert_data():
            iterator = iter(self)
            yield from islice(iterator, at)
            yield value
            yield from iterator
        return self._derive(insert_data, 'insert_single', value, at,
                            properties=self._inherit_immutable())

    def remove(self: 'Stream[T]', start: int, delete_count: int = 1) -> 'Stream[T]':
        """
        removes delete_count values beginning at start, like list slicing deletion.
        a negative start counts from the end.
        """
        start = int(start)
        delete_count = require_non_negative('delete_count', int(delete_count))

        if start < 0:
            def remove_from_end():
                values = self.to_list()
                begin = max(len(values) + start, 0)
                del values[begin:begin + delete_count]
                return values
            return self._derive(remove_from_end, 'remove', start, delete_count,
                                properties=SourceProperties(one_off=True,
                                                            immutable=self._properties.immutable))

        def remove_data():
            iterator = iter(self)
            yield from islice(iterator, start)
            # drain the removed values without keeping them
            for _ in islice(iterator, delete_count):
                pass
            yield from iterator
        return self._derive(remove_data, 'remove', start, delete_count,
                            properties=self._inherit_immutable())

    # --- chaining helpers ---

    def then(self: 'Stream[T]', next_step: Callable[['Stream[T]'], R]) -> R:
        """calls next_step with this stream and returns its result"""
        return next_step(self)


def _identity(value):
    return value
