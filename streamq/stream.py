from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from .types import *
from . import iterables
from .compare import combine_orders, reverse_order, sort_key

# --- operator families ---
from .extensions.core import _CoreOperations
from .extensions.set import _SetOperations
from .extensions.join import _JoinOperations
from .extensions.grouping import _GroupingOperations
from .extensions.sampling import _SamplingOperations
from .extensions.terminal import _TerminalOperations

logger = logging.getLogger(__name__)


# --- abstract base class ---

class IStream(ABC, Generic[T]):
    @abstractmethod
    def _base_source(self) -> Iterable[T]:
        """the concrete iterable this stream bottoms out at"""
        pass


# --- base stream implementation ---

class _BaseStream(IStream[T]):
    def __init__(self, get_source: SourceGetter[T],
                 properties: SourceProperties = NO_PROPERTIES,
                 operation: Optional[Operation] = None):
        """init with a function that returns the source whenever called"""
        self._get_source = get_source
        self._properties = properties
        self._operation = operation or Operation('from_func')

        # view caches exist only for immutable sources
        if properties.immutable:
            self._list_view = self._memo('list', lambda: iterables.as_list(self._base_source()))
            self._set_view = self._memo('set', lambda: iterables.as_set(self._base_source()))
            self._dict_view = self._memo('dict', lambda: iterables.as_dict(self._base_source()))
            self._solid_view = self._memo('solid', lambda: iterables.as_solid(self._base_source()))
        else:
            self._list_view = self._set_view = self._dict_view = self._solid_view = None

    def _memo(self, kind: str, build: Callable[[], Any]) -> Callable[[], Any]:
        def build_and_log():
            view = build()
            logger.debug("cached %s view of %s", kind, self._operation.describe())
            return view
        return iterables.lazy(build_and_log)

    # --- source access ---

    @staticmethod
    def base_source_of(source: Iterable[T]) -> Iterable[T]:
        """unwrap nested streams down to the first iterable that is not a stream"""
        while isinstance(source, _BaseStream):
            source = source._get_source()
        return source

    def _base_source(self) -> Iterable[T]:
        return _BaseStream.base_source_of(self._get_source())

    @property
    def properties(self) -> SourceProperties:
        return self._properties

    @property
    def operation(self) -> Operation:
        return self._operation

    def _derive(self, get_source: SourceGetter[U], name: str, *args,
                properties: SourceProperties = NO_PROPERTIES,
                upstream: Tuple = ()) -> 'Stream[U]':
        """a new stream built from this one by the named operator"""
        return Stream(get_source, properties, Operation(name, args, (self,) + upstream))

    def _inherit_immutable(self) -> SourceProperties:
        return SourceProperties(immutable=self._properties.immutable)

    def _immutable_with(self, other: Any) -> SourceProperties:
        """immutable only when both this stream and other are immutable streams"""
        return SourceProperties(immutable=self._properties.immutable
                                and isinstance(other, _BaseStream)
                                and other._properties.immutable)

    def __iter__(self) -> Iterator[T]:
        return iter(self._base_source())

    # --- read views: cached when immutable, never copied when the shape already fits ---

    def as_list(self) -> List[T]:
        """a list of the contents. treat it as read-only; use to_list() for a copy"""
        if self._list_view is not None:
            return self._list_view()
        return iterables.as_list(self._base_source())

    def as_set(self) -> Set[T]:
        """a set of the contents. treat it as read-only; use to_set() for a copy"""
        if self._set_view is not None:
            return self._set_view()
        return iterables.as_set(self._base_source())

    def as_dict(self, key_selector: Optional[KeySelector[T, K]] = None,
                value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
        """
        a dict of the contents, read as (key, value) entries unless selectors are
        given. treat it as read-only; use to_dict() for a copy.
        """
        if key_selector is None and value_selector is None and self._dict_view is not None:
            return self._dict_view()
        return iterables.as_dict(self._base_source(), key_selector, value_selector)

    def as_solid(self) -> Iterable[T]:
        """the contents as some materialised container (list, tuple, set or dict)"""
        if self._solid_view is not None:
            return self._solid_view()
        return iterables.as_solid(self._base_source())

    # --- caller-owned copies; one-off sources of the right shape are handed over ---

    def to_list(self) -> List[T]:
        """a new list of the contents, safe to modify"""
        source = self._get_source()
        if self._properties.one_off and type(source) is list:
            return source
        return list(_BaseStream.base_source_of(source))

    def to_set(self) -> Set[T]:
        """a new set of the contents, safe to modify"""
        source = self._get_source()
        if self._properties.one_off and type(source) is set:
            return source
        return set(_BaseStream.base_source_of(source))

    def to_dict(self, key_selector: Optional[KeySelector[T, K]] = None,
                value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
        """a new dict of the contents, safe to modify"""
        source = self._get_source()
        if (self._properties.one_off and key_selector is None and value_selector is None
                and type(source) is dict):
            return source
        return iterables.to_dict(_BaseStream.base_source_of(source), key_selector, value_selector)

    def to_solid(self) -> Iterable[T]:
        """a new materialised container of the contents, safe to modify"""
        source = self._get_source()
        if self._properties.one_off and type(source) in (list, set, dict):
            return source
        return iterables.copy_solid(_BaseStream.base_source_of(source))

    # --- snapshots ---

    def solidify(self) -> 'Stream[T]':
        """
        records the contents now and returns an immutable stream of the recording.
        the result no longer follows the original source.
        """
        solid = self.as_solid() if self._properties.immutable else self.to_solid()
        logger.debug("solidified %s", self._operation.describe())
        return self._derive(lambda: solid, 'solidify', properties=SourceProperties(immutable=True))

    def lazy_solidify(self) -> 'Stream[T]':
        """like solidify(), but the recording is made on first use and shared afterwards"""
        def record():
            logger.debug("lazily solidified %s", self._operation.describe())
            return self.as_solid() if self._properties.immutable else self.to_solid()
        return self._derive(iterables.lazy(record), 'lazy_solidify',
                            properties=SourceProperties(immutable=True))

    cache = lazy_solidify

    # --- introspection ---

    def lineage(self) -> List[str]:
        """the operators that built this stream, oldest first. nothing is iterated"""
        steps = []
        current = self
        while isinstance(current, _BaseStream):
            steps.append(current._operation.describe())
            upstream = current._operation.upstream
            current = upstream[0] if upstream else None
        return steps[::-1]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({' -> '.join(self.lineage())}, {self._properties!r})"

    def __str__(self) -> str:
        return self.mk_string(",")


# --- main stream class ---

class Stream(
    _BaseStream[T],
    _CoreOperations[T],
    _SetOperations[T],
    _JoinOperations[T],
    _GroupingOperations[T],
    _SamplingOperations[T],
    _TerminalOperations[T]
):
    """a lazy, chainable view over an iterable source."""
    pass


# --- ordered stream class ---

class OrderedStream(Stream[T]):
    """
    a stream sorted by a list of orders, allowing then_by() to add more.
    the sort happens when the stream is iterated, always starting from the
    unsorted original source.
    """

    def __init__(self, get_source: SourceGetter[T], orders: Iterable[Order],
                 properties: SourceProperties = NO_PROPERTIES,
                 operation: Optional[Operation] = None):
        orders = tuple(orders)

        def sorted_source():
            source = get_source()
            values = source if properties.one_off and type(source) is list else list(source)
            # the comparator is rebuilt on each pass, never shared between orderings
            values.sort(key=sort_key(combine_orders(orders)))
            return values

        super().__init__(sorted_source, SourceProperties(one_off=True), operation)
        self._original_get_source = get_source
        self._original_properties = properties
        self._orders = orders

    @property
    def orders(self) -> Tuple[Order, ...]:
        return self._orders

    def then_by(self, order: Order) -> 'OrderedStream[T]':
        """breaks ties of the previous orders with a key selector or comparator"""
        return OrderedStream(self._original_get_source, self._orders + (order,),
                             self._original_properties, Operation('then_by', (order,), (self,)))

    def then_by_descending(self, order: Order) -> 'OrderedStream[T]':
        """descending version of then_by"""
        return OrderedStream(self._original_get_source, self._orders + (reverse_order(order),),
                             self._original_properties, Operation('then_by_descending', (order,), (self,)))
