"""
source-agnostic building blocks.

every function here takes plain iterables (lists, sets, dicts, generators, streams)
and knows nothing about stream properties. generator functions are re-run on each
call, so a stream can wrap `lambda: distinct(source)` and get a fresh pass every
time it is iterated.
"""
from __future__ import annotations
import logging
import random as _random
from collections.abc import Mapping, Sequence, Set as AbstractSet, Sized
from itertools import count as _count, islice
from .types import *
from .errors import EmptySequenceError

logger = logging.getLogger(__name__)


# --- memo cells ---

class _Lazy(Generic[T]):
    """a getter that runs once. a raised exception is remembered and raised again."""

    __slots__ = ('_getter', '_state', '_value')

    _PENDING, _DONE, _FAILED = 0, 1, 2

    def __init__(self, getter: Callable[[], T]):
        self._getter = getter
        self._state = self._PENDING
        self._value = None

    def __call__(self) -> T:
        if self._state == self._PENDING:
            try:
                self._value = self._getter()
            except Exception as e:
                self._value = e
                self._state = self._FAILED
                self._getter = None
                raise
            self._state = self._DONE
            self._getter = None
        if self._state == self._FAILED:
            raise self._value
        return self._value

    @property
    def is_evaluated(self) -> bool:
        return self._state != self._PENDING


def lazy(getter: Callable[[], T]) -> Callable[[], T]:
    """wrap getter so it is evaluated on first call and cached, failures included"""
    return _Lazy(getter)


class Reiterable(Generic[T]):
    """an iterable whose every iteration calls the generator function again"""

    def __init__(self, generator_func: Callable[[], Iterator[T]]):
        self._generator_func = generator_func

    def __iter__(self) -> Iterator[T]:
        return iter(self._generator_func())


# --- container shapes ---

def shape_of(collection: Iterable) -> Shape:
    """classify a container by what it can do cheaply"""
    if isinstance(collection, (AbstractSet, Mapping)):
        return Shape.HASHED
    if isinstance(collection, Sequence):
        return Shape.INDEXED
    return Shape.SEQUENTIAL


def is_solid(collection: Iterable) -> bool:
    """whether the collection is already a materialised container"""
    return isinstance(collection, (list, tuple, set, frozenset, dict))


def is_iterable(value: Any) -> bool:
    try:
        iter(value)
    except TypeError:
        return False
    return True


# --- membership ---

class _ByIdentity:
    """stands in for an unhashable value inside sets and dicts, compared by identity"""

    __slots__ = ('value',)

    def __init__(self, value):
        self.value = value

    def __hash__(self):
        return id(self.value)

    def __eq__(self, other):
        return isinstance(other, _ByIdentity) and other.value is self.value


def membership_key(value: Any) -> Any:
    """
    the key a value is tracked under in set-like operations.
    hashable values use normal hash/eq semantics, unhashable ones (lists, dicts,
    plain mutable objects) are tracked by identity. no deep comparison is done.
    """
    try:
        hash(value)
    except TypeError:
        return _ByIdentity(value)
    return value


def key_value(key: Any) -> Any:
    """inverse of membership_key"""
    return key.value if isinstance(key, _ByIdentity) else key


def includes(collection: Iterable[T], value: T) -> bool:
    # `in` on a string is a substring test, but its members are single characters
    if shape_of(collection) is not Shape.SEQUENTIAL and not isinstance(collection, (str, bytes)):
        try:
            return value in collection
        except TypeError:
            # unhashable value against a hashed container
            return False
    return any(item is value or item == value for item in collection)


# --- views and copies ---

def as_list(collection: Iterable[T]) -> List[T]:
    """the collection itself if it is a list, otherwise a new list"""
    return collection if isinstance(collection, list) else list(collection)


def as_set(collection: Iterable[T]) -> Set[T]:
    return collection if isinstance(collection, (set, frozenset)) else set(collection)


def _entry_key(entry):
    return entry[0]


def _entry_value(entry):
    return entry[1]


def to_dict(collection: Iterable[T],
            key_selector: Optional[KeySelector[T, K]] = None,
            value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
    """
    builds a new dict. without selectors each value is read as a (key, value)
    entry, except a mapping, which is copied as it is.
    """
    if key_selector is None and value_selector is None and isinstance(collection, Mapping):
        return dict(collection)
    key_of = key_selector or _entry_key
    value_of = value_selector or _entry_value
    return {key_of(item): value_of(item) for item in collection}


def as_dict(collection: Iterable[T],
            key_selector: Optional[KeySelector[T, K]] = None,
            value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
    if key_selector is None and value_selector is None and isinstance(collection, dict):
        return collection
    return to_dict(collection, key_selector, value_selector)


def as_solid(collection: Iterable[T]) -> Iterable[T]:
    return collection if is_solid(collection) else list(collection)


def copy_solid(collection: Iterable[T]) -> Iterable[T]:
    """a caller-owned copy keeping the container type of solid collections"""
    if isinstance(collection, (set, frozenset)): return set(collection)
    if isinstance(collection, dict): return dict(collection)
    return list(collection)


# --- positional queries ---

def count(collection: Iterable) -> int:
    if isinstance(collection, Sized):
        return len(collection)
    return sum(1 for _ in collection)


def non_iterated_count(collection: Iterable) -> Optional[int]:
    """the length if it is known without iterating, otherwise None"""
    return len(collection) if isinstance(collection, Sized) else None


def last(collection: Iterable[T]) -> Optional[T]:
    if shape_of(collection) is Shape.INDEXED:
        return collection[-1] if len(collection) > 0 else None
    result = None
    for result in collection:
        pass
    return result


def at(collection: Iterable[T], index: int) -> Optional[T]:
    """the value at index, counting from the end when negative. None when out of range"""
    if shape_of(collection) is Shape.INDEXED:
        try:
            return collection[index]
        except IndexError:
            return None
    if index < 0:
        buffered = list(collection)
        return buffered[index] if -index <= len(buffered) else None
    return next(islice(collection, index, None), None)


def join_strings(collection: Iterable[Any], separator: str = "") -> str:
    return separator.join(str(item) for item in collection)


# --- sequence building ---

def reverse(collection: Iterable[T]) -> Iterator[T]:
    buffered = collection if shape_of(collection) is Shape.INDEXED else list(collection)
    for index in range(len(buffered) - 1, -1, -1):
        yield buffered[index]


def append(collection: Iterable[T], value: T) -> Iterator[T]:
    yield from collection
    yield value


def prepend(collection: Iterable[T], value: T) -> Iterator[T]:
    yield value
    yield from collection


def flat(collection: Iterable[Any]) -> Iterator[Any]:
    """one level of flattening. strings and bytes are kept whole"""
    for item in collection:
        if isinstance(item, (str, bytes)) or not is_iterable(item):
            yield item
        else:
            yield from item


def merge(a: Iterable[T], b: Iterable[U]) -> Iterator[Union[T, U]]:
    """zipper merge: a0, b0, a1, b1, ... then whatever is left of the longer one"""
    iter_a, iter_b = iter(a), iter(b)
    for value_a in iter_a:
        yield value_a
        for value_b in iter_b:
            yield value_b
            break
        else:
            yield from iter_a
            return
    yield from iter_b


def repeat(collection: Iterable[T], times: int) -> Iterator[T]:
    """yields the collection times times, reading it only once"""
    if times <= 0:
        return
    cache = []
    for value in collection:
        cache.append(value)
        yield value
    for _ in range(times - 1):
        yield from cache


def number_range(start_or_end, end=None, step=None) -> Iterable:
    """
    range(end), range(start, end) or range(start, end, step).
    integers give a real range object (indexed and re-iterable); any float
    argument switches to a float generator.
    """
    if end is None:
        start, end = 0, start_or_end
    else:
        start = start_or_end
    if step is None:
        step = 1
    if step == 0:
        raise ValueError("step must not be zero")

    if all(isinstance(n, int) for n in (start, end, step)):
        return range(start, end, step)

    def float_range():
        i = start
        while (i < end) if step > 0 else (i > end):
            yield i
            i += step

    return Reiterable(float_range)


def generate(factory: Callable[[int], T], length: Optional[int] = None) -> Iterator[T]:
    """factory(index) for each index. infinite when length is None"""
    indices = _count() if length is None else range(int(length))
    for index in indices:
        yield factory(index)


# --- identity based set algebra ---

def distinct(collection: Iterable[T], identifier: Optional[Selector[T, Any]] = None) -> Iterator[T]:
    """unique values in first-seen order"""
    seen = set()
    for value in collection:
        key = membership_key(identifier(value) if identifier is not None else value)
        if key not in seen:
            seen.add(key)
            yield value


def including(collection: Iterable[T], needed: Iterable[T]) -> Iterator[T]:
    """the collection followed by the needed values it did not already contain"""
    seen = set()
    for value in collection:
        seen.add(membership_key(value))
        yield value
    for value in needed:
        key = membership_key(value)
        if key not in seen:
            seen.add(key)
            yield value


def excluding(collection: Iterable[T], remove: Iterable[T]) -> Iterator[T]:
    """values of the collection not found in remove"""
    removed = {membership_key(value) for value in remove}
    for value in collection:
        if membership_key(value) not in removed:
            yield value


def intersection(a: Iterable[T], b: Iterable[T]) -> Iterator[T]:
    """
    distinct values of a that are also found in b, as a's own objects in a's order.

    when both sides are hashed containers the smaller one is used to find the
    shared members. when only b is hashed it is looked up directly. otherwise b
    is read incrementally into a cache, only as far as needed to find each value
    of a, so the worst case is o(n*m) lookups against a cache that ends at o(n+m).
    """
    shape_a, shape_b = shape_of(a), shape_of(b)

    if shape_a is Shape.HASHED and shape_b is Shape.HASHED:
        logger.debug("intersection: two hashed containers (%d vs %d)", len(a), len(b))
        if len(a) <= len(b):
            for value in a:
                if value in b:
                    yield value
            return
        # b is smaller: find the shared members through b, then yield a's own
        # objects in a's order, stopping once every match has been seen
        shared = {value for value in b if value in a}
        remaining = len(shared)
        for value in a:
            if remaining == 0:
                break
            if value in shared:
                remaining -= 1
                yield value
        return

    seen = set()
    if shape_b is Shape.HASHED:
        logger.debug("intersection: looking values up in the hashed right side")
        for value in a:
            key = membership_key(value)
            if key in seen:
                continue
            try:
                found = value in b
            except TypeError:
                found = False
            if found:
                seen.add(key)
                yield value
        return

    logger.debug("intersection: caching the right side incrementally")
    remaining = iter(b)
    cache = set()
    exhausted = False
    for value in a:
        key = membership_key(value)
        if key in seen:
            continue
        found = key in cache
        while not found and not exhausted:
            try:
                other_key = membership_key(next(remaining))
            except StopIteration:
                exhausted = True
                break
            cache.add(other_key)
            found = other_key == key
        if found:
            seen.add(key)
            yield value


# --- grouping and joining ---

def group_by(collection: Iterable[T],
             key_selector: KeySelector[T, K],
             value_selector: Optional[Selector[T, V]] = None) -> List[Tuple[K, List[V]]]:
    """groups in first-seen key order, as (key, values) pairs"""
    groups: Dict[Any, List] = {}
    for item in collection:
        key = membership_key(key_selector(item))
        value = value_selector(item) if value_selector is not None else item
        bucket = groups.get(key)
        if bucket is None:
            groups[key] = [value]
        else:
            bucket.append(value)
    return [(key_value(key), values) for key, values in groups.items()]


def _lookup(inner: Iterable[U], inner_key_selector: KeySelector[U, K]) -> Dict[Any, List[U]]:
    lookup: Dict[Any, List[U]] = {}
    for item in inner:
        lookup.setdefault(membership_key(inner_key_selector(item)), []).append(item)
    return lookup


def group_join(outer: Iterable[T], inner: Iterable[U],
               key_selector: KeySelector[T, K],
               inner_key_selector: KeySelector[U, K],
               result_selector: Callable[[T, List[U]], R],
               comparison: Optional[Callable[[K, K], bool]] = None) -> Iterator[R]:
    """
    pairs every outer value with the list of inner values sharing its key.
    the inner side is read in full before the outer side starts. with a custom
    comparison every outer key is tested against every inner key.
    """
    if comparison is None:
        lookup = _lookup(inner, inner_key_selector)
        for item in outer:
            yield result_selector(item, lookup.get(membership_key(key_selector(item)), []))
        return

    keyed_inner = [(inner_key_selector(item), item) for item in inner]
    for item in outer:
        key = key_selector(item)
        yield result_selector(item, [inner_item for inner_key, inner_item in keyed_inner
                                     if comparison(key, inner_key)])


def inner_join(outer: Iterable[T], inner: Iterable[U],
               key_selector: KeySelector[T, K],
               inner_key_selector: KeySelector[U, K],
               result_selector: Callable[[T, U], R],
               comparison: Optional[Callable[[K, K], bool]] = None) -> Iterator[R]:
    """one result per matching (outer, inner) pair, in outer then inner order"""
    if comparison is None:
        lookup = _lookup(inner, inner_key_selector)
        for item in outer:
            for inner_item in lookup.get(membership_key(key_selector(item)), ()):
                yield result_selector(item, inner_item)
        return

    keyed_inner = [(inner_key_selector(item), item) for item in inner]
    for item in outer:
        key = key_selector(item)
        for inner_key, inner_item in keyed_inner:
            if comparison(key, inner_key):
                yield result_selector(item, inner_item)


# --- sparse and alternating selection ---

def sparse_indices(length: int, count: int) -> range:
    """exactly min(count, length) indices spread evenly over range(length)"""
    if count <= 0:
        return range(0)
    if count >= length:
        return range(length)
    step = length // count
    return range(0, step * count, step)


def take_sparse(collection: Iterable[T], count: int) -> List[T]:
    values = as_list(collection)
    return [values[index] for index in sparse_indices(len(values), count)]


def skip_sparse(collection: Iterable[T], count: int) -> List[T]:
    values = as_list(collection)
    skipped = set(sparse_indices(len(values), count))
    return [value for index, value in enumerate(values) if index not in skipped]


def alternating(collection: Iterable[T], interval: int = 2) -> Iterator[T]:
    """every interval-th value, starting with the first"""
    for index, value in enumerate(collection):
        if index % interval == 0:
            yield value


def alternating_skip(collection: Iterable[T], interval: int = 2) -> Iterator[T]:
    """everything alternating() would not yield"""
    for index, value in enumerate(collection):
        if index % interval != 0:
            yield value


# --- randomness ---

def shuffle(values: List[T], rng: Optional[_random.Random] = None) -> None:
    """fisher-yates shuffle, in place"""
    rng = rng or _random
    for i in range(len(values) - 1, 0, -1):
        j = rng.randrange(i + 1)
        values[i], values[j] = values[j], values[i]


def choice(values: Sequence[T], rng: Optional[_random.Random] = None) -> T:
    if len(values) == 0:
        raise EmptySequenceError("cannot choose from an empty sequence")
    return values[(rng or _random).randrange(len(values))]


def choose_and_remove(values: List[T], rng: Optional[_random.Random] = None) -> T:
    """removes a random value from the list and returns it"""
    if not values:
        raise EmptySequenceError("cannot choose from an empty sequence")
    return values.pop((rng or _random).randrange(len(values)))
