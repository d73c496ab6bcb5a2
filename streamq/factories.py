import typing
from .types import *
from . import iterables

if typing.TYPE_CHECKING:
    from .stream import Stream


def of(source: Iterable[T]) -> 'Stream[T]':
    """create a live stream over an iterable. changes to the source show through"""
    from .stream import Stream
    return Stream(lambda: source, NO_PROPERTIES, Operation(f"of[{type(source).__name__}]"))


def from_func(getter: SourceGetter[T]) -> 'Stream[T]':
    """create a stream over whatever getter returns, called again on every use"""
    from .stream import Stream
    return Stream(getter, NO_PROPERTIES, Operation('from_func', (getter,)))


def from_generator(generator_func: Callable[[], Iterator[T]]) -> 'Stream[T]':
    """create a stream from a generator function, restarted on every iteration"""
    from .stream import Stream
    return Stream(lambda: iterables.Reiterable(generator_func), NO_PROPERTIES,
                  Operation('from_generator', (generator_func,)))


def literal(*values: T) -> 'Stream[T]':
    """create an immutable stream of the given values"""
    from .stream import Stream
    snapshot = list(values)
    return Stream(lambda: snapshot, SourceProperties(immutable=True), Operation('literal'))


def from_range(start_or_end, end=None, step=None) -> 'Stream[Any]':
    """create an immutable stream like range(); floats are allowed"""
    from .stream import Stream
    source = iterables.number_range(start_or_end, end, step)
    return Stream(lambda: source, SourceProperties(immutable=True),
                  Operation('from_range', (start_or_end, end, step)))


def generate(factory: Callable[[int], T], length: Optional[int] = None) -> 'Stream[T]':
    """create a stream of factory(index). infinite when length is None"""
    from .stream import Stream
    return Stream(lambda: iterables.generate(factory, length), NO_PROPERTIES,
                  Operation('generate', (factory, length)))


def empty() -> 'Stream[Any]':
    """create empty stream"""
    from .stream import Stream
    return Stream(lambda: [], SourceProperties(one_off=True, immutable=True), Operation('empty'))


# --- aliases ---
from_iterable = of
stream = of
S = of
