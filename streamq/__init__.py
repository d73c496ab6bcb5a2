r"""
      _
  ___| |_ _ __ ___  __ _ _ __ ___   __ _
 / __| __| '__/ _ \/ _` | '_ ` _ \ / _` |
 \__ \ |_| | |  __/ (_| | | | | | | (_| |
 |___/\__|_|  \___|\__,_|_| |_| |_|\__, |
                                      |_|
"""
import logging

# expose the main classes
from .stream import Stream, OrderedStream
from .typefilter import TypeFilteredStream, TypeFilteredOutStream

# expose the factory functions
from .factories import (
    of,
    from_iterable,
    from_func,
    from_generator,
    literal,
    from_range,
    generate,
    empty,
    stream,
    S,
)

# expose supporting types, errors and helpers
from .types import SourceProperties, Shape, Operation
from .errors import StreamError, EmptySequenceError, CardinalityError
from .extensions.terminal import BREAK
from .compare import smart_compare, multi_compare
from .config import configure

logging.getLogger(__name__).addHandler(logging.NullHandler())

# define what `import *` does
__all__ = [
    "Stream",
    "OrderedStream",
    "TypeFilteredStream",
    "TypeFilteredOutStream",
    "of",
    "from_iterable",
    "from_func",
    "from_generator",
    "literal",
    "from_range",
    "generate",
    "empty",
    "stream",
    "S",
    "SourceProperties",
    "Shape",
    "Operation",
    "StreamError",
    "EmptySequenceError",
    "CardinalityError",
    "BREAK",
    "smart_compare",
    "multi_compare",
    "configure",
]
