from __future__ import annotations

import numbers
from collections.abc import Mapping
from enum import Enum
from .types import *
from .compare import rate_type, is_number, is_boolean, RANK_FUNCTION, RANK_OBJECT
from .stream import Stream


# named type tests accepted by filter_to / filter_out
TYPE_TESTS: Dict[str, Predicate[Any]] = {
    'number': is_number,
    'integer': lambda value: isinstance(value, numbers.Integral) and not is_boolean(value),
    'float': lambda value: is_number(value) and not isinstance(value, numbers.Integral),
    'string': lambda value: isinstance(value, str),
    'array': lambda value: isinstance(value, (list, tuple)),
    'list': lambda value: isinstance(value, list),
    'tuple': lambda value: isinstance(value, tuple),
    'dict': lambda value: isinstance(value, Mapping),
    'object': lambda value: rate_type(value) == RANK_OBJECT,
    'none': lambda value: value is None,
    'null': lambda value: value is None,
    'boolean': is_boolean,
    'true': lambda value: is_boolean(value) and bool(value),
    'false': lambda value: is_boolean(value) and not bool(value),
    'function': lambda value: rate_type(value) == RANK_FUNCTION,
    'enum': lambda value: isinstance(value, Enum),
    '0': lambda value: is_number(value) and value == 0,
    'empty_string': lambda value: value == '' and isinstance(value, str),
}


def type_test(option: Union[str, type]) -> Predicate[Any]:
    """the predicate for a named option or a class"""
    if isinstance(option, type):
        return lambda value: isinstance(value, option)
    try:
        return TYPE_TESTS[option]
    except (KeyError, TypeError):
        raise ValueError(f"unknown type filter option: {option!r}") from None


class TypeFilteredStream(Stream[T]):
    """keeps values matching any of its type tests. .and_() accepts one more type"""

    def __init__(self, get_source: SourceGetter[T], tests: Tuple[Predicate[Any], ...],
                 properties: SourceProperties = NO_PROPERTIES,
                 operation: Optional[Operation] = None):
        tests = tuple(tests)
        super().__init__(lambda: (value for value in get_source()
                                  if any(test(value) for test in tests)),
                         SourceProperties(immutable=properties.immutable), operation)
        self._original_get_source = get_source
        self._tests = tests

    def and_(self, option: Union[str, type]) -> 'TypeFilteredStream[T]':
        return TypeFilteredStream(self._original_get_source, self._tests + (type_test(option),),
                                  self._properties, Operation('and', (option,), (self,)))


class TypeFilteredOutStream(Stream[T]):
    """drops values matching any of its type tests. .and_() drops one more type"""

    def __init__(self, get_source: SourceGetter[T], tests: Tuple[Predicate[Any], ...],
                 properties: SourceProperties = NO_PROPERTIES,
                 operation: Optional[Operation] = None):
        tests = tuple(tests)
        super().__init__(lambda: (value for value in get_source()
                                  if not any(test(value) for test in tests)),
                         SourceProperties(immutable=properties.immutable), operation)
        self._original_get_source = get_source
        self._tests = tests

    def and_(self, option: Union[str, type]) -> 'TypeFilteredOutStream[T]':
        return TypeFilteredOutStream(self._original_get_source, self._tests + (type_test(option),),
                                     self._properties, Operation('and', (option,), (self,)))
