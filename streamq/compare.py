from __future__ import annotations
import inspect
import locale
import numbers
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from functools import cmp_to_key
import numpy as np
from .types import *
from . import config

# --- type ranking ---
# the order between types is part of the public contract: sorting a mixed
# sequence must give the same layout on every run and every platform.

RANK_FUNCTION = 1
RANK_ARRAY = 2
RANK_OBJECT = 3
RANK_ENUM = 4
RANK_BOOLEAN = 5
RANK_NUMBER = 6
RANK_STRING = 7
RANK_NONE = 8

# numpy registers its scalars with the numbers abcs; Decimal only with Number
_REAL_TYPES = (numbers.Real, Decimal)
_BOOLEAN_TYPES = (bool, np.bool_)


def is_boolean(value: Any) -> bool:
    return isinstance(value, _BOOLEAN_TYPES)


def is_number(value: Any) -> bool:
    """a real number of any kind, numpy scalars included. booleans are not numbers"""
    return isinstance(value, _REAL_TYPES) and not is_boolean(value)


def rate_type(value: Any) -> int:
    """the rank of a value's type in the general ordering"""
    if value is None: return RANK_NONE
    # bool is an int subclass, so it has to be checked first
    if is_boolean(value): return RANK_BOOLEAN
    if isinstance(value, Enum): return RANK_ENUM
    if is_number(value): return RANK_NUMBER
    if isinstance(value, str): return RANK_STRING
    if isinstance(value, (list, tuple)): return RANK_ARRAY
    if callable(value): return RANK_FUNCTION
    return RANK_OBJECT


def _sign(difference) -> int:
    # int() first: numpy comparisons give np.bool_, which can't be subtracted
    return int(difference > 0) - int(difference < 0)


def _natural_compare(a, b) -> int:
    return int(a > b) - int(a < b)


def compare_strings(a: str, b: str) -> int:
    if config.settings.locale_collation:
        return _sign(locale.strcoll(a, b))
    return _natural_compare(a, b)
def _property_count(value: Any) -> int:
    if isinstance(value, Mapping): return len(value)
    if hasattr(value, '__dict__'): return len(vars(value))
    if hasattr(value, '__slots__'):
        return sum(1 for name in value.__slots__ if hasattr(value, name))
    return 0


def smart_compare(a: Any, b: Any,
                  compare_objects: Optional[Comparator] = None,
                  compare_arrays: Optional[Comparator] = None) -> int:
    """
    compares any two values without a caller supplied comparator.

    values of different types are ordered by type rank:
    function < array < object < enum < bool < number < string < none.
    values of the same rank compare naturally. arrays and objects fall back to
    their element/property count unless a hook is given. returns -1, 0 or 1.
    """
    rank_a, rank_b = rate_type(a), rate_type(b)
    if rank_a != rank_b:
        return _sign(rank_a - rank_b)

    if rank_a == RANK_NUMBER:
        return _natural_compare(a, b)
    if rank_a == RANK_STRING:
        return compare_strings(a, b)
    if rank_a == RANK_BOOLEAN:
        return int(a) - int(b)
    if rank_a == RANK_ARRAY:
        if compare_arrays is not None: return _sign(compare_arrays(a, b))
        return _sign(len(a) - len(b))
    if rank_a == RANK_OBJECT:
        if compare_objects is not None: return _sign(compare_objects(a, b))
        return _sign(_property_count(a) - _property_count(b))
    if rank_a == RANK_ENUM:
        return compare_strings(str(a), str(b))
    if rank_a == RANK_FUNCTION:
        return compare_strings(getattr(a, '__qualname__', repr(a)), getattr(b, '__qualname__', repr(b)))
    return 0


# --- order specifications ---

def _required_positional_count(func: Callable) -> int:
    """how many positional arguments func needs. unknown signatures count as one."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return 1
    return sum(1 for p in signature.parameters.values()
               if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty)


def order_is_comparator(order: Order) -> bool:
    """two required arguments make a comparator; anything else is a key selector"""
    return _required_positional_count(order) > 1


def order_as_comparator(order: Order) -> Comparator:
    if order_is_comparator(order):
        return order
    return lambda a, b: smart_compare(order(a), order(b))


def compare_by_order(a: Any, b: Any, order: Order) -> int:
    if order_is_comparator(order):
        return order(a, b)
    return smart_compare(order(a), order(b))


def reverse_order(order: Order) -> Comparator:
    """descending version of an order: swaps the arguments, never negates the result"""
    comparator = order_as_comparator(order)
    return lambda a, b: comparator(b, a)


def multi_compare(a: Any, b: Any, orders: Iterable[Order]) -> int:
    """compare by each order in turn, stopping at the first that tells a and b apart"""
    for order in orders:
        result = compare_by_order(a, b, order)
        if result != 0:
            return result
    return 0


def combine_orders(orders: Iterable[Order]) -> Comparator:
    """a single comparator equivalent to multi_compare over orders, normalised once"""
    comparators = [order_as_comparator(order) for order in orders]

    def compare(a, b):
        for comparator in comparators:
            result = comparator(a, b)
            if result != 0:
                return result
        return 0

    return compare


def sort_key(comparator: Optional[Comparator] = None):
    """a key function for list.sort/sorted from a comparator (default: smart_compare)"""
    return cmp_to_key(comparator if comparator is not None else smart_compare)
