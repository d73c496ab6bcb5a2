from enum import Enum

import numpy as np

import suite
from streamq import S, of, literal, OrderedStream, smart_compare, multi_compare, configure
from streamq.compare import (
    rate_type, order_is_comparator, reverse_order, combine_orders,
    RANK_FUNCTION, RANK_ARRAY, RANK_OBJECT, RANK_ENUM, RANK_BOOLEAN, RANK_NUMBER, RANK_STRING, RANK_NONE,
)
from dgen import from_schema

test = suite.test
assert_that = suite.assert_that
assert_equal = suite.assert_equal

student_schema = {
    'id': {'_provider': 'sequence'},
    'grade': ('pyint', {'min_value': 1, 'max_value': 4}),
    'score': ('pyint', {'min_value': 0, 'max_value': 100}),
}

students = from_schema(student_schema, seed=9).take(30)


class Colour(Enum):
    RED = 1
    BLUE = 2


class Point:
    def __init__(self, *coords):
        for name, value in zip('xyz', coords):
            setattr(self, name, value)


def named_function():
    pass


# --- the general comparator ---

@test("type ranks follow the documented order")
def test_type_ranks():
    samples = [named_function, [1], Point(1), Colour.RED, True, 3, 'a', None]
    expected = [RANK_FUNCTION, RANK_ARRAY, RANK_OBJECT, RANK_ENUM, RANK_BOOLEAN, RANK_NUMBER, RANK_STRING, RANK_NONE]
    assert_equal([rate_type(value) for value in samples], expected)
    assert_equal(expected, sorted(expected))


@test("smart_compare orders mixed types by rank")
def test_smart_compare_mixed():
    mixed = [None, 'b', 2, False, Colour.BLUE, Point(), (1,), named_function]
    result = S(mixed).sort().to_list()
    assert_equal(result, [named_function, (1,), mixed[5], Colour.BLUE, False, 2, 'b', None])


@test("smart_compare within one type")
def test_smart_compare_same_type():
    configure(locale_collation=False)
    try:
        assert_equal(smart_compare(1, 2), -1)
        assert_equal(smart_compare(2.5, 2.5), 0)
        assert_equal(smart_compare('b', 'a'), 1)
        assert_equal(smart_compare(True, False), 1)
        assert_equal(smart_compare([1, 2], [9]), 1)
        assert_equal(smart_compare(Point(1, 2), Point(5)), 1)
        assert_equal(smart_compare({'a': 1}, {'a': 1, 'b': 2}), -1)
    finally:
        configure(locale_collation=True)


@test("smart_compare hooks replace length comparison")
def test_smart_compare_hooks():
    by_first = lambda a, b: a[0] - b[0]
    assert_equal(smart_compare([5], [1, 2], compare_arrays=by_first), 1)
    by_x = lambda a, b: a.x - b.x
    assert_equal(smart_compare(Point(1, 1), Point(3), compare_objects=by_x), -1)


@test("smart_compare is antisymmetric")
def test_smart_compare_antisymmetric():
    values = [None, 'x', 'y', 0, 1.5, True, [1], [], Colour.RED, Point(1)]
    for a in values:
        for b in values:
            assert_equal(smart_compare(a, b), -smart_compare(b, a), f"{a!r} vs {b!r}")


@test("numpy scalars rank and compare as numbers")
def test_smart_compare_numpy():
    assert_equal(rate_type(np.int64(3)), RANK_NUMBER)
    assert_equal(rate_type(np.float32(0.5)), RANK_NUMBER)
    assert_equal(rate_type(np.bool_(True)), RANK_BOOLEAN)
    assert_equal(smart_compare(np.int64(3), np.int64(1)), 1)
    assert_equal(smart_compare(np.float64(1.5), np.float64(3.5)), -1)
    assert_equal(smart_compare(np.int64(2), 2.0), 0)
    assert_equal(smart_compare(np.bool_(False), np.bool_(True)), -1)


@test("sort and order_by handle values from numpy arrays")
def test_sort_numpy_values():
    assert_equal(of(list(np.array([3, 1, 2]))).sort().to_list(), [1, 2, 3])
    rows = [{'v': np.float64(3.5)}, {'v': np.float64(1.5)}, {'v': np.float64(2.5)}]
    assert_equal(of(rows).order_by(lambda r: r['v']).map(lambda r: float(r['v'])).to_list(), [1.5, 2.5, 3.5])
    assert_equal(of(rows).order_by(lambda a, b: a['v'] - b['v']).map(lambda r: float(r['v'])).to_list(),
                 [1.5, 2.5, 3.5])
    assert_equal(S(np.arange(5)).order_descending().to_list(), [4, 3, 2, 1, 0])


# --- order specifications ---

@test("arity decides between key selector and comparator")
def test_order_arity():
    assert_that(not order_is_comparator(lambda x: x), "one argument is a key selector")
    assert_that(order_is_comparator(lambda a, b: a - b), "two arguments is a comparator")
    assert_that(not order_is_comparator(lambda x, scale=2: x * scale), "optional arguments don't count")
    assert_that(not order_is_comparator(len), "builtins with one argument are key selectors")


@test("reverse_order swaps arguments")
def test_reverse_order():
    descending = reverse_order(lambda x: x)
    assert_equal(descending(1, 2), 1)
    assert_equal(descending(2, 2), 0)


@test("multi_compare falls through to the next order on ties")
def test_multi_compare():
    orders = [lambda p: p[0], lambda a, b: b[1] - a[1]]
    assert_equal(multi_compare((1, 5), (2, 0), orders), -1)
    assert_that(multi_compare((1, 5), (1, 9), orders) > 0, "higher second value sorts first")
    assert_equal(multi_compare((1, 5), (1, 5), orders), 0)
    assert_that(combine_orders(orders)((1, 5), (1, 9)) > 0, "combined comparator agrees")


# --- sort ---

@test("sort orders numbers and takes a comparator")
def test_sort():
    assert_equal(S([3, 1, 2]).sort().to_list(), [1, 2, 3])
    assert_equal(S([3, 1, 2]).sort(lambda a, b: b - a).to_list(), [3, 2, 1])


@test("sort leaves the source untouched")
def test_sort_out_of_place():
    source = [3, 1, 2]
    of(source).sort().to_list()
    assert_equal(source, [3, 1, 2])


@test("sort result is a permutation and ordered")
def test_sort_properties():
    scores = students.map(lambda s: s['score'])
    result = scores.sort().to_list()
    assert_equal(sorted(scores.to_list()), result)


# --- order_by / then_by ---

@test("order_by with a key selector")
def test_order_by_key():
    people = S([{'name': 'b', 'age': 30}, {'name': 'a', 'age': 25}, {'name': 'c', 'age': 35}])
    assert_equal(people.order_by(lambda p: p['age']).map(lambda p: p['name']).to_list(), ['a', 'b', 'c'])
    assert_equal(people.order_by_descending(lambda p: p['age']).map(lambda p: p['name']).to_list(),
                 ['c', 'b', 'a'])


@test("order_by with a comparator")
def test_order_by_comparator():
    assert_equal(S(['ccc', 'a', 'bb']).order_by(lambda a, b: len(a) - len(b)).to_list(), ['a', 'bb', 'ccc'])
    assert_equal(S(['ccc', 'a', 'bb']).order_by_descending(lambda a, b: len(a) - len(b)).to_list(),
                 ['ccc', 'bb', 'a'])


@test("then_by breaks ties of the first order")
def test_then_by():
    rows = of([{'a': 2, 'b': 1}, {'a': 1, 'b': 2}, {'a': 1, 'b': 1}])
    result = rows.order_by(lambda r: r['a']).then_by(lambda r: r['b']).to_list()
    assert_equal(result, [{'a': 1, 'b': 1}, {'a': 1, 'b': 2}, {'a': 2, 'b': 1}])


@test("then_by_descending reverses only the tie breaker")
def test_then_by_descending():
    result = students.order_by(lambda s: s['grade']).then_by_descending(lambda s: s['score']).to_list()
    for before, after in zip(result, result[1:]):
        assert_that(before['grade'] <= after['grade'], "grades should ascend")
        if before['grade'] == after['grade']:
            assert_that(before['score'] >= after['score'], "scores should descend within a grade")


@test("then_by starts from the original source, not the sorted one")
def test_then_by_independent():
    ordered = S([3, 1, 2]).order_by(lambda n: n % 2)
    refined = ordered.then_by(lambda n: -n)
    assert_equal(ordered.to_list(), [2, 3, 1])
    assert_equal(refined.to_list(), [2, 3, 1])
    assert_equal(ordered.then_by(lambda n: n).to_list(), [2, 1, 3])
    assert_equal(len(ordered.orders), 1)


@test("order_by is stable for equal keys")
def test_order_by_stable():
    words = S(['bb', 'aa', 'c', 'dd', 'e'])
    assert_equal(words.order_by(len).to_list(), ['c', 'e', 'bb', 'aa', 'dd'])


@test("ordered streams are one-off and follow source changes")
def test_ordered_properties():
    source = [2, 1]
    ordered = of(source).order()
    assert_that(isinstance(ordered, OrderedStream), "order() gives an OrderedStream")
    assert_that(ordered.properties.one_off, "sorted results are fresh lists")
    assert_equal(ordered.to_list(), [1, 2])
    source.append(0)
    assert_equal(ordered.to_list(), [0, 1, 2])
    assert_equal(of(source).order_descending().to_list(), [2, 1, 0])


@test("ordering an immutable stream leaves its cache alone")
def test_order_immutable_cache():
    data = literal(3, 1, 2)
    cached = data.as_list()
    data.order().to_list()
    assert_equal(cached, [3, 1, 2])


if __name__ == "__main__":
    suite.run(title="streamq ordering test suite")
