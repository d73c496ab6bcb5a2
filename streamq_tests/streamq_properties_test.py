import suite
from streamq import S, of, Stream, EmptySequenceError
from dgen import from_schema, Generator

test = suite.test
assert_that = suite.assert_that
assert_equal = suite.assert_equal
raises = suite.raises

reading_schema = {
    'sensor': {'_provider': 'choice', 'from': ['s1', 's2', 's3']},
    'value': ('pyint', {'min_value': -50, 'max_value': 50}),
}

order_schema = {
    'id': {'_provider': 'sequence'},
    'ref': {'_provider': 'ref', 'key': 'id', 'format': 'ord-{}'},
    'lines': [{'_items': {'qty': ('pyint', {'min_value': 1, 'max_value': 9})}, '_count': (1, 4)}],
    'channel': {'_provider': 'literal', 'value': 'web'},
}

# a few generated samples, each checked against every property below
samples = [from_schema(reading_schema, seed=seed).take(size).map(lambda r: r['value']).solidify()
           for seed, size in ((1, 0), (2, 1), (3, 17), (4, 60))]
is_positive = lambda n: n > 0


# --- generated data ---

@test("dgen sequences, refs and literals")
def test_dgen_fields():
    records = from_schema(order_schema, seed=1).list(3)
    assert_equal([r['id'] for r in records], [1, 2, 3])
    assert_equal([r['ref'] for r in records], ['ord-1', 'ord-2', 'ord-3'])
    assert_that(all(r['channel'] == 'web' for r in records), "literals are copied as given")
    assert_that(all(1 <= len(r['lines']) <= 4 for r in records), "list counts stay in range")


@test("dgen is repeatable with a seed and returns immutable streams")
def test_dgen_seeded():
    first = from_schema(reading_schema, seed=5).take(10)
    second = from_schema(reading_schema, seed=5).take(10)
    assert_that(isinstance(first, Stream), "take() should give a stream")
    assert_that(first.properties.immutable, "generated records are fixed")
    assert_equal(first.to_list(), second.to_list())


@test("dgen rejects unknown providers")
def test_dgen_errors():
    with raises(ValueError, "unknown _provider"):
        Generator(1).create({'_provider': 'nope'})
    with raises(ValueError, "not found"):
        Generator(1).create({'_provider': 'ref', 'key': 'missing'})


# --- general properties ---

@test("filter keeps only passing values and partitions with its complement")
def test_filter_properties():
    for data in samples:
        assert_that(data.filter(is_positive).every(is_positive), "filter then every")
        total = data.filter(is_positive).count() + data.filter(lambda n: not is_positive(n)).count()
        assert_equal(total, data.count())


@test("map composes and reverse is an involution")
def test_map_reverse_properties():
    f, g = (lambda n: n * 2), (lambda n: n + 7)
    for data in samples:
        assert_that(data.map(f).map(g).sequence_equal(data.map(lambda n: g(f(n)))), "map composition")
        assert_that(data.reverse().reverse().sequence_equal(data), "double reverse")


@test("sort gives an ordered permutation")
def test_sort_properties():
    descending = lambda a, b: b - a
    for data in samples:
        result = data.sort(descending).as_list()
        assert_equal(sorted(result), sorted(data.as_list()))
        assert_that(all(a >= b for a, b in zip(result, result[1:])), "sorted by the comparator")


@test("distinct shrinks, covers and is idempotent")
def test_distinct_properties():
    for data in samples:
        unique = data.distinct()
        assert_that(unique.count() <= data.count(), "distinct never grows")
        assert_that(data.every(unique.includes), "every value survives once")
        assert_that(unique.distinct().sequence_equal(unique), "idempotent")


@test("take and concat counts")
def test_count_properties():
    for data in samples:
        for n in (0, 1, 5, 100):
            assert_equal(data.take(n).count(), min(n, data.count()))
        assert_equal(data.concat(samples[2]).count(), data.count() + samples[2].count())


@test("solidified streams ignore later source changes")
def test_solidify_round_trip():
    source = [1, 2, 3]
    live = of(source)
    frozen = live.solidify()
    source[0] = 99
    assert_equal(frozen.as_list(), [1, 2, 3])
    assert_equal(frozen.as_list(), [1, 2, 3])
    assert_equal(live.as_list(), [99, 2, 3])


# --- worked examples ---

@test("worked example: sum of the even numbers")
def test_example_sum():
    assert_equal(of([1, 2, 3, 4, 5, 6, 7, 8, 9]).filter(lambda n: n % 2 == 0).reduce(lambda t, c: t + c, 0), 20)


@test("worked example: reduce on empty streams")
def test_example_reduce_empty():
    assert_equal(of([]).reduce(lambda p, c: p + c, -1), -1)
    with raises(EmptySequenceError):
        of([]).reduce(lambda p, c: p + c)


@test("worked example: order_by then_by on records")
def test_example_order_by_then_by():
    rows = [{'a': 1, 'b': 2}, {'a': 1, 'b': 1}, {'a': 0, 'b': 9}]
    result = of(rows).order_by(lambda x: x['a']).then_by(lambda x: x['b']).to_list()
    assert_equal(result, [{'a': 0, 'b': 9}, {'a': 1, 'b': 1}, {'a': 1, 'b': 2}])


@test("worked example: distinct and negative take")
def test_example_distinct_take():
    assert_equal(of([5, 3, 5, 1, 3, 2]).distinct().as_list(), [5, 3, 1, 2])
    assert_equal(S([1, 2, 3, 4, 5]).take(-2).to_list(), [4, 5])


if __name__ == "__main__":
    suite.run(title="streamq properties test suite")
