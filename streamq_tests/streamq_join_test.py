import suite
from streamq import S, Stream, literal
from dgen import from_schema

test = suite.test
assert_that = suite.assert_that
assert_equal = suite.assert_equal

customer_schema = {
    'id': {'_provider': 'sequence', 'start': 100},
    'name': 'name',
    'country': {'_provider': 'choice', 'from': ['nl', 'de', 'fr']},
}

order_schema = {
    'order_id': {'_provider': 'sequence'},
    'customer_id': ('pyint', {'min_value': 100, 'max_value': 109}),
    'amount': ('pyint', {'min_value': 1, 'max_value': 500}),
}

customers = from_schema(customer_schema, seed=11).take(10)
orders = from_schema(order_schema, seed=12).take(40)

pets = literal(
    {'name': 'rex', 'owner': 'ann'},
    {'name': 'tom', 'owner': 'bob'},
    {'name': 'kit', 'owner': 'ann'},
)
owners = literal({'name': 'ann'}, {'name': 'bob'}, {'name': 'cy'})


# --- group_join ---

@test("group_join pairs every outer value with its inner group")
def test_group_join_basic():
    result = owners.group_join(pets, lambda o: o['name'], lambda p: p['owner'],
                               lambda o, group: (o['name'], group.map(lambda p: p['name']).to_list()))
    assert_equal(result.to_list(), [('ann', ['rex', 'kit']), ('bob', ['tom']), ('cy', [])])


@test("group_join hands the group over as an immutable stream")
def test_group_join_group_stream():
    groups = owners.group_join(pets, lambda o: o['name'], lambda p: p['owner'], lambda o, g: g).to_list()
    assert_that(all(isinstance(g, Stream) for g in groups), "groups should be streams")
    assert_that(groups[0].properties.immutable, "group streams should be immutable")
    assert_equal(groups[0].count(), 2)


@test("group_join totals match a manual sum over generated orders")
def test_group_join_totals():
    totals = customers.group_join(orders, lambda c: c['id'], lambda o: o['customer_id'],
                                  lambda c, group: (c['id'], group.reduce(lambda t, o: t + o['amount'], 0)))
    expected = {c['id']: sum(o['amount'] for o in orders if o['customer_id'] == c['id']) for c in customers}
    assert_equal(totals.to_dict(), expected)


@test("group_join accepts a custom key comparison")
def test_group_join_comparison():
    result = S([1, 5]).group_join([0, 2, 4, 6], lambda x: x, lambda y: y,
                                  lambda x, group: group.to_list(),
                                  comparison=lambda outer, inner: abs(outer - inner) <= 1)
    assert_equal(result.to_list(), [[0, 2], [4, 6]])


# --- join ---

@test("join yields one result per matching pair")
def test_join_basic():
    result = owners.join(pets, lambda o: o['name'], lambda p: p['owner'],
                         lambda o, p: f"{o['name']}:{p['name']}")
    assert_equal(result.to_list(), ['ann:rex', 'ann:kit', 'bob:tom'])


@test("join drops outer values without a match")
def test_join_unmatched():
    result = owners.join(pets, lambda o: o['name'], lambda p: p['owner'], lambda o, p: o['name'])
    assert_that(not result.includes('cy'), "an owner without pets should not appear")


@test("join over generated data keeps every order of a known customer")
def test_join_generated():
    joined = orders.join(customers, lambda o: o['customer_id'], lambda c: c['id'],
                         lambda o, c: (o['order_id'], c['country']))
    assert_equal(joined.count(), orders.count())
    assert_that(joined.every(lambda pair: pair[1] in ('nl', 'de', 'fr')), "countries come from the schema")


@test("join with a comparison tests every pair")
def test_join_comparison():
    result = S([1, 2]).join([1, 2, 3], lambda x: x, lambda y: y, lambda x, y: (x, y),
                            comparison=lambda a, b: a < b)
    assert_equal(result.to_list(), [(1, 2), (1, 3), (2, 3)])


@test("join records both inputs in its lineage")
def test_join_lineage():
    result = owners.join(pets, lambda o: o['name'], lambda p: p['owner'], lambda o, p: p)
    assert_equal(result.operation.name, 'join')
    assert_equal(len(result.operation.upstream), 2)
    steps = result.lineage()
    assert_equal(steps[0], 'literal')
    assert_that(steps[-1].startswith('join('), f"unexpected last step {steps[-1]}")


if __name__ == "__main__":
    suite.run(title="streamq join test suite")
