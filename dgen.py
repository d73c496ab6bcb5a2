'''
schema driven test records.

a schema is plain data:
  'word'                              -> faker.word()
  ('pyint', {'min_value': 1})         -> faker.pyint(min_value=1)
  {'_provider': 'choice', 'from': [...]}
  {'_provider': 'sequence', 'start': 1}   -> 1, 2, 3 ... across records
  {'_provider': 'ref', 'key': 'id', 'format': 'user-{}'}
  {'_provider': 'literal', 'value': ...}
  {'field': schema, ...}              -> a dict, fields resolved in order
  [ {'_items': schema, '_count': n or (low, high)} ]
anything else is returned as a literal.
'''

from typing import Any, Dict, Optional

import numpy as np
from faker import Faker

import streamq
from streamq import Stream


class Generator:
    """schema interpreter."""

    def __init__(self, seed: Optional[int] = None):
        self._fake = Faker()
        if seed is not None:
            self._fake.seed_instance(seed)
        self._rng = np.random.default_rng(seed)
        self._sequences: Dict[int, int] = {}

    def _call_faker(self, method_name: str, kwargs: Optional[Dict] = None) -> Any:
        method = getattr(self._fake, method_name, None)
        if method is None:
            raise ValueError(f"faker has no provider '{method_name}'")
        return method(**(kwargs or {}))

    def _provide(self, config: Dict, context: Dict) -> Any:
        provider = config['_provider']
        if provider == 'choice':
            picked = self._rng.choice(len(config['from']))
            return config['from'][int(picked)]
        if provider == 'sequence':
            # one counter per schema node, so sibling sequences don't interfere
            current = self._sequences.get(id(config), config.get('start', 1))
            self._sequences[id(config)] = current + config.get('step', 1)
            return current
        if provider == 'ref':
            if config['key'] not in context:
                raise ValueError(f"reference to '{config['key']}' not found in current context.")
            value = context[config['key']]
            return config['format'].format(value) if 'format' in config else value
        if provider == 'literal':
            return config['value']
        raise ValueError(f"unknown _provider: '{provider}'")

    def _count(self, item_schema: Any) -> int:
        count = item_schema.get('_count', 3) if isinstance(item_schema, dict) else 3
        if isinstance(count, (list, tuple)):
            low, high = count
            return int(self._rng.integers(low, high, endpoint=True))
        return count

    def create(self, schema: Any, context: Optional[Dict] = None) -> Any:
        context = context or {}

        if isinstance(schema, dict):
            if '_provider' in schema:
                return self._provide(schema, context)
            record = {}
            for key, field_schema in schema.items():
                # refs can see the parent's fields and the ones resolved before them
                record[key] = self.create(field_schema, {**context, **record})
            return record

        if isinstance(schema, list):
            if not schema:
                return []
            item_schema = schema[0]
            actual = item_schema.get('_items', item_schema) if isinstance(item_schema, dict) else item_schema
            return [self.create(actual, context) for _ in range(self._count(item_schema))]

        if isinstance(schema, tuple) and len(schema) == 2 and isinstance(schema[1], dict):
            return self._call_faker(schema[0], schema[1])

        if isinstance(schema, str) and hasattr(self._fake, schema):
            return self._call_faker(schema)

        return schema


class _SchemaProvider:
    def __init__(self, schema: Any, seed: Optional[int] = None):
        self._schema = schema
        self._generator = Generator(seed)

    def take(self, count: int) -> Stream:
        """generates count records now and returns an immutable stream over them"""
        records = [self._generator.create(self._schema) for _ in range(count)]
        return streamq.literal(*records)

    def list(self, count: int) -> list:
        return [self._generator.create(self._schema) for _ in range(count)]


def from_schema(schema: Any, seed: Optional[int] = None) -> _SchemaProvider:
    return _SchemaProvider(schema, seed)
