"""
Tests for canonical JSON hashing.
"""
from dataclasses import dataclass

import pytest

from conopspilot.canon import (
    canonical_json,
    compute_catalog_hash,
    compute_fact_set_hash,
    content_hash,
)
from conopspilot.models import Category, PathwayId


@dataclass(frozen=True)
class Point:
    x: int
    y: int


class TestCanonicalJson:

    def test_sorted_compact(self):
        assert canonical_json({"b": 1, "a": [1, 2]}) == '{"a":[1,2],"b":1}'

    def test_special_types(self):
        data = {
            "pathway": PathwayId.SFOC,
            "ids": frozenset({"b", "a"}),
            "pair": (1, 2),
            "point": Point(1, 2),
        }
        assert canonical_json(data) == (
            '{"ids":["a","b"],"pair":[1,2],"pathway":"sfoc","point":{"x":1,"y":2}}'
        )

    def test_unicode_kept(self):
        assert canonical_json({"name": "Québec"}) == '{"name":"Québec"}'

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            canonical_json({"x": object()})


class TestHashes:

    def test_content_hash_length(self):
        assert len(content_hash({})) == 64

    def test_catalog_hash_ignores_key_order(self):
        assert compute_catalog_hash({"a": 1, "b": 2}) == compute_catalog_hash({"b": 2, "a": 1})

    def test_fact_set_hash_order_independent(self):
        a = compute_fact_set_hash({"payloads": ["thermal", "lidar"]})
        b = compute_fact_set_hash({"payloads": ["lidar", "thermal"]})
        assert a == b

    def test_fact_set_hash_drops_empty(self):
        assert compute_fact_set_hash({"payloads": [], "seasons": []}) == compute_fact_set_hash({})

    def test_fact_set_hash_accepts_enum_keys(self):
        assert compute_fact_set_hash({Category.PAYLOADS: {"thermal"}}) == (
            compute_fact_set_hash({"payloads": ["thermal"]})
        )

    def test_category_matters(self):
        assert compute_fact_set_hash({"payloads": ["x"]}) != compute_fact_set_hash({"seasons": ["x"]})
