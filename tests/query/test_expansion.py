# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for path expansion: expand() and expand_operator()."""

from __future__ import annotations

import pytest

from leafmongo.kernel.exceptions import InvalidArgumentException
from leafmongo.query.expansion import expand, expand_operator


class TestExpand:
    def test_scalar_with_prefix_is_wrapped(self):
        assert expand("qty", 20) == {"qty": 20}

    def test_list_with_prefix_is_a_leaf(self):
        assert expand("tags", ["a", "b"]) == {"tags": ["a", "b"]}

    def test_nested_object_becomes_dotted_paths(self):
        assert expand("", {"a": {"b": {"c": 1}}}) == {"a.b.c": 1}

    def test_nested_object_under_prefix(self):
        value = {"region": "eu", "seq": {"year": 2024, "n": 7}}
        assert expand("_id", value) == {"_id.region": "eu", "_id.seq.year": 2024, "_id.seq.n": 7}

    def test_flat_operator_document_is_unchanged(self):
        assert expand("", {"price": {"$eq": 5}}) == {"price": {"$eq": 5}}

    def test_top_level_logical_document_passes_through(self):
        document = {"$or": [{"a": 1}, {"b": 2}]}
        assert expand("", document) == document

    def test_operator_key_under_prefix_keeps_operator_object(self):
        assert expand("price", {"$gt": 10}) == {"price": {"$gt": 10}}

    def test_operator_stops_descent(self):
        value = {"size": {"h": {"$lt": 15}, "uom": "cm"}}
        assert expand("", value) == {"size.h": {"$lt": 15}, "size.uom": "cm"}

    def test_operands_below_operator_are_not_expanded(self):
        value = {"item": {"$elemMatch": {"a": {"b": 1}}}}
        assert expand("", value) == {"item": {"$elemMatch": {"a": {"b": 1}}}}

    def test_empty_object_contributes_no_paths(self):
        assert expand("a", {}) == {}
        assert expand("", {"a": {}, "b": 1}) == {"b": 1}

    def test_repeated_operator_under_prefix_last_wins(self):
        # Two operator keys at one level map to the same path.
        assert expand("price", {"$gt": 1, "$lt": 5}) == {"price": {"$lt": 5}}

    def test_scalar_without_prefix_is_rejected(self):
        with pytest.raises(InvalidArgumentException) as exc_info:
            expand("", 42)
        assert exc_info.value.code == "INVALID_ARGUMENT"

    def test_result_does_not_share_input_leaves(self):
        tags = ["a"]
        result = expand("", {"doc": {"tags": tags}})
        tags.append("b")
        assert result == {"doc.tags": ["a"]}

    def test_input_is_not_mutated(self):
        value = {"a": {"b": 1}}
        expand("x", value)
        assert value == {"a": {"b": 1}}


class TestExpandOperator:
    def test_scalar_is_wrapped_in_operator(self):
        assert expand_operator("qty", "$eq", 20) == {"qty": {"$eq": 20}}

    def test_object_leaves_are_each_wrapped(self):
        result = expand_operator("size", "$eq", {"w": 21, "uom": "cm"})
        assert result == {"size.w": {"$eq": 21}, "size.uom": {"$eq": "cm"}}

    def test_nested_operator_is_kept_inside_wrapper(self):
        assert expand_operator("price", "$not", {"$gt": 1.99}) == {"price": {"$not": {"$gt": 1.99}}}

    def test_deep_operator_is_wrapped_at_its_path(self):
        result = expand_operator("a", "$ne", {"b": {"$in": [1, 2]}})
        assert result == {"a.b": {"$ne": {"$in": [1, 2]}}}

    def test_array_value_is_a_leaf(self):
        assert expand_operator("tags", "$eq", ["x", "y"]) == {"tags": {"$eq": ["x", "y"]}}

    def test_null_value(self):
        assert expand_operator("bio", "$eq", None) == {"bio": {"$eq": None}}

    def test_empty_field_is_rejected(self):
        with pytest.raises(InvalidArgumentException):
            expand_operator("", "$eq", 1)

    def test_empty_operator_is_rejected(self):
        with pytest.raises(InvalidArgumentException):
            expand_operator("qty", "", 1)
