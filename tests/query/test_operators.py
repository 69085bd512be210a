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
"""Tests for FilterOperator and Field: field-level filter construction."""

from __future__ import annotations

import datetime
import re

import pytest
from bson import ObjectId
from bson.regex import Regex

from leafmongo.kernel.exceptions import InvalidArgumentException
from leafmongo.query.combinators import and_, elem_match
from leafmongo.query.native import to_native_filter
from leafmongo.query.operators import Field, FilterOperator


class TestComparisons:
    @pytest.mark.parametrize("value", [5, 1.99, "abc", True, None])
    def test_eq_scalar(self, value):
        assert FilterOperator.eq("qty", value) == {"qty": {"$eq": value}}

    def test_eq_structured_value_is_expanded(self):
        result = FilterOperator.eq("_id", {"region": "eu", "n": 1})
        assert result == {"_id.region": {"$eq": "eu"}, "_id.n": {"$eq": 1}}

    def test_ne(self):
        assert FilterOperator.ne("qty", 20) == {"qty": {"$ne": 20}}

    def test_range_operators(self):
        assert FilterOperator.gt("qty", 20) == {"qty": {"$gt": 20}}
        assert FilterOperator.gte("qty", 20) == {"qty": {"$gte": 20}}
        assert FilterOperator.lt("qty", 20) == {"qty": {"$lt": 20}}
        assert FilterOperator.lte("qty", 20) == {"qty": {"$lte": 20}}

    def test_empty_field_fails_fast(self):
        with pytest.raises(InvalidArgumentException):
            FilterOperator.eq("", 5)

    @pytest.mark.parametrize("method", ["ne", "gt", "gte", "lt", "lte"])
    def test_every_comparison_rejects_empty_field(self, method):
        with pytest.raises(InvalidArgumentException):
            getattr(FilterOperator, method)("", 1)


class TestSetOperators:
    def test_in(self):
        assert FilterOperator.in_("qty", 5, 15) == {"qty": {"$in": [5, 15]}}

    def test_in_without_values(self):
        assert FilterOperator.in_("qty") == {"qty": {"$in": []}}

    def test_nin(self):
        assert FilterOperator.nin("qty", 5, 15) == {"qty": {"$nin": [5, 15]}}

    def test_in_keeps_structured_values_whole(self):
        ids = [{"a": 1, "b": 2}, {"a": 3, "b": 4}]
        assert FilterOperator.in_("_id", *ids) == {"_id": {"$in": ids}}

    def test_in_rejects_empty_field(self):
        with pytest.raises(InvalidArgumentException):
            FilterOperator.in_("", 1)


class TestExists:
    def test_exists_true(self):
        assert FilterOperator.exists("qty", True) == {"qty": {"$exists": True}}

    def test_exists_defaults_to_true(self):
        assert FilterOperator.exists("qty") == {"qty": {"$exists": True}}

    def test_exists_false(self):
        assert FilterOperator.exists("qty", False) == {"qty": {"$exists": False}}


class TestRegex:
    def test_pattern_only(self):
        assert FilterOperator.regex("name", "acme.*corp") == {"name": {"$regex": "acme.*corp"}}

    def test_pattern_with_options(self):
        result = FilterOperator.regex("name", "acme.*corp", "i")
        assert result == {"name": {"$regex": "acme.*corp", "$options": "i"}}

    def test_compiled_pattern_is_encoded_by_driver(self):
        result = FilterOperator.regex("name", re.compile("acme.*corp", re.IGNORECASE))
        assert result["name"]["$regex"] == "acme.*corp"
        assert "i" in result["name"]["$options"]

    def test_bson_regex(self):
        result = FilterOperator.regex("name", Regex("^a", "m"))
        assert result == {"name": {"$regex": "^a", "$options": "m"}}

    def test_compiled_pattern_with_options_is_rejected(self):
        with pytest.raises(InvalidArgumentException):
            FilterOperator.regex("name", re.compile("a"), "i")

    def test_empty_pattern_matches_everything(self):
        assert FilterOperator.regex("name", "") == {"name": {"$regex": ""}}


class TestArrayOperators:
    def test_all(self):
        assert FilterOperator.all("tags", "ssl", "security") == {"tags": {"$all": ["ssl", "security"]}}

    def test_all_with_elem_match_conditions(self):
        result = FilterOperator.all(
            "qty",
            elem_match(and_(FilterOperator.eq("size", "M"), FilterOperator.gt("num", 50))),
            elem_match(and_(FilterOperator.eq("num", 100), FilterOperator.eq("color", "green"))),
        )
        assert result == {
            "qty": {
                "$all": [
                    {"$elemMatch": {"$and": [{"size": {"$eq": "M"}}, {"num": {"$gt": 50}}]}},
                    {"$elemMatch": {"$and": [{"num": {"$eq": 100}}, {"color": {"$eq": "green"}}]}},
                ]
            }
        }

    def test_elem_match(self):
        result = FilterOperator.elem_match("results", FilterOperator.eq("product", "xyz"))
        assert result == {"results": {"$elemMatch": {"product": {"$eq": "xyz"}}}}

    def test_set_operators_do_not_share_input_values(self):
        value = {"k": [1]}
        result = FilterOperator.in_("f", value)
        value["k"].append(2)
        assert result == {"f": {"$in": [{"k": [1]}]}}

        tags = ["a"]
        result = FilterOperator.all("tags", tags)
        tags.append("b")
        assert result == {"tags": {"$all": [["a"]]}}

    def test_elem_match_does_not_share_sub_filter(self):
        sub_filter = {"a": 1}
        result = FilterOperator.elem_match("f", sub_filter)
        sub_filter["z"] = 9
        assert result == {"f": {"$elemMatch": {"a": 1}}}

    def test_size(self):
        assert FilterOperator.size("field", 2) == {"field": {"$size": 2}}

    @pytest.mark.parametrize("size", [2.5, "2", True])
    def test_size_requires_integer(self, size):
        with pytest.raises(InvalidArgumentException):
            FilterOperator.size("field", size)


class TestNot:
    def test_not_operator_expression(self):
        result = FilterOperator.not_("price", lambda f: FilterOperator.gt(f, 1.99))
        assert result == {"price": {"$not": {"$gt": 1.99}}}

    def test_not_eq(self):
        result = FilterOperator.not_("price", lambda f: FilterOperator.eq(f, 5))
        assert result == {"price": {"$not": {"$eq": 5}}}

    def test_not_literal_value_becomes_eq(self):
        result = FilterOperator.not_("price", lambda f: {f: 5})
        assert result == {"price": {"$not": {"$eq": 5}}}

    def test_not_regex(self):
        result = FilterOperator.not_("name", lambda f: FilterOperator.regex(f, "^acme", "i"))
        assert result == {"name": {"$not": {"$regex": "^acme", "$options": "i"}}}

    def test_not_multiple_conditions_uses_nor(self):
        result = FilterOperator.not_("size", lambda f: FilterOperator.eq(f, {"w": 1, "h": 2}))
        assert result == {"$nor": [{"size.w": {"$eq": 1}, "size.h": {"$eq": 2}}]}

    def test_not_keeps_bson_values(self):
        oid = ObjectId("65a000000000000000000001")
        result = FilterOperator.not_("_id", lambda f: FilterOperator.eq(f, oid))
        assert result == {"_id": {"$not": {"$eq": oid}}}
        assert type(result["_id"]) is dict
        assert isinstance(to_native_filter(result)["_id"]["$not"]["$eq"], ObjectId)

    def test_not_keeps_datetime_values(self):
        moment = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
        result = FilterOperator.not_("at", lambda f: FilterOperator.lt(f, moment))
        assert result == {"at": {"$not": {"$lt": moment}}}

    def test_not_dbref_is_negated_as_literal(self):
        ref = {"$ref": "users", "$id": 7}
        result = FilterOperator.not_("owner", lambda f: {f: ref})
        assert result == {"owner": {"$not": {"$eq": {"$ref": "users", "$id": 7}}}}

    def test_builder_receives_field_name(self):
        seen = []

        def builder(field):
            seen.append(field)
            return FilterOperator.lt(field, 3)

        FilterOperator.not_("qty", builder)
        assert seen == ["qty"]

    def test_not_rejects_empty_field(self):
        with pytest.raises(InvalidArgumentException):
            FilterOperator.not_("", lambda f: FilterOperator.gt(f, 1))


class TestField:
    def test_delegates_to_operators(self):
        qty = Field("qty")
        assert qty.eq(20) == FilterOperator.eq("qty", 20)
        assert qty.ne(20) == FilterOperator.ne("qty", 20)
        assert qty.gt(20) == {"qty": {"$gt": 20}}
        assert qty.gte(20) == {"qty": {"$gte": 20}}
        assert qty.lt(20) == {"qty": {"$lt": 20}}
        assert qty.lte(20) == {"qty": {"$lte": 20}}
        assert qty.in_(5, 15) == {"qty": {"$in": [5, 15]}}
        assert qty.nin(5) == {"qty": {"$nin": [5]}}
        assert qty.exists(False) == {"qty": {"$exists": False}}
        assert qty.size(3) == {"qty": {"$size": 3}}
        assert qty.all(1, 2) == {"qty": {"$all": [1, 2]}}
        assert qty.elem_match({"a": 1}) == {"qty": {"$elemMatch": {"a": 1}}}
        assert qty.regex("^1", "m") == {"qty": {"$regex": "^1", "$options": "m"}}
        assert qty.not_(lambda f: FilterOperator.gt(f, 1)) == {"qty": {"$not": {"$gt": 1}}}

    def test_name_and_repr(self):
        field = Field("price")
        assert field.name == "price"
        assert repr(field) == "Field('price')"

    def test_empty_name_is_rejected(self):
        with pytest.raises(InvalidArgumentException):
            Field("")
