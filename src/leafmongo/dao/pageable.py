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
"""Sort and paging requests, mapped onto pymongo sort specifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

import pymongo

from leafmongo.kernel.exceptions import InvalidArgumentException


@dataclass(frozen=True)
class Order:
    """A single sort key: field path plus direction."""

    property: str
    direction: Literal["asc", "desc"] = "asc"

    @staticmethod
    def asc(property: str) -> Order:
        return Order(property=property, direction="asc")

    @staticmethod
    def desc(property: str) -> Order:
        return Order(property=property, direction="desc")


@dataclass(frozen=True)
class Sort:
    """Ordered collection of sort keys."""

    orders: tuple[Order, ...] = ()

    @staticmethod
    def by(*properties: str) -> Sort:
        """Ascending sort by *properties*, in order."""
        return Sort(orders=tuple(Order.asc(p) for p in properties))

    @staticmethod
    def unsorted() -> Sort:
        return Sort()

    def and_then(self, other: Sort) -> Sort:
        return Sort(orders=self.orders + other.orders)

    def descending(self) -> Sort:
        return Sort(orders=tuple(Order.desc(o.property) for o in self.orders))

    def to_pymongo(self) -> list[tuple[str, int]]:
        """The ``[(field, direction), ...]`` list pymongo's ``sort`` expects."""
        return [
            (order.property, pymongo.ASCENDING if order.direction == "asc" else pymongo.DESCENDING)
            for order in self.orders
        ]


@dataclass(frozen=True)
class Pageable:
    """Paging request: 1-based page number, page size and sort."""

    page: int = 1
    size: int = 20
    sort: Sort = field(default_factory=Sort)

    def __post_init__(self) -> None:
        if self.page < 1:
            raise InvalidArgumentException(f"page must be >= 1, got {self.page}")
        if self.size < 1:
            raise InvalidArgumentException(f"size must be >= 1, got {self.size}")

    @staticmethod
    def of(page: int, size: int, sort: Sort | None = None) -> Pageable:
        return Pageable(page=page, size=size, sort=sort or Sort())

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size

    def next(self) -> Pageable:
        return Pageable(page=self.page + 1, size=self.size, sort=self.sort)

    def previous(self) -> Pageable:
        return Pageable(page=max(1, self.page - 1), size=self.size, sort=self.sort)
