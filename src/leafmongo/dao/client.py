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
"""MongoDB connection settings and Motor client creation."""

from __future__ import annotations

from motor.motor_asyncio import AsyncIOMotorClient
from pydantic import BaseModel, Field

from leafmongo.core.config import config_properties


@config_properties(prefix="leafmongo.mongodb")
class MongoProperties(BaseModel):
    """Settings under ``leafmongo.mongodb``."""

    uri: str = "mongodb://localhost:27017"
    database: str = "leafmongo"
    primary_key: str = Field(default="_id", min_length=1)
    skip_null: bool = True


def create_motor_client(props: MongoProperties) -> AsyncIOMotorClient:
    """Create a Motor client for ``props.uri``. Connecting is lazy."""
    return AsyncIOMotorClient(props.uri)
