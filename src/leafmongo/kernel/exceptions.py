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
"""Exception hierarchy for leafmongo.

Every error raised by the library derives from :class:`LeafMongoException`,
so callers can catch a single type or a specific subclass.

Categories:
- BusinessException: invalid builder input, missing documents
- ShapeMismatchException: a native document that cannot be turned into a
  structured filter object

Decoding failures of entity codecs are *not* wrapped; pydantic's
``ValidationError`` reaches the caller unchanged.
"""

from __future__ import annotations


class LeafMongoException(Exception):
    """Base exception for all leafmongo errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "INVALID_ARGUMENT").
        context: Arbitrary key-value pairs describing the failing input.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class BusinessException(LeafMongoException):
    """Caller-side errors: bad arguments, absent documents."""


class ValidationException(BusinessException):
    """Input validation failures."""


class InvalidArgumentException(ValidationException):
    """A filter builder received an empty field name, operator or bad operand.

    Raised at construction time, before anything reaches the database client.
    """

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="INVALID_ARGUMENT", context=context)


class ResourceNotFoundException(BusinessException):
    """Requested document does not exist."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="NOT_FOUND", context=context)


class ShapeMismatchException(LeafMongoException):
    """A native document could not be represented as a structured object."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="SHAPE_MISMATCH", context=context)
