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
"""Tests for StructlogAdapter: the structlog-backed LoggingPort."""

from __future__ import annotations

import logging

import pytest

from leafmongo.core.config import Config
from leafmongo.logging.port import LoggingPort
from leafmongo.logging.structlog_adapter import StructlogAdapter


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


class TestStructlogAdapter:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)

    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"

    def test_configure_reads_format_and_levels(self):
        adapter = StructlogAdapter()
        config = Config(
            {"leafmongo": {"logging": {"format": "json", "level": {"root": "warning", "leafmongo.dao": "debug"}}}}
        )
        adapter.configure(config)
        assert adapter._format == "json"
        assert adapter._root_level == "WARNING"
        assert adapter._module_levels == {"leafmongo.dao": "DEBUG"}
        assert logging.getLogger("leafmongo.dao").level == logging.DEBUG

    def test_get_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("leafmongo.test")
        assert callable(getattr(logger, "info", None))

    def test_set_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("leafmongo.query", "ERROR")
        assert logging.getLogger("leafmongo.query").level == logging.ERROR

    def test_stdlib_records_are_rendered(self, capsys):
        adapter = StructlogAdapter()
        adapter.configure(Config({"leafmongo": {"logging": {"format": "json"}}}))
        logging.getLogger("leafmongo.dao.repository").warning("DAO.find: %s", {"a": 1})
        out = capsys.readouterr().out
        assert "DAO.find" in out
        assert '"level": "warning"' in out
