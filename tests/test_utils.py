"""Tests for hclmarshal.utils and hclmarshal.logger."""

import logging

import pytest

from hclmarshal.logger import Logger
from hclmarshal.utils import resolve_config


class TestResolveConfig:
    def test_overrides_defaults(self):
        assert resolve_config({"a": 2}, {"a": 1, "b": 2}) == {"a": 2, "b": 2}

    def test_empty_config(self):
        defaults = {"a": 1}
        resolved = resolve_config({}, defaults)
        assert resolved == defaults
        assert resolved is not defaults

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValueError, match="y, z"):
            resolve_config({"a": 2, "z": 9, "y": 0}, {"a": 1})


class TestLogger:
    def test_disabled_leaves_shared_logger_alone(self):
        name = "hclmarshal.tests.disabled"
        wrapper = Logger(config={"name": name, "is_enabled": False})
        assert not wrapper.is_enabled
        assert not wrapper.logger.disabled
        assert wrapper.logger.handlers == []
        assert wrapper.logger.level == logging.NOTSET

    def test_enabled_attaches_one_handler(self):
        name = "hclmarshal.tests.enabled"
        Logger(config={"name": name, "level": logging.INFO})
        logger = Logger(config={"name": name, "level": logging.INFO}).logger
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1

    def test_disabled_after_enabled_keeps_configuration(self):
        name = "hclmarshal.tests.mixed"
        Logger(config={"name": name, "level": logging.DEBUG})
        logger = Logger(config={"name": name, "is_enabled": False}).logger
        assert not logger.disabled
        assert logger.level == logging.DEBUG
