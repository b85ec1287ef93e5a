"""Tests for environment-driven configuration."""

import pytest
from pydantic import ValidationError

from teleshell.config.schema import Config, LimitsConfig
from teleshell.segment import LimitPolicy


class TestConfigDefaults:
    def test_defaults(self):
        cfg = Config()
        assert cfg.api_token == ""
        assert cfg.bash_path == "/bin/bash"
        assert cfg.command_timeout == 300
        assert cfg.limits == LimitsConfig(max_message_length=4096, max_messages_count=10)

    def test_limit_policy(self):
        cfg = Config(limits=LimitsConfig(max_message_length=100, max_messages_count=3))
        assert cfg.limit_policy() == LimitPolicy(max_chunk_length=100, max_chunk_count=3)


class TestConfigEnvironment:
    def test_reads_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("TELESHELL_API_TOKEN", "123:abc")
        monkeypatch.setenv("TELESHELL_PASSWORD", "secret")
        monkeypatch.setenv("TELESHELL_BASH_PATH", "/usr/bin/bash")
        cfg = Config()
        assert cfg.api_token == "123:abc"
        assert cfg.password == "secret"
        assert cfg.bash_path == "/usr/bin/bash"

    def test_nested_limits(self, monkeypatch):
        monkeypatch.setenv("TELESHELL_LIMITS__MAX_MESSAGES_COUNT", "3")
        assert Config().limits.max_messages_count == 3

    def test_rejects_invalid_limits(self, monkeypatch):
        monkeypatch.setenv("TELESHELL_LIMITS__MAX_MESSAGE_LENGTH", "1")
        with pytest.raises(ValidationError):
            Config()

    def test_rejects_invalid_timeout(self):
        with pytest.raises(ValidationError):
            Config(command_timeout=0)
