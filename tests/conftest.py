"""
Keep tests independent of the developer's environment: drop TELESHELL_*
variables and stop Config from reading a local .env file.
"""
import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    for var in list(os.environ):
        if var.startswith("TELESHELL_"):
            monkeypatch.delenv(var, raising=False)

    from pydantic_settings import SettingsConfigDict

    import teleshell.config.schema as schema_module
    patched = SettingsConfigDict(
        env_prefix="TELESHELL_",
        env_file=None,
        env_nested_delimiter="__",
        extra="ignore",
    )
    monkeypatch.setattr(schema_module.Config, "model_config", patched)
