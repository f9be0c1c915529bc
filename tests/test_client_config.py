"""Tests for client configuration."""

from __future__ import annotations

import pytest

from epson_projector import (
    CONTROL_COOLDOWN,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    EpsonProjectorClientConfig,
    EpsonProjectorError,
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("EPSON_PROJECTOR_HOST", "EPSON_PROJECTOR_PORT", "EPSON_PROJECTOR_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = EpsonProjectorClientConfig()
    assert config.default_host is None
    assert config.default_port == DEFAULT_PORT == 3629
    assert config.timeout_secs == DEFAULT_TIMEOUT
    assert config.cooldown_secs == CONTROL_COOLDOWN == 5.0


def test_environment(monkeypatch):
    monkeypatch.setenv("EPSON_PROJECTOR_HOST", "projector.local")
    monkeypatch.setenv("EPSON_PROJECTOR_PORT", "4000")
    monkeypatch.setenv("EPSON_PROJECTOR_TIMEOUT", "7.5")
    config = EpsonProjectorClientConfig()
    assert config.resolve_host() == ("projector.local", 4000)
    assert config.timeout_secs == 7.5


def test_arguments_override_base_config():
    base = EpsonProjectorClientConfig("10.0.0.5", default_port=5000, cooldown_secs=1.0)
    config = EpsonProjectorClientConfig(timeout_secs=3.0, base_config=base)
    assert config.resolve_host() == ("10.0.0.5", 5000)
    assert config.timeout_secs == 3.0
    assert config.cooldown_secs == 1.0


@pytest.mark.parametrize(
    "host, expected",
    [
        ("10.0.0.5", ("10.0.0.5", 3629)),
        ("tcp://10.0.0.5", ("10.0.0.5", 3629)),
        ("tcp://10.0.0.5:3630", ("10.0.0.5", 3630)),
        ("projector:1234", ("projector", 1234)),
    ],
)
def test_resolve_host(host, expected):
    assert EpsonProjectorClientConfig(host).resolve_host() == expected


def test_resolve_host_errors():
    with pytest.raises(EpsonProjectorError):
        EpsonProjectorClientConfig().resolve_host()
    with pytest.raises(EpsonProjectorError):
        EpsonProjectorClientConfig("http://10.0.0.5").resolve_host()


def test_from_jsonable():
    config = EpsonProjectorClientConfig.from_jsonable(
        {"default_host": "10.0.0.9", "timeout_secs": 4, "cooldown_secs": 2.5})
    assert config.default_host == "10.0.0.9"
    assert config.default_port == DEFAULT_PORT
    assert config.timeout_secs == 4.0
    assert config.cooldown_secs == 2.5


def test_from_jsonable_rejects_unknown_keys():
    with pytest.raises(EpsonProjectorError):
        EpsonProjectorClientConfig.from_jsonable({"password": "secret"})
