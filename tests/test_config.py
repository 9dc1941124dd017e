"""Tests for roost.config — frozen configuration dataclasses."""

import dataclasses

import pytest

from roost.config import DEFAULT_METHODS, AllowedMethodsOptions, AppConfig, RouterOptions
from roost.errors import ConfigurationError


class TestAppConfig:
    def test_defaults(self) -> None:
        cfg = AppConfig()
        assert cfg.host == "127.0.0.1"
        assert cfg.port == 8000
        assert cfg.debug is False
        assert cfg.workers == 1

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            AppConfig().port = 1  # type: ignore[misc]

    @pytest.mark.parametrize("port", [-1, 65536])
    def test_rejects_bad_port(self, port: int) -> None:
        with pytest.raises(ConfigurationError, match="port"):
            AppConfig(port=port)

    def test_rejects_zero_workers(self) -> None:
        with pytest.raises(ConfigurationError, match="workers"):
            AppConfig(workers=0)


class TestRouterOptions:
    def test_defaults(self) -> None:
        opts = RouterOptions()
        assert opts.prefix == ""
        assert opts.strict is False
        assert opts.sensitive is False
        assert opts.methods == DEFAULT_METHODS

    def test_default_methods(self) -> None:
        assert DEFAULT_METHODS == frozenset(
            {"DELETE", "GET", "HEAD", "OPTIONS", "PATCH", "POST", "PUT"}
        )

    def test_methods_uppercased(self) -> None:
        assert RouterOptions(methods=frozenset({"get", "post"})).methods == frozenset(
            {"GET", "POST"}
        )

    def test_rejects_relative_prefix(self) -> None:
        with pytest.raises(ConfigurationError, match="must start with '/'"):
            RouterOptions(prefix="api")

    def test_rejects_empty_methods(self) -> None:
        with pytest.raises(ConfigurationError):
            RouterOptions(methods=frozenset())


class TestAllowedMethodsOptions:
    def test_defaults(self) -> None:
        opts = AllowedMethodsOptions()
        assert opts.throw is False
        assert opts.not_implemented is None
        assert opts.method_not_allowed is None
