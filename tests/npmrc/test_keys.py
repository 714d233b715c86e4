"""Tests for the configuration key allow-list."""

import pytest

from npmrc_shim.core.config.models import NpmrcConfig
from npmrc_shim.npmrc.keys import RecognizedKeys


class TestRecognizedKeys:
    """Tests for the default and configured predicates."""

    @pytest.mark.parametrize("key", ["save-exact", "registry", "json", "omit", "only", "fund"])
    def test_accepts_regular_keys(self, key: str) -> None:
        assert RecognizedKeys()(key)

    @pytest.mark.parametrize(
        "key",
        [
            "",
            "//registry.npmjs.org/:_authToken",
            "; comment",
            "# comment",
            "@scope:registry",
            "_auth",
            "_authToken",
            "proxy",
            "https-proxy",
            "userconfig",
        ],
    )
    def test_rejects_unsafe_keys(self, key: str) -> None:
        assert not RecognizedKeys()(key)

    def test_from_config(self) -> None:
        config = NpmrcConfig(excluded_keys=["cache"], excluded_prefixes=["x-"])
        recognized = RecognizedKeys.from_config(config)

        assert not recognized("cache")
        assert not recognized("x-custom")
        assert recognized("proxy")
