"""Pytest configuration and fixtures for npmrc-shim tests."""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def reset_config_singleton():
    """Reset config singleton before and after each test."""
    from npmrc_shim.core.config import _reset_config

    _reset_config()
    yield
    _reset_config()


@pytest.fixture(autouse=True)
def clean_credential_env(monkeypatch: pytest.MonkeyPatch):
    """Keep credentials from the developer's environment out of tests."""
    from npmrc_shim.core.config import ENV_CREDENTIAL_KEYS

    for key in ENV_CREDENTIAL_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Empty project directory."""
    path = tmp_path / "project"
    path.mkdir()
    return path


class FakeSource:
    """In-memory RegistryOverrideSource.

    Each collaborator call can be made to fail by setting the matching
    *_error attribute to an exception instance.
    """

    def __init__(
        self,
        raw: bytes = b"",
        registry: str = "https://auth",
        credential: str = "//auth.line",
        json_output: bool = True,
    ) -> None:
        self.raw = raw
        self.registry = registry
        self.credential = credential
        self.json_output = json_output
        self.fetch_error: Exception | None = None
        self.auth_error: Exception | None = None
        self.fetch_calls = 0

    def fetch_raw_config(self) -> bytes:
        self.fetch_calls += 1
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.raw

    def is_recognized_key(self, key: str) -> bool:
        from npmrc_shim.npmrc.keys import RecognizedKeys

        return RecognizedKeys()(key)

    def authenticate(self) -> tuple[str, str]:
        if self.auth_error is not None:
            raise self.auth_error
        return self.registry, self.credential

    def resolve_json_flag(self) -> bool:
        return self.json_output


@pytest.fixture
def fake_source() -> FakeSource:
    """Source returning a sample configuration with a type restriction."""
    return FakeSource(
        raw=b"omit = [dev]\nonly = production\nregistry = https://old\n@myscope = https://old2\n"
    )


@pytest.fixture
def source_factory() -> type[FakeSource]:
    """FakeSource class, for tests that build their own sources."""
    return FakeSource
