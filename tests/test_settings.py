"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from batch_publish.errors import ConfigError
from batch_publish.settings import CONFIG_ENV_VAR, load_settings


def test_defaults_when_no_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)

    settings = load_settings()

    assert settings.root == tmp_path / "libs"
    assert settings.tool == "wally"
    assert settings.concurrency == 1
    assert settings.timeout is None
    assert settings.include_files is False
    assert settings.source is None


def test_reads_publish_and_tool_sections(tmp_path: Path) -> None:
    config = tmp_path / "batch-publish.toml"
    config.write_text(
        "\n".join(
            [
                "[publish]",
                'root = "packages"',
                "timeout = 90",
                "concurrency = 2",
                'exclude = [".*"]',
                "",
                "[tool]",
                'executable = "/opt/bin/wally"',
                'extra_args = ["--token", "abc"]',
            ]
        ),
        encoding="utf-8",
    )

    settings = load_settings(config)

    assert settings.root == tmp_path / "packages"
    assert settings.timeout == 90.0
    assert settings.concurrency == 2
    assert settings.exclude == [".*"]
    assert settings.tool_settings.executable == "/opt/bin/wally"
    assert settings.tool_settings.extra_args == ["--token", "abc"]
    assert settings.tool_settings.arguments is None
    assert settings.source == config


def test_env_var_selects_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "custom.toml"
    config.write_text('[publish]\nroot = "/srv/libs"\ntool = "command"\n', encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config))

    settings = load_settings()

    assert settings.root == Path("/srv/libs")
    assert settings.tool == "command"


def test_explicit_missing_config_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "absent.toml")


def test_invalid_values_are_rejected(tmp_path: Path) -> None:
    config = tmp_path / "bad.toml"
    config.write_text("[publish]\nconcurrency = 0\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(config)

    config.write_text("[publish\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(config)


def test_overrides_skip_none_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    settings = load_settings()

    updated = settings.with_overrides(root="other", timeout=None, dry_run=True)

    assert updated.root == Path("other")
    assert updated.timeout is None
    assert updated.dry_run is True
    assert settings.dry_run is False
    with pytest.raises(ConfigError):
        settings.with_overrides(concurrency=0)


@pytest.mark.parametrize(
    "body",
    [
        "timeout = 0",
        "timeout = -5",
        'timeout = "soon"',
        'include_files = "false"',
        "dry_run = 1",
    ],
)
def test_rejects_non_positive_timeouts_and_non_boolean_flags(tmp_path: Path, body: str) -> None:
    config = tmp_path / "bad.toml"
    config.write_text(f"[publish]\n{body}\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_settings(config)


def test_zero_timeout_override_follows_the_same_rule(tmp_path: Path) -> None:
    config = tmp_path / "ok.toml"
    config.write_text("[publish]\ntimeout = 30\ninclude_files = true\n", encoding="utf-8")
    settings = load_settings(config)

    assert settings.timeout == 30.0
    assert settings.include_files is True
    with pytest.raises(ConfigError):
        settings.with_overrides(timeout=0)
