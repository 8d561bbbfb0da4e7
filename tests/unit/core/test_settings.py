# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for OmniGateSettings (environment and YAML loading)."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from omnigate.config import EnumLogLevel, OmniGateSettings
from omnigate.enums import EnumComplexityClass


@pytest.mark.unit
class TestDefaults:
    def test_defaults(self) -> None:
        settings = OmniGateSettings()

        assert settings.default_ceiling is EnumComplexityClass.LOGARITHMIC
        assert settings.allow_forward_references is True
        assert settings.deploy_timeout_seconds is None
        assert settings.max_concurrency == 4
        assert settings.max_run_history == 256
        assert settings.cost_factor == 1.0
        assert settings.polynomial_degree == 2
        assert settings.latency_budget is None
        assert settings.log_level is EnumLogLevel.INFO

    def test_latency_budget_property(self) -> None:
        settings = OmniGateSettings(latency_budget_ms=250)
        assert settings.latency_budget == timedelta(milliseconds=250)


@pytest.mark.unit
class TestEnvironment:
    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OMNIGATE_DEFAULT_CEILING", "poly")
        monkeypatch.setenv("OMNIGATE_ALLOW_FORWARD_REFERENCES", "false")
        monkeypatch.setenv("OMNIGATE_MAX_CONCURRENCY", "8")
        monkeypatch.setenv("OMNIGATE_LOG_LEVEL", "debug")

        settings = OmniGateSettings()

        assert settings.default_ceiling is EnumComplexityClass.POLYNOMIAL
        assert settings.allow_forward_references is False
        assert settings.max_concurrency == 8
        assert settings.log_level is EnumLogLevel.DEBUG

    def test_unprefixed_variables_ignored(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MAX_CONCURRENCY", "99")
        assert OmniGateSettings().max_concurrency == 4

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("max_concurrency", 0),
            ("cost_factor", 0.0),
            ("deploy_timeout_seconds", -1.0),
            ("polynomial_degree", 0),
            ("max_run_history", -1),
        ],
    )
    def test_out_of_range_rejected(self, field: str, value: float) -> None:
        with pytest.raises(ValidationError):
            OmniGateSettings(**{field: value})

    def test_unknown_ceiling_rejected(self) -> None:
        with pytest.raises(ValidationError):
            OmniGateSettings(default_ceiling="quadratic-ish")


@pytest.mark.unit
class TestFromYaml:
    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "omnigate.yaml"
        path.write_text(
            "default_ceiling: linear\n"
            "deploy_timeout_seconds: 2.5\n"
            "latency_budget_ms: 100\n",
            encoding="utf-8",
        )

        settings = OmniGateSettings.from_yaml(path)

        assert settings.default_ceiling is EnumComplexityClass.LINEAR
        assert settings.deploy_timeout_seconds == 2.5
        assert settings.latency_budget == timedelta(milliseconds=100)

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert OmniGateSettings.from_yaml(path) == OmniGateSettings()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            OmniGateSettings.from_yaml(tmp_path / "nope.yaml")

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            OmniGateSettings.from_yaml(path)
