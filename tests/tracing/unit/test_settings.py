"""Unit tests for provider configuration loading and validation."""

import json

import pytest

from tracekit.settings import (
    BatchExportConfig,
    ProviderConfig,
    load_provider_config,
)


@pytest.fixture
def clean_env(monkeypatch):
    for var in (
        "TRACEKIT_CONFIG",
        "TRACEKIT_PROVIDER",
        "TRACEKIT_SUPPRESSED_INSTRUMENTATIONS",
        "OTEL_SDK_DISABLED",
        "OTEL_SERVICE_NAME",
        "OTEL_EXPORTER_OTLP_ENDPOINT",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.mark.unit
class TestProviderConfig:
    def test_defaults(self):
        config = ProviderConfig()

        assert config.enabled is True
        assert config.provider == "sdk"
        assert config.otlp_endpoint == "localhost:4317"
        assert config.suppressed_instrumentations == []
        assert config.batch_config.use_sync_export is False
        config.validate()

    def test_dict_round_trip_preserves_values(self):
        config = ProviderConfig(
            enabled=False,
            service_name="search",
            service_version="3.0.0",
            suppressed_instrumentations=["noisy.lib"],
            max_cached_tracers=10,
            batch_config=BatchExportConfig(max_queue_size=100, max_export_batch_size=10),
            extra_resource_attributes={"team": "search"},
        )

        restored = ProviderConfig.from_dict(config.to_dict())

        assert restored == config

    def test_from_dict_copies_mutable_values(self):
        data = {
            "extra_resource_attributes": {"team": "search"},
            "suppressed_instrumentations": ["noisy.lib"],
        }

        config = ProviderConfig.from_dict(data)
        config.extra_resource_attributes["region"] = "eu"
        config.suppressed_instrumentations.append("other.lib")

        assert data["extra_resource_attributes"] == {"team": "search"}
        assert data["suppressed_instrumentations"] == ["noisy.lib"]

    def test_from_dict_uses_defaults_for_missing_keys(self):
        config = ProviderConfig.from_dict({"service_name": "search"})

        assert config.service_name == "search"
        assert config.flush_timeout_millis == 30_000
        assert config.batch_config.max_queue_size == 2048

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"otlp_endpoint": ""}, "otlp_endpoint required"),
            ({"max_cached_tracers": 0}, "max_cached_tracers"),
            ({"flush_timeout_millis": -1}, "flush_timeout_millis"),
            (
                {"batch_config": BatchExportConfig(max_queue_size=0)},
                "max_queue_size",
            ),
            (
                {
                    "batch_config": BatchExportConfig(
                        max_queue_size=10, max_export_batch_size=20
                    )
                },
                "must not exceed",
            ),
        ],
    )
    def test_validate_rejects_invalid_values(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            ProviderConfig(**kwargs).validate()

    def test_empty_endpoint_allowed_when_otlp_disabled(self):
        ProviderConfig(otlp_enabled=False, otlp_endpoint="").validate()

    def test_is_suppressed(self):
        config = ProviderConfig(suppressed_instrumentations=["noisy.lib"])

        assert config.is_suppressed("noisy.lib")
        assert not config.is_suppressed("quiet.lib")

    def test_disabled_suppresses_everything(self):
        config = ProviderConfig(enabled=False)

        assert config.is_suppressed("any.lib")


@pytest.mark.unit
class TestLoadProviderConfig:
    def test_defaults_without_file(self, clean_env, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        config = load_provider_config()

        assert config == ProviderConfig()

    def test_loads_tracing_section(self, clean_env, tmp_path):
        path = tmp_path / "tracing.json"
        path.write_text(
            json.dumps(
                {
                    "tracing": {
                        "service_name": "search",
                        "use_sync_export": True,
                        "suppressed_instrumentations": ["noisy.lib"],
                    }
                }
            )
        )

        config = load_provider_config(path)

        assert config.service_name == "search"
        assert config.batch_config.use_sync_export is True
        assert config.suppressed_instrumentations == ["noisy.lib"]

    def test_discovers_file_from_env_var(self, clean_env, tmp_path, monkeypatch):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"service_name": "from-env-file"}))
        monkeypatch.setenv("TRACEKIT_CONFIG", str(path))

        config = load_provider_config()

        assert config.service_name == "from-env-file"

    def test_discovers_configs_directory(self, clean_env, tmp_path, monkeypatch):
        configs = tmp_path / "configs"
        configs.mkdir()
        (configs / "tracing.json").write_text(json.dumps({"environment": "staging"}))
        monkeypatch.chdir(tmp_path)

        config = load_provider_config()

        assert config.environment == "staging"

    def test_invalid_json_falls_back_to_defaults(self, clean_env, tmp_path):
        path = tmp_path / "tracing.json"
        path.write_text("{not json")

        config = load_provider_config(path)

        assert config == ProviderConfig()

    def test_missing_explicit_file_falls_back_to_defaults(self, clean_env, tmp_path):
        config = load_provider_config(tmp_path / "missing.json")

        assert config == ProviderConfig()

    def test_environment_overrides_file(self, clean_env, tmp_path, monkeypatch):
        path = tmp_path / "tracing.json"
        path.write_text(json.dumps({"service_name": "from-file"}))
        monkeypatch.setenv("OTEL_SERVICE_NAME", "from-env")
        monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "collector:4317")
        monkeypatch.setenv("OTEL_SDK_DISABLED", "TRUE")
        monkeypatch.setenv("TRACEKIT_PROVIDER", "noop")
        monkeypatch.setenv("TRACEKIT_SUPPRESSED_INSTRUMENTATIONS", "a.lib, b.lib,")

        config = load_provider_config(path)

        assert config.service_name == "from-env"
        assert config.otlp_endpoint == "collector:4317"
        assert config.enabled is False
        assert config.provider == "noop"
        assert config.suppressed_instrumentations == ["a.lib", "b.lib"]

    def test_invalid_values_raise(self, clean_env, tmp_path):
        path = tmp_path / "tracing.json"
        path.write_text(json.dumps({"max_cached_tracers": 0}))

        with pytest.raises(ValueError, match="max_cached_tracers"):
            load_provider_config(path)
