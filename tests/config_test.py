from __future__ import annotations

import logging
from dataclasses import asdict

import pytest
import yaml

from meteomunch import config
from meteomunch.config import CriticalErrors, ProviderSettings


def write_config(tmp_path, text: str, name: str = "munch.yml"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_load_default_values() -> None:
    cfg = config.load_default()

    assert cfg.munch.server.hostname == "localhost"
    assert cfg.munch.server.port == "50050"
    assert cfg.munch.log_level == "info"
    assert (cfg.mongo.name, cfg.mongo.uri, cfg.mongo.db_name, cfg.mongo.db_number) == (
        "mongo",
        "mongodb://localhost:27017",
        "meteomunch",
        0,
    )
    assert (cfg.dlm_redis.name, cfg.dlm_redis.uri, cfg.dlm_redis.db_number) == ("redis", "redis://localhost:6379", 1)
    assert cfg.providers == [
        ProviderSettings(name="open-meteo", api_key="", api_path="v1/forecast", base_uri="https://api.open-meteo.com/")
    ]


def test_load_default_returns_independent_copies() -> None:
    first = config.load_default()
    second = config.load_default()

    first.providers.append(ProviderSettings(name="meteoblue"))
    first.providers[0].api_key = "changed"
    first.munch.server.port = "1"

    assert len(second.providers) == 1
    assert second.providers[0].api_key == ""
    assert second.munch.server.port == "50050"
    assert len(config.load_default().providers) == 1


def test_load_reads_file(tmp_path) -> None:
    path = write_config(
        tmp_path,
        """
Munch:
  LogLevel: "debug"
  Server:
    HostName: "localhost"
    Port: "12345"
MeteoProviders:
  - Name: "test-meteo"
    APIKey: "testkey"
    APIPath: "v1/test"
    BaseURI: "https://api.test-meteo.com"
Mongo:
  Name: "testmongo"
  URI: "mongodb://localhost:27017"
  DBName: "testdb"
  DBNumber: 2
DLMRedis:
  Name: "testredis"
  URI: "localhost:6379"
  DBNumber: 3
""",
        name="custom.yml",
    )

    cfg = config.load(source_path=str(path))

    assert cfg.munch.server.hostname == "localhost"
    assert cfg.munch.server.port == "12345"
    assert cfg.munch.log_level == "debug"
    assert cfg.mongo.name == "testmongo"
    assert cfg.mongo.db_name == "testdb"
    assert cfg.mongo.db_number == 2
    assert cfg.dlm_redis.name == "testredis"
    assert cfg.dlm_redis.uri == "localhost:6379"
    assert cfg.dlm_redis.db_number == 3
    assert cfg.providers == [
        ProviderSettings(name="test-meteo", api_key="testkey", api_path="v1/test", base_uri="https://api.test-meteo.com")
    ]


def test_load_searches_working_directory(tmp_path) -> None:
    write_config(tmp_path, "Munch:\n  Server:\n    Port: 8080\n")

    cfg = config.load()

    assert cfg.munch.server.port == "8080"


def test_partial_file_keeps_defaults(tmp_path) -> None:
    path = write_config(tmp_path, "Munch:\n  LogLevel: warn\n")

    cfg = config.load(source_path=str(path))

    assert cfg.munch.log_level == "warn"
    assert cfg.munch.server.hostname == "localhost"
    assert cfg.mongo.uri == "mongodb://localhost:27017"
    assert cfg.provider("open-meteo") is not None


def test_missing_file_falls_back_to_defaults(tmp_path, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="meteomunch.config"):
        cfg = config.load(source_path=str(tmp_path / "absent.yml"))

    assert cfg == config.load_default()
    assert "using default config" in caplog.text


@pytest.mark.parametrize(
    "text",
    [
        "Munch: [unclosed",
        "- just\n- a list\n",
        "Mongo:\n  DBNumber: not-a-number\n",
        "MeteoProviders: open-meteo\n",
    ],
)
def test_malformed_file_falls_back_to_defaults(tmp_path, text) -> None:
    path = write_config(tmp_path, text)

    assert config.load(source_path=str(path)) == config.load_default()


def test_empty_values_keep_rest_of_file(tmp_path) -> None:
    path = write_config(tmp_path, "Munch:\n  LogLevel: debug\nMongo:\n  DBNumber:\n  DBName:\nDLMRedis:\n  DBNumber: 5\n")

    cfg = config.load(source_path=str(path))

    assert cfg.munch.log_level == "debug"
    assert cfg.mongo.db_number == 0
    assert cfg.mongo.db_name == ""
    assert cfg.dlm_redis.db_number == 5


def test_override_is_used_verbatim(tmp_path) -> None:
    write_config(tmp_path, "Munch:\n  LogLevel: error\n")
    override = config.load_default()
    override.munch.server.port = "9999"

    cfg = config.load(override=override)

    assert cfg is override
    assert cfg.munch.log_level == "info"


def test_environment_overlays_file(tmp_path) -> None:
    path = write_config(
        tmp_path,
        """
MeteoProviders:
  - Name: meteoblue
    APIPath: packages/basic-1h
    BaseURI: https://my.meteoblue.com/
""",
    )
    environ = {
        "MUNCH_SERVER_PORT": "6000",
        "MUNCH_LOGLEVEL": "debug",
        "MONGO_DBNUMBER": "4",
        "METEOPROVIDERS_METEOBLUE_APIKEY": "secret",
    }

    cfg = config.load(source_path=str(path), environ=environ)

    assert cfg.munch.server.port == "6000"
    assert cfg.munch.log_level == "debug"
    assert cfg.mongo.db_number == 4
    assert cfg.provider("meteoblue").api_key == "secret"


def test_invalid_environment_value_is_ignored() -> None:
    cfg = config.load(environ={"DLMREDIS_DBNUMBER": "many"})

    assert cfg.dlm_redis.db_number == 1


def test_validate_accepts_configurations_without_meteoblue() -> None:
    cfg = config.load_default()
    cfg.providers.append(ProviderSettings(name="some-other-meteo"))

    config.validate(cfg)


@pytest.mark.parametrize(
    "provider, missing",
    [
        (ProviderSettings(name="meteoblue"), {"APIKey", "APIPath", "BaseURI"}),
        (ProviderSettings(name="meteoblue", api_key="k"), {"APIPath", "BaseURI"}),
        (ProviderSettings(name="meteoblue", api_key="k", api_path="p"), {"BaseURI"}),
        (ProviderSettings(name="meteoblue", api_path="p", base_uri="https://x.test"), {"APIKey"}),
    ],
)
def test_validate_collects_every_missing_meteoblue_field(provider, missing) -> None:
    cfg = config.load_default()
    cfg.providers.append(provider)

    with pytest.raises(CriticalErrors) as excinfo:
        config.validate(cfg)

    assert len(excinfo.value) == len(missing)
    assert {error.field for error in excinfo.value.errors} == missing
    assert all(error.provider == "meteoblue" for error in excinfo.value.errors)
    assert "Critical config value missing" in str(excinfo.value)


def test_load_reports_critical_errors_with_configuration(tmp_path) -> None:
    path = write_config(tmp_path, "MeteoProviders:\n  - Name: meteoblue\n")

    with pytest.raises(CriticalErrors) as excinfo:
        config.load(source_path=str(path))

    assert len(excinfo.value) == 3
    assert excinfo.value.configuration.provider("meteoblue") is not None


def test_provider_lookup_first_match_wins() -> None:
    cfg = config.load_default()
    cfg.providers.append(ProviderSettings(name="open-meteo", api_path="v2/other"))

    assert cfg.provider("open-meteo").api_path == "v1/forecast"
    assert cfg.provider("missing") is None


def test_round_trip_through_file(tmp_path) -> None:
    defaults = config.load_default()
    path = tmp_path / "roundtrip.yml"
    path.write_text(yaml.safe_dump(defaults.to_dict()), encoding="utf-8")

    loaded = config.load(source_path=str(path))

    assert asdict(loaded) == asdict(defaults)


def test_to_dict_uses_file_layout() -> None:
    data = config.load_default().to_dict()

    assert data["Munch"] == {"Server": {"Hostname": "localhost", "Port": "50050"}, "LogLevel": "info"}
    assert data["MeteoProviders"][0]["BaseURI"] == "https://api.open-meteo.com/"
    assert data["DLMRedis"]["DBNumber"] == 1


def test_get_is_memoized(tmp_path) -> None:
    first = config.get()
    write_config(tmp_path, "Munch:\n  LogLevel: error\n")

    second = config.get()

    assert second is first
    assert second.munch.log_level == "info"

    config.reset()
    assert config.get().munch.log_level == "error"


def test_get_memoizes_errors(tmp_path) -> None:
    write_config(tmp_path, "MeteoProviders:\n  - Name: meteoblue\n")

    with pytest.raises(CriticalErrors) as first:
        config.get()
    (tmp_path / "munch.yml").unlink()
    with pytest.raises(CriticalErrors) as second:
        config.get()

    assert second.value is first.value
