"""YAML 파일 기반 설정 로더 구현체."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict
import logging
from pathlib import Path
from typing import Any, TypeVar

import yaml

from schema_tag_provider.usecase.ports.config_port import (
    AppConfig,
    ConfigPort,
    MqttConfig,
    SchemaCacheConfig,
    TagProviderConfig,
)

logger = logging.getLogger(__name__)

_ROOT_KEY = "schema_tag_provider"

_DEFAULT_CONFIG_PATH = (
    Path(__file__).resolve().parent.parent.parent
    / "config"
    / "default_params.yaml"
)

_T = TypeVar("_T")


class YamlConfigLoader(ConfigPort):
    """ConfigPort의 YAML 파일 구현체.

    YAML 파일에서 설정을 읽어 AppConfig로 변환한다.
    파일이 없으면 기본값으로 파일을 생성한다.
    잘못된 값은 경고 후 기본값을 사용한다.

    Args:
        config_path: YAML 설정 파일 경로. None이면 패키지 기본 경로 사용.
    """

    def __init__(self, config_path: Path | None = None) -> None:
        self._path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AppConfig:
        """YAML 파일에서 설정을 로드한다."""
        if not self._path.exists():
            logger.info(
                "Config file not found, creating with defaults: %s",
                self._path,
            )
            config = AppConfig()
            self.save(config)
            return config

        raw = self._read_yaml()
        params = self._extract_params(raw)

        mqtt_data = _section(params, "mqtt")
        cache_data = _section(params, "schema_cache")
        provider_data = _section(params, "tag_provider")

        defaults = AppConfig()
        mqtt_defaults = defaults.mqtt
        cache_defaults = defaults.schema_cache
        provider_defaults = defaults.tag_provider

        config = AppConfig(
            data_dir=_get(params, "data_dir", defaults.data_dir, str),
            mqtt=MqttConfig(
                enabled=_get(
                    mqtt_data, "enabled", mqtt_defaults.enabled, _to_bool
                ),
                broker_url=_get(
                    mqtt_data, "broker_url", mqtt_defaults.broker_url, str
                ),
                client_id=_get(
                    mqtt_data, "client_id", mqtt_defaults.client_id, str
                ),
                topic=_get(mqtt_data, "topic", mqtt_defaults.topic, str),
                username=_get(
                    mqtt_data, "username", mqtt_defaults.username, str
                ),
                password=_get(
                    mqtt_data, "password", mqtt_defaults.password, str
                ),
                qos=_get(mqtt_data, "qos", mqtt_defaults.qos, _to_qos),
                clean_session=_get(
                    mqtt_data, "clean_session",
                    mqtt_defaults.clean_session, _to_bool,
                ),
                connection_timeout_sec=_get(
                    mqtt_data, "connection_timeout_sec",
                    mqtt_defaults.connection_timeout_sec, int,
                ),
                keepalive_sec=_get(
                    mqtt_data, "keepalive_sec",
                    mqtt_defaults.keepalive_sec, int,
                ),
                automatic_reconnect=_get(
                    mqtt_data, "automatic_reconnect",
                    mqtt_defaults.automatic_reconnect, _to_bool,
                ),
                reconnect_max_delay_sec=_get(
                    mqtt_data, "reconnect_max_delay_sec",
                    mqtt_defaults.reconnect_max_delay_sec, int,
                ),
                tls_ca_cert=_get(
                    mqtt_data, "tls_ca_cert", mqtt_defaults.tls_ca_cert, str
                ),
                tls_client_cert=_get(
                    mqtt_data, "tls_client_cert",
                    mqtt_defaults.tls_client_cert, str,
                ),
                tls_client_key=_get(
                    mqtt_data, "tls_client_key",
                    mqtt_defaults.tls_client_key, str,
                ),
            ),
            schema_cache=SchemaCacheConfig(
                path=_get(cache_data, "path", cache_defaults.path, str),
                scan_interval_sec=_get(
                    cache_data, "scan_interval_sec",
                    cache_defaults.scan_interval_sec, int,
                ),
            ),
            tag_provider=TagProviderConfig(
                name=_get(
                    provider_data, "name", provider_defaults.name, str
                ),
                allow_delete=_get(
                    provider_data, "allow_delete",
                    provider_defaults.allow_delete, _to_bool,
                ),
                storage_path=_get(
                    provider_data, "storage_path",
                    provider_defaults.storage_path, str,
                ),
            ),
        )

        logger.info("Config loaded from %s: %s", self._path, config)
        return config

    def save(self, config: AppConfig) -> None:
        """설정을 YAML 파일로 저장한다.

        저장 실패는 로깅만 하고 예외를 전파하지 않는다.
        """
        data = {_ROOT_KEY: asdict(config)}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding="utf-8") as f:
                f.write("# Schema Tag Provider configuration\n")
                yaml.safe_dump(data, f, sort_keys=False)
            logger.info("Configuration saved to: %s", self._path)
        except OSError:
            logger.exception("Failed to save config file: %s", self._path)

    def _read_yaml(self) -> dict[str, Any]:
        """YAML 파일을 dict로 읽는다."""
        try:
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError):
            logger.exception(
                "Failed to load config file, using defaults: %s", self._path
            )
            return {}

        if not isinstance(data, dict):
            logger.warning("Invalid YAML format, using defaults")
            return {}

        return data

    def _extract_params(self, raw: dict[str, Any]) -> dict[str, Any]:
        """최상위 schema_tag_provider 키 아래 설정을 추출한다."""
        node_data = raw.get(_ROOT_KEY, raw)
        if isinstance(node_data, dict):
            return node_data
        return {}


def _section(params: dict[str, Any], key: str) -> dict[str, Any]:
    value = params.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        logger.warning("Invalid %s section, using defaults", key)
        return {}
    return value


def _get(
    data: dict[str, Any],
    key: str,
    default: _T,
    convert: Callable[[Any], _T],
) -> _T:
    """키 값을 변환하여 반환한다. 없거나 잘못된 값이면 기본값."""
    if key not in data or data[key] is None:
        return default
    try:
        return convert(data[key])
    except (TypeError, ValueError):
        logger.warning(
            "Invalid %s value %r, using default %r", key, data[key], default
        )
        return default


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "on", "1"):
            return True
        if lowered in ("false", "no", "off", "0"):
            return False
    raise ValueError(f"not a boolean: {value!r}")


def _to_qos(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"not a QoS level: {value!r}")
    qos = int(value)
    if qos not in (0, 1, 2):
        raise ValueError(f"QoS must be 0, 1 or 2: {qos}")
    return qos
