"""설정 로딩 인프라 (ConfigPort 구현)."""

from schema_tag_provider.infra.config.yaml_config_loader import (
    YamlConfigLoader,
)

__all__ = ["YamlConfigLoader"]
