"""YamlConfigLoader 유닛 테스트."""

import pytest
import yaml

from schema_tag_provider.infra.config.yaml_config_loader import (
    YamlConfigLoader,
)
from schema_tag_provider.usecase.ports.config_port import (
    AppConfig,
    MqttConfig,
)


def _write(path, data):
    with open(path, 'w') as f:
        yaml.safe_dump(data, f)
    return path


class TestLoad:
    """설정 로드 테스트."""

    def test_load_full_config(self, tmp_path):
        path = _write(tmp_path / 'config.yaml', {
            'schema_tag_provider': {
                'data_dir': '/var/lib/provider',
                'mqtt': {
                    'enabled': False,
                    'broker_url': 'ssl://broker:8883',
                    'topic': 'plant/schemas/#',
                    'username': 'user',
                    'password': 'secret',
                    'qos': 2,
                },
                'schema_cache': {'path': 'cache', 'scan_interval_sec': 0},
                'tag_provider': {
                    'name': 'edge',
                    'allow_delete': False,
                },
            },
        })

        config = YamlConfigLoader(path).load()

        assert config.data_dir == '/var/lib/provider'
        assert config.mqtt.enabled is False
        assert config.mqtt.broker_url == 'ssl://broker:8883'
        assert config.mqtt.topic == 'plant/schemas/#'
        assert config.mqtt.qos == 2
        assert config.mqtt.has_credentials
        assert config.schema_cache.path == 'cache'
        assert config.schema_cache.scan_interval_sec == 0
        assert config.tag_provider.name == 'edge'
        assert config.tag_provider.allow_delete is False
        # 지정하지 않은 값은 기본값
        assert config.mqtt.keepalive_sec == 60
        assert config.tag_provider.storage_path == 'tag-providers'

    def test_flat_file_accepted(self, tmp_path):
        path = _write(tmp_path / 'config.yaml', {'mqtt': {'qos': 0}})
        assert YamlConfigLoader(path).load().mqtt.qos == 0

    @pytest.mark.parametrize('qos', [3, 'high', True])
    def test_invalid_qos_uses_default(self, tmp_path, qos):
        path = _write(tmp_path / 'config.yaml', {'mqtt': {'qos': qos}})
        assert YamlConfigLoader(path).load().mqtt.qos == 1

    def test_string_booleans(self, tmp_path):
        path = _write(tmp_path / 'config.yaml', {
            'mqtt': {'enabled': 'no', 'clean_session': 'yes'},
            'tag_provider': {'allow_delete': 'maybe'},
        })
        config = YamlConfigLoader(path).load()
        assert config.mqtt.enabled is False
        assert config.mqtt.clean_session is True
        assert config.tag_provider.allow_delete is True

    def test_invalid_section_uses_defaults(self, tmp_path):
        path = _write(tmp_path / 'config.yaml', {'mqtt': 'broken'})
        assert YamlConfigLoader(path).load().mqtt == MqttConfig()

    def test_invalid_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text('mqtt: [unclosed')
        assert YamlConfigLoader(path).load() == AppConfig()

    def test_missing_file_written_with_defaults(self, tmp_path):
        path = tmp_path / 'conf' / 'config.yaml'

        config = YamlConfigLoader(path).load()

        assert config == AppConfig()
        assert path.exists()
        saved = yaml.safe_load(path.read_text())
        assert saved['schema_tag_provider']['mqtt']['qos'] == 1
        assert YamlConfigLoader(path).load() == config


class TestSave:
    """설정 저장 테스트."""

    def test_round_trip(self, tmp_path):
        path = tmp_path / 'config.yaml'
        config = AppConfig(data_dir='/data')
        loader = YamlConfigLoader(path)

        loader.save(config)

        assert loader.load() == config
        assert path.read_text().startswith('#')

    def test_password_hidden_in_repr(self):
        config = MqttConfig(username='user', password='secret')
        assert 'secret' not in repr(config)
