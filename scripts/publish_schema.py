#!/usr/bin/env python3
"""스키마 발행 스크립트.

JSON Schema 파일을 '<base_topic>/<name>' 토픽으로 발행한다.
--delete 를 지정하면 빈 payload 를 발행하여 스키마 삭제를 요청한다.

Usage:
    python3 scripts/publish_schema.py schemas/Motor.json
    python3 scripts/publish_schema.py --name Motor --delete
    python3 scripts/publish_schema.py -b mqtts://broker:8883 Motor.json
"""

import argparse
import logging
from pathlib import Path
import sys

from schema_tag_provider.domain.exceptions import MqttConnectionError
from schema_tag_provider.infra.mqtt.mqtt_client import MqttClient
from schema_tag_provider.usecase.ports.config_port import MqttConfig

logger = logging.getLogger('publish_schema')


def main() -> int:
    parser = argparse.ArgumentParser(
        description='Publish a JSON Schema to the schema tag provider',
    )
    parser.add_argument(
        'schema_file', nargs='?', default=None,
        help='JSON Schema file to publish',
    )
    parser.add_argument(
        '-b', '--broker', default='tcp://localhost:1883',
        help='Broker URL, default: tcp://localhost:1883',
    )
    parser.add_argument(
        '-t', '--base_topic', default='ignition/schemas',
        help='Base topic, default: ignition/schemas',
    )
    parser.add_argument(
        '-n', '--name', default=None,
        help='Schema name (default: schema file stem)',
    )
    parser.add_argument(
        '--delete', action='store_true',
        help='Publish an empty payload to delete the schema',
    )
    parser.add_argument('-q', '--qos', type=int, default=1, choices=[0, 1, 2])
    parser.add_argument('-u', '--username', default='')
    parser.add_argument('-p', '--password', default='')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format='[%(name)s] %(levelname)s: %(message)s',
    )

    if args.schema_file is None and (args.name is None or not args.delete):
        parser.error('schema_file is required unless --name and --delete')

    name = args.name or Path(args.schema_file).stem
    if args.delete:
        payload = ''
    else:
        payload = Path(args.schema_file).read_text(encoding='utf-8')

    config = MqttConfig(
        broker_url=args.broker,
        client_id='',
        username=args.username,
        password=args.password,
        connection_timeout_sec=10,
        automatic_reconnect=False,
    )
    client = MqttClient(config)
    try:
        client.connect()
    except MqttConnectionError as e:
        logger.error('%s', e)
        return 1

    topic = f'{args.base_topic.rstrip("/")}/{name}'
    try:
        info = client.publish(topic, payload, qos=args.qos)
        info.wait_for_publish(timeout=10)
        logger.info(
            '%s %s (%d bytes)',
            'Deleted' if args.delete else 'Published', topic, len(payload),
        )
    finally:
        client.disconnect()
    return 0


if __name__ == '__main__':
    sys.exit(main())
