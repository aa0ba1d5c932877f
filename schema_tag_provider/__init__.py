"""JSON Schema 기반 UDT Tag Provider.

MQTT로 수신한 JSON Schema를 로컬 캐시에 저장하고
Tag Provider의 UDT 정의로 동기화한다.
"""

__version__ = '0.1.0'
