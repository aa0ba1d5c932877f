"""Tag Provider 포트 인터페이스.

UDT 정의를 보관하는 Tag Provider와
이름으로 Provider를 찾는 Tag Manager를 추상화한다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from schema_tag_provider.domain.enums import CollisionPolicy, QualityCode


class TagProvider(ABC):
    """Tag Provider 인터페이스.

    Tag 경로는 '/' 구분 문자열이다 (e.g. '_types_/Sensor').
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider 이름."""

    @abstractmethod
    def import_tags(
        self,
        base_path: str,
        definitions_json: str,
        collision_policy: CollisionPolicy,
    ) -> list[QualityCode]:
        """JSON Tag 정의를 base_path 아래에 import 한다.

        Args:
            base_path: import 대상 폴더 경로.
            definitions_json: 단일 Tag 객체 또는 Tag 객체 배열 JSON.
            collision_policy: 동일 이름 충돌 처리 정책.

        Returns:
            최상위 정의별 결과 코드.
        """

    @abstractmethod
    def remove_tag_configs(self, paths: list[str]) -> list[QualityCode]:
        """Tag 정의를 제거한다.

        Args:
            paths: 제거할 Tag 경로 목록.

        Returns:
            경로별 결과 코드.
        """

    @abstractmethod
    def get_tag_config(self, path: str) -> dict[str, Any] | None:
        """Tag 정의를 조회한다. 없으면 None."""

    @abstractmethod
    def browse(self, path: str) -> list[str]:
        """폴더 바로 아래의 Tag 이름 목록을 반환한다."""


class TagManager(ABC):
    """Tag Provider 레지스트리 인터페이스."""

    @abstractmethod
    def get_tag_provider(self, name: str) -> TagProvider | None:
        """이름으로 Tag Provider를 찾는다. 없으면 None."""

    @abstractmethod
    def get_tag_provider_names(self) -> list[str]:
        """등록된 Provider 이름 목록."""
