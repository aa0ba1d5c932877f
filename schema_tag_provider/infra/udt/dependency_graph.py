"""UDT 타입 의존성 그래프 유틸리티.

부모 타입과 $ref 참조를 방향 그래프로 구성하여
참조되는 UDT가 먼저 import 되도록 순서를 정한다.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging

import networkx as nx

from schema_tag_provider.domain.entities.schema_model import SchemaModel

logger = logging.getLogger(__name__)


def build_dependency_graph(schemas: Iterable[SchemaModel]) -> nx.DiGraph:
    """스키마 간 참조 그래프를 생성한다.

    간선 방향은 참조 대상 → 참조하는 스키마 이다.
    목록에 없는 외부 타입은 그래프에 포함하지 않는다.

    Args:
        schemas: 스키마 목록.

    Returns:
        노드가 UDT 이름인 방향 그래프.
    """
    schema_list = list(schemas)
    names = {schema.name for schema in schema_list}

    graph = nx.DiGraph()
    graph.add_nodes_from(names)
    for schema in schema_list:
        for ref in schema.referenced_types:
            if ref in names and ref != schema.name:
                graph.add_edge(ref, schema.name)
    return graph


def order_by_dependency(schemas: Iterable[SchemaModel]) -> list[SchemaModel]:
    """참조되는 스키마가 앞에 오도록 정렬한다.

    의존 관계가 없는 스키마끼리는 이름 순이다.
    순환 참조가 있으면 경고 후 이름 순으로 반환한다.

    Args:
        schemas: 스키마 목록.

    Returns:
        정렬된 스키마 목록.
    """
    schema_list = list(schemas)
    by_name: dict[str, list[SchemaModel]] = {}
    for schema in schema_list:
        by_name.setdefault(schema.name, []).append(schema)

    graph = build_dependency_graph(schema_list)
    try:
        ordered_names = list(nx.lexicographical_topological_sort(graph))
    except nx.NetworkXUnfeasible:
        cycle = nx.find_cycle(graph)
        logger.warning(
            'Circular UDT references detected %s, using name order',
            [edge[0] for edge in cycle],
        )
        ordered_names = sorted(by_name)

    return [schema for name in ordered_names for schema in by_name[name]]
