"""
Bulk construction of road graphs from plain records.

Vertex records are mappings ``{"id", "x", "y"}`` (optionally ``"tag"``) or
``(id, x, y)`` tuples; edge records are mappings ``{"id", "origin", "dest"}``
or ``(id, origin, dest)`` tuples. Every record is validated against a JSON
schema before it touches the graph, and the first invalid record aborts the
load.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, Mapping, Optional, Sequence, Union

from jsonschema import ValidationError as JsonSchemaError
from jsonschema import validate as json_validate

from ..config import EngineConfig
from ..exceptions import ValidationError
from ..models import VertexTag

if TYPE_CHECKING:
    from ..graph import RoadGraph

logger = logging.getLogger(__name__)

Record = Union[Mapping[str, Any], Sequence[Any]]

VERTEX_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "integer"},
        "x": {"type": "number"},
        "y": {"type": "number"},
        "tag": {"enum": [tag.name.lower() for tag in VertexTag]},
    },
    "required": ["id", "x", "y"],
}

EDGE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "integer"},
        "origin": {"type": "integer"},
        "dest": {"type": "integer"},
    },
    "required": ["id", "origin", "dest"],
}

_VERTEX_FIELDS = ("id", "x", "y")
_EDGE_FIELDS = ("id", "origin", "dest")


def _as_mapping(record: Record, fields: Sequence[str], kind: str) -> Dict[str, Any]:
    """Normalise a tuple record to a mapping keyed by ``fields``."""
    if isinstance(record, Mapping):
        return dict(record)
    if isinstance(record, (list, tuple)):
        if len(record) != len(fields):
            raise ValidationError(
                f"{kind} record {record!r} must have {len(fields)} fields: {', '.join(fields)}"
            )
        return dict(zip(fields, record))
    raise ValidationError(f"{kind} record must be a mapping or a tuple, got {type(record).__name__}")


class GraphLoader:
    """Validates vertex and edge records and builds a RoadGraph from them."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config

    def validate_vertex(self, record: Record) -> Dict[str, Any]:
        """Validate a vertex record and return it as a mapping."""
        data = _as_mapping(record, _VERTEX_FIELDS, "Vertex")
        try:
            json_validate(instance=data, schema=VERTEX_SCHEMA)
        except JsonSchemaError as e:
            raise ValidationError(f"Invalid vertex record {data!r}: {e.message}") from e
        return data

    def validate_edge(self, record: Record) -> Dict[str, Any]:
        """Validate an edge record and return it as a mapping."""
        data = _as_mapping(record, _EDGE_FIELDS, "Edge")
        try:
            json_validate(instance=data, schema=EDGE_SCHEMA)
        except JsonSchemaError as e:
            raise ValidationError(f"Invalid edge record {data!r}: {e.message}") from e
        return data

    def load(self, vertices: Iterable[Record], edges: Iterable[Record]) -> "RoadGraph":
        """
        Build a graph from vertex and edge records.

        Args:
            vertices: Vertex records
            edges: Edge records, resolved against the loaded vertices

        Returns:
            Newly built RoadGraph

        Raises:
            ValidationError: If a record is malformed or an edge references
                a vertex id that was not loaded
            DuplicateVertexError: If two vertex records share an id
            DuplicateEdgeError: If two edge records share an id
        """
        from ..graph import RoadGraph

        graph = RoadGraph(self.config)
        with graph.lock:
            for record in vertices:
                data = self.validate_vertex(record)
                tag = VertexTag[data["tag"].upper()] if "tag" in data else VertexTag.DEFAULT
                try:
                    graph.add_vertex(data["id"], data["x"], data["y"], tag=tag)
                except (TypeError, ValueError) as e:
                    raise ValidationError(f"Invalid vertex record {data!r}: {e}") from e

            for record in edges:
                data = self.validate_edge(record)
                for end in ("origin", "dest"):
                    if not graph.has_vertex(data[end]):
                        raise ValidationError(
                            f"Edge {data['id']} references unknown {end} vertex {data[end]}"
                        )
                graph.add_edge(data["id"], data["origin"], data["dest"])

        logger.info(
            "Loaded graph with %d vertices and %d edges", graph.vertex_count, graph.edge_count
        )
        return graph
