"""Reading graph descriptions from TOML and exporting step orders."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ._graph import Graph

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable

    from ._models import TopologyOrder

logger = logging.getLogger(__name__)


class GraphFileError(Exception):
    """Error in a graph description file."""


class NodeEntry(BaseModel):
    """A ``[[nodes]]`` table: a node with an optional position."""

    model_config = ConfigDict(extra="forbid")

    id: str
    x: float = 0.0
    y: float = 0.0


class LinkEntry(BaseModel):
    """A ``[[links]]`` table: ``to`` follows ``from``, optionally labelled."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    from_node: str = Field(alias="from")
    to_node: str = Field(alias="to")
    label: str | None = None


class DependencyEntry(BaseModel):
    """A ``[[dependencies]]`` table: ``child`` depends on ``parent``."""

    model_config = ConfigDict(extra="forbid")

    child: str
    parent: str


class GraphDocument(BaseModel):
    """Top-level structure of a graph description file."""

    model_config = ConfigDict(extra="forbid")

    nodes: list[NodeEntry] = Field(default_factory=list)
    links: list[LinkEntry] = Field(default_factory=list)
    dependencies: list[DependencyEntry] = Field(default_factory=list)


def graph_from_document(document: GraphDocument, *, check_cycles: bool = True) -> Graph[str]:
    """Build a graph from a validated document.

    Nodes are registered first, then links, then dependencies, each in file
    order, so insertion order follows the file.

    Raises:
        GraphError: If a declaration is rejected (self reference, cycle or
            conflicting link label).

    """
    graph: Graph[str] = Graph(check_cycles=check_cycles)
    for node in document.nodes:
        graph.register(node.id, node.x, node.y)
    for link in document.links:
        graph.declare_link(link.label, link.from_node, link.to_node)
    for dependency in document.dependencies:
        graph.declare_dependency(dependency.child, dependency.parent)
    return graph


def load_graph_from_toml(path: Path | str, *, check_cycles: bool = True) -> Graph[str]:
    """Load a graph description file.

    Args:
        path: Path to the TOML file.
        check_cycles: Passed to :class:`Graph`.

    Returns:
        The populated graph.

    Raises:
        GraphFileError: If the file is not valid TOML or does not match the
            expected structure.
        GraphError: If a declaration in the file is rejected.

    """
    path = Path(path)
    with path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {path}: {e}"
            raise GraphFileError(msg) from e

    try:
        document = GraphDocument.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid graph description in {path}:\n{e}"
        raise GraphFileError(msg) from e

    graph = graph_from_document(document, check_cycles=check_cycles)
    logger.debug(f"Loaded {len(graph)} nodes from {path}")
    return graph


def _node_value(node: Hashable) -> Any:
    # TOML has no null and no tuple; anything else is written as its string form
    if isinstance(node, (str, int, float, bool)):
        return node
    return str(node)


def order_to_dict(order: Iterable[TopologyOrder[Any]]) -> dict[str, Any]:
    """Convert step records to a TOML-serializable dictionary."""
    steps: list[dict[str, Any]] = []
    for record in order:
        entry: dict[str, Any] = {
            "step": record.step,
            "sorted_step": record.sorted_step,
            "level": record.level,
            "node": _node_value(record.node),
        }
        if record.from_link_label is not None:
            entry["from_link_label"] = record.from_link_label
        steps.append(entry)
    return {"steps": steps}


def export_order_to_toml(order: Iterable[TopologyOrder[Any]], output_path: Path | str) -> None:
    """Write step records to a TOML file as ``[[steps]]`` tables."""
    toml_data = order_to_dict(order)

    output_path = Path(output_path)
    with output_path.open("wb") as f:
        tomli_w.dump(toml_data, f)

    logger.debug(f"Exported {len(toml_data['steps'])} steps to {output_path}")
