"""Mutable dependency graph with declaration-time validation."""

from __future__ import annotations

import logging
from collections.abc import Hashable
from types import MappingProxyType

from dagsteps._errors import CycleError, LinkConflictError, SelfReferenceError
from dagsteps._models import Node, TopologyOrder

from ._algorithms import peel_layers
from ._edge_index import EdgeIndex
from ._hierarchy import DEFAULT_STEP_WIDTH, HierarchicalOrderAssigner
from ._shrinking import ShrinkingGraph
from ._view import GraphView

logger = logging.getLogger(__name__)


class Graph[T: Hashable](GraphView[T]):
    """A directed acyclic graph of "depends-on" relationships.

    The graph is generic over the node identifier type (``str``, ``int``,
    tuples, ...). Edges read "child depends on parent": the parent must be
    ordered before the child.

    Ordering methods never modify the graph. Each works on its own
    :class:`ShrinkingGraph` snapshot, so several orderings may run against the
    same unmodified graph. Mutation is not thread-safe.

    Args:
        check_cycles: Reject edges that would close a cycle when they are
            declared. With ``False`` such edges are accepted, and orderings
            raise :class:`CycleError` instead of returning a partial result.

    Example:
        >>> graph = Graph()
        >>> graph.declare_dependency("b", "a")
        >>> graph.declare_dependency("c", "b")
        >>> [record.step for record in graph.hierarchical_order()]
        ['1', '2', '3']

    """

    __slots__ = ("_sequence", "check_cycles")

    def __init__(self, *, check_cycles: bool = True) -> None:
        super().__init__({}, EdgeIndex(), {})
        self.check_cycles = check_cycles
        self._sequence = 0

    def register(self, node_id: T, x: float = 0.0, y: float = 0.0) -> Node[T]:
        """Register a node, or update the position of an existing one.

        An existing node keeps its original insertion order.

        Returns:
            The stored node record.

        """
        existing = self._nodes.get(node_id)
        if existing is None:
            order = self._sequence
            self._sequence += 1
        else:
            order = existing.insertion_order
        node = Node(id=node_id, x=float(x), y=float(y), insertion_order=order)
        self._nodes[node_id] = node
        return node

    def _ensure_node(self, node_id: T) -> None:
        if node_id not in self._nodes:
            self.register(node_id)

    def declare_dependency(self, child: T, parent: T) -> None:
        """Declare that ``child`` depends on ``parent``.

        Missing nodes are registered at position (0, 0). Declaring the same
        dependency twice has no further effect.

        Raises:
            SelfReferenceError: If ``child`` and ``parent`` are the same node.
            CycleError: If ``parent`` already depends on ``child`` and cycle
                checking is enabled.

        """
        if child == parent:
            raise SelfReferenceError(child)
        if self.check_cycles and self.depends_on(parent, child):
            raise CycleError(child, parent)

        self._ensure_node(parent)
        self._ensure_node(child)
        self._edges.add(child, parent)
        logger.debug("Declared %r depends on %r", child, parent)

    def declare_link(self, label: str | None, from_node: T, to_node: T) -> None:
        """Declare a link ``from_node -> to_node``, i.e. ``to_node`` depends on ``from_node``.

        Args:
            label: Optional annotation such as a branch condition ("Yes", "eSIM").
                An empty label records nothing.
            from_node: The node that comes first.
            to_node: The node that follows.

        Raises:
            LinkConflictError: If the link already carries a different label.
            SelfReferenceError: See :meth:`declare_dependency`.
            CycleError: See :meth:`declare_dependency`.

        """
        key = (from_node, to_node)
        existing = self._labels.get(key)
        if label and existing is not None and existing != label:
            raise LinkConflictError(from_node, to_node, existing, label)

        self.declare_dependency(to_node, from_node)
        if label:
            self._labels[key] = label

    def snapshot(self) -> ShrinkingGraph[T]:
        """Copy nodes and edges into a graph that can be consumed independently."""
        return ShrinkingGraph(dict(self._nodes), self._edges.copy(), MappingProxyType(self._labels))

    def find_cycle_nodes(self) -> list[T]:
        """Nodes that can never become leaves, in registration order.

        These are the nodes on a cycle and everything depending on them. The
        list is always empty while cycle checking is enabled.
        """
        shrinking = self.snapshot()
        while leaves := shrinking.leaves():
            for leaf in leaves:
                shrinking.remove(leaf)
        return shrinking.nodes()

    def _require_acyclic(self) -> None:
        if self.check_cycles:
            return
        if stuck := self.find_cycle_nodes():
            raise CycleError(nodes=stuck)

    def layers(self) -> list[list[T]]:
        """Group nodes into layers with no dependency inside a layer.

        If ``b`` depends on ``a``, ``a`` is in an earlier layer than ``b``. Each
        layer could be executed in parallel. Within a layer, nodes with fewer
        eventual dependents come first; ties keep insertion order.

        Raises:
            CycleError: If the graph contains a cycle (only possible when cycle
                checking is disabled).

        """
        dependent_counts: dict[T, int] = {}

        def weight(node_id: T) -> tuple[int, int]:
            if node_id not in dependent_counts:
                dependent_counts[node_id] = len(self.dependents(node_id))
            return (dependent_counts[node_id], self._nodes[node_id].insertion_order)

        return peel_layers(self.snapshot(), weight)

    def topological_order(self) -> list[T]:
        """Return the layers flattened into one sequence."""
        return [node for layer in self.layers() for node in layer]

    def hierarchical_order(self, step_width: int = DEFAULT_STEP_WIDTH) -> list[TopologyOrder[T]]:
        """Number every node with a hierarchical step label.

        Args:
            step_width: Minimum padding width of each ``sorted_step`` component.
                Components wider than this widen the padding for the whole run.

        Returns:
            One record per node, sorted by ``sorted_step``.

        Raises:
            CycleError: If the graph contains a cycle (only possible when cycle
                checking is disabled).
            ValueError: If ``step_width`` is less than 1.

        """
        self._require_acyclic()
        return HierarchicalOrderAssigner(self.snapshot(), step_width).run()
