"""Graph algorithms shared by the dependency graph and its snapshots."""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable
from typing import TYPE_CHECKING, Any

from dagsteps._errors import CycleError

if TYPE_CHECKING:
    from ._shrinking import ShrinkingGraph

logger = logging.getLogger(__name__)


def transitive_closure[T: Hashable](root: T, neighbours: Callable[[T], Iterable[T]]) -> set[T]:
    """Collect every node reachable from ``root``.

    The search runs breadth-first: each round expands the whole frontier, and
    nodes seen for the first time form the next frontier.

    Args:
        root: Node to start from. It is never part of the result.
        neighbours: Returns the immediate neighbours of a node in the
            direction being followed (dependencies or dependents).

    Returns:
        Set of all reachable nodes, excluding ``root``.

    Example:
        >>> edges = {"a": ["b"], "b": ["c"], "c": []}
        >>> sorted(transitive_closure("a", edges.__getitem__))
        ['b', 'c']

    """
    visited: set[T] = set()
    frontier = [root]
    while frontier:
        discovered: list[T] = []
        for node in frontier:
            for neighbour in neighbours(node):
                if neighbour not in visited:
                    visited.add(neighbour)
                    discovered.append(neighbour)
        frontier = discovered
    visited.discard(root)
    return visited


def peel_layers[T: Hashable](graph: ShrinkingGraph[T], key: Callable[[T], Any]) -> list[list[T]]:
    """Consume ``graph`` by repeatedly removing all of its current leaves.

    Args:
        graph: Snapshot to consume. It is empty when this returns.
        key: Sort key applied within each layer.

    Returns:
        The removed leaves, one list per round.

    Raises:
        CycleError: If nodes remain but none of them is a leaf.

    """
    layers: list[list[T]] = []
    while len(graph):
        leaves = graph.leaves()
        if not leaves:
            raise CycleError(nodes=graph.nodes())
        layer = sorted(leaves, key=key)
        logger.debug("Layer %d: %r", len(layers), layer)
        layers.append(layer)
        for node in layer:
            graph.remove(node)
    return layers
