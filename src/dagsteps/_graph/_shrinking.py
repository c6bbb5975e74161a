"""Disposable graph copies consumed by ordering algorithms."""

from __future__ import annotations

from collections.abc import Hashable

from ._view import GraphView


class ShrinkingGraph[T: Hashable](GraphView[T]):
    """A private copy of a graph that ordering algorithms destroy as they go.

    Removing a node drops it together with all its edges, so "repeatedly take
    the current leaves" needs no separate visited set. Each snapshot owns its
    nodes and edges; link labels are shared read-only with the source graph.
    """

    __slots__ = ()

    def remove(self, node: T) -> None:
        """Remove ``node`` and every edge touching it. Unknown nodes are ignored."""
        self._edges.remove(node)
        self._nodes.pop(node, None)
