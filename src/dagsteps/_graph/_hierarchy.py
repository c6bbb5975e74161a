"""Hierarchical step numbering for workflow-style graphs.

Steps are numbered the way a flowchart is numbered by hand: the main line
counts ``1``, ``2``, ``3``; a fork at ``7`` continues the main line with ``8``
and numbers the side path ``7.1``, ``7.2``; a fork with three or more ways
numbers its side paths ``7.1.1``, ``7.2.1``. Only the very first decision
point of a run is treated specially: alternate start paths get letters
(``A.1``, ``B.1``).

The graph is walked depth-first by peeling leaves off a snapshot. After a node
is numbered it is removed, and its former dependents become the candidates for
the next step. A node reachable from several paths (a merge point) is numbered
once, by whichever path reaches it first.

``sorted_step`` is formatted once the walk is done. Components are padded to
``step_width`` or to the widest component of the run, whichever is larger.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from dataclasses import dataclass

from dagsteps._models import TopologyOrder

from ._shrinking import ShrinkingGraph

logger = logging.getLogger(__name__)

DEFAULT_STEP_WIDTH = 4


@dataclass(frozen=True, slots=True)
class _Branch:
    """Where the next step of a path is numbered."""

    prefix: tuple[int | str, ...]
    offset: int
    level: int

    def components(self) -> tuple[int | str, ...]:
        return (*self.prefix, self.offset)

    def advance(self) -> _Branch:
        return _Branch(self.prefix, self.offset + 1, self.level)


@dataclass(frozen=True, slots=True)
class _Pending[T: Hashable]:
    node: T
    branch: _Branch
    label: str | None


def format_step(components: tuple[int | str, ...]) -> str:
    """Human-readable step label, e.g. ``(7, 2, 1) -> "7.2.1"``."""
    return ".".join(str(component) for component in components)


def format_sorted_step(components: tuple[int | str, ...], width: int) -> str:
    """Sortable step label.

    Numbers are zero-padded and branch letters are left-padded with ``@``,
    which sorts after digits and before letters. With ``width`` at least as
    wide as every component, ``"Z"`` stays ahead of ``"AA"``.

    >>> format_sorted_step(("A", 1), 4)
    '@@@A.0001'
    """
    return ".".join(
        f"{component:0{width}d}" if isinstance(component, int) else component.rjust(width, "@")
        for component in components
    )


@dataclass(slots=True)
class _Frame[T: Hashable]:
    """One pending call of the depth-first walk.

    ``leaves`` is fixed when the frame opens; ``position`` is the index of the
    next leaf to number.
    """

    branch: _Branch
    previous: T | None
    leaves: list[T]
    top_level: bool
    first: bool
    position: int = 0


def branch_letters(index: int) -> str:
    """Spreadsheet-style letters for a 1-based index: 1 -> A, 26 -> Z, 27 -> AA."""
    letters = ""
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


class HierarchicalOrderAssigner[T: Hashable]:
    """Assign step labels to every node of a snapshot.

    The assigner consumes the snapshot it is given and is good for one run.

    Args:
        graph: Snapshot to number. It is empty after a successful run.
        step_width: Minimum padding width of each component in ``sorted_step``.

    """

    def __init__(self, graph: ShrinkingGraph[T], step_width: int = DEFAULT_STEP_WIDTH) -> None:
        if step_width < 1:
            msg = f"step_width must be at least 1, got {step_width}"
            raise ValueError(msg)
        self._graph = graph
        self._width = step_width
        self._handled: set[T] = set()
        self._pending: list[_Pending[T]] = []
        self._first_call_done = False

    def run(self) -> list[TopologyOrder[T]]:
        """Number every reachable node and return the records in step order."""
        stack: list[_Frame[T]] = []
        self._open(stack, _Branch((), 1, 0), previous=None, candidates=None)

        while stack:
            frame = stack[-1]
            if frame.position >= len(frame.leaves):
                stack.pop()
                continue
            position = frame.position
            frame.position += 1

            leaf = frame.leaves[position]
            # A path explored earlier in this frame may already have reached it.
            if leaf in self._handled:
                continue

            branch = self._branch_at(frame, position)
            self._emit(leaf, branch, frame.previous)

            dependents = self._graph.immediate_dependents(leaf)
            self._graph.remove(leaf)
            if not dependents and not frame.top_level:
                continue
            self._open(stack, branch.advance(), previous=leaf, candidates=dependents or None)

        return self._records()

    def _open(
        self,
        stack: list[_Frame[T]],
        branch: _Branch,
        *,
        previous: T | None,
        candidates: frozenset[T] | None,
    ) -> None:
        first = not self._first_call_done
        self._first_call_done = True

        if candidates is None:
            leaves = self._graph.leaves()
        else:
            leaves = [c for c in candidates if c not in self._handled]
        if not leaves:
            return

        if len(leaves) > 1:
            leaves.sort(key=self._coordinate_key if first else self._dependents_key)

        stack.append(
            _Frame(
                branch=branch,
                previous=previous,
                leaves=leaves,
                top_level=candidates is None,
                first=first,
            ),
        )

    def _coordinate_key(self, node_id: T) -> tuple[float, float, int]:
        # Start top-left
        node = self._graph.node(node_id)
        return (node.x, node.y, node.insertion_order)

    def _dependents_key(self, node_id: T) -> tuple[int, int]:
        # Longest remaining path first, so the main line follows the bulk of the work
        return (-len(self._graph.dependents(node_id)), self._graph.node(node_id).insertion_order)

    def _branch_at(self, frame: _Frame[T], position: int) -> _Branch:
        current = frame.branch
        if position == 0:
            return current

        level = current.level + 1
        if frame.first:
            return _Branch((branch_letters(position),), 1, level)

        prefix = (*current.prefix, current.offset - 1)
        if len(frame.leaves) > 2:
            prefix = (*prefix, position)
        return _Branch(prefix, 1, level)

    def _emit(self, leaf: T, branch: _Branch, previous: T | None) -> None:
        label = self._graph.link_label(previous, leaf) if previous is not None else None
        logger.debug("Step %s: %r", format_step(branch.components()), leaf)
        self._handled.add(leaf)
        self._pending.append(_Pending(leaf, branch, label))

    def _records(self) -> list[TopologyOrder[T]]:
        width = max(
            (len(str(component)) for pending in self._pending for component in pending.branch.components()),
            default=0,
        )
        width = max(width, self._width)
        if width > self._width:
            logger.debug("Widening sorted steps from %d to %d", self._width, width)

        records = [
            TopologyOrder(
                node=pending.node,
                step=format_step(pending.branch.components()),
                sorted_step=format_sorted_step(pending.branch.components(), width),
                level=pending.branch.level,
                from_link_label=pending.label,
            )
            for pending in self._pending
        ]
        return sorted(records, key=lambda record: record.sorted_step)
