"""Records stored in and produced by the dependency graph."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Node[T]:
    """A registered node.

    Attributes:
        id: The caller-supplied node identifier.
        x: Horizontal position hint, used to start numbering top-left.
        y: Vertical position hint.
        insertion_order: Sequence number assigned on first registration.

    """

    id: T
    x: float = 0.0
    y: float = 0.0
    insertion_order: int = 0


@dataclass(frozen=True, slots=True)
class TopologyOrder[T]:
    """A node's position in the hierarchical step numbering.

    Attributes:
        node: The node identifier.
        step: Human-readable step label, e.g. ``"8.2.1"`` or ``"A.3"``.
        sorted_step: ``step`` with every numeric component zero-padded so that
            lexicographic order matches reading order, e.g. ``"0008.0002.0001"``.
        level: Branch nesting depth, 0 on the main line.
        from_link_label: Label of the link leading into this step, if any.

    """

    node: T
    step: str
    sorted_step: str
    level: int
    from_link_label: str | None = None
