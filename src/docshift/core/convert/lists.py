"""List depth and kind bookkeeping across nested lists"""

from dataclasses import dataclass
from typing import Optional

from docshift.core.models import ListKind, NodeKind


LIST_KIND_MAP: dict[NodeKind, ListKind] = {
    NodeKind.bullet_list:  ListKind.unordered,
    NodeKind.ordered_list: ListKind.ordered,
}


@dataclass(frozen=True)
class ListNesting:
    """Immutable list nesting state.

    enter() returns the state for the inside of a list and exit() returns the
    state it was entered from, so the outer list's depth and kind come back
    unchanged whatever happened while inside it.
    """
    kinds: tuple[ListKind, ...] = ()

    @property
    def depth(self) -> int:
        return len(self.kinds)

    @property
    def kind(self) -> Optional[ListKind]:
        return self.kinds[-1] if self.kinds else None

    @property
    def level(self) -> int:
        """Zero-based level for items of the innermost list."""
        return max(self.depth - 1, 0)

    def enter(self, kind: ListKind) -> "ListNesting":
        return ListNesting(self.kinds + (kind,))

    def exit(self) -> "ListNesting":
        """State outside the innermost list.

        The block dispatcher never calls this: each recursion level keeps its
        parent value and reuses it for later siblings. It is here for callers
        that thread a single running value through a flat walk.
        """
        return ListNesting(self.kinds[:-1])
