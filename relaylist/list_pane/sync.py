"""Selection/scroll synchronization for the flat relay list.

The coordinator compares consecutive renders: it jumps to the selected row
when content first appears, and pins the list to the top when the recents
section reappears while the viewport already sits at offset zero.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Union

from ..list_model.items import SELECTABLE_ITEM_TYPES, RecentsListHeader, RelayListItem


@dataclass(frozen=True)
class ListViewport:
    """Scroll position of the rendered list."""

    first_visible_index: int = 0
    first_visible_offset: int = 0
    visible_rows: int = 0

    @property
    def at_top(self) -> bool:
        return self.first_visible_index == 0 and self.first_visible_offset == 0


@dataclass(frozen=True)
class JumpToItem:
    index: int


@dataclass(frozen=True)
class CenterOnItem:
    """Smooth scroll that centres ``index`` in the viewport."""

    index: int


@dataclass(frozen=True)
class ScrollToTop:
    index = 0


ScrollRequest = Union[JumpToItem, CenterOnItem, ScrollToTop]


def index_of_selected_item(items: Sequence[RelayListItem]) -> int | None:
    """Return index of the first selected custom-list, location or recent row."""
    for idx, item in enumerate(items):
        if isinstance(item, SELECTABLE_ITEM_TYPES) and item.is_selected:
            return idx
    return None


def centered_start(index: int, visible_rows: int, total: int) -> int:
    """Return the first visible row that centres ``index``, clamped to bounds."""
    if total <= 0:
        return 0
    if visible_rows <= 0:
        return max(0, min(index, total - 1))
    start = max(0, index - max(1, visible_rows // 2))
    return max(0, min(start, max(0, total - visible_rows)))


def apply_scroll_request(request: ScrollRequest, viewport: ListViewport, total: int) -> ListViewport:
    """Return the viewport after performing ``request`` on a list of ``total`` rows."""
    if isinstance(request, ScrollToTop):
        return replace(viewport, first_visible_index=0, first_visible_offset=0)
    if isinstance(request, CenterOnItem):
        start = centered_start(request.index, viewport.visible_rows, total)
        return replace(viewport, first_visible_index=start, first_visible_offset=0)
    index = max(0, min(request.index, max(0, total - 1)))
    return replace(viewport, first_visible_index=index, first_visible_offset=0)


@dataclass
class SelectionScrollCoordinator:
    """Derive scroll requests from consecutive renders of the relay list.

    ``items`` is ``None`` while the list is loading or blocked. Requests are
    never queued: ``pending`` only ever holds the latest batch.
    """

    previous_top_item: RelayListItem | None = None
    showing_content: bool = False
    pending: tuple[ScrollRequest, ...] = ()

    def on_render(
        self,
        items: Sequence[RelayListItem] | None,
        viewport: ListViewport,
    ) -> tuple[ScrollRequest, ...]:
        requests: list[ScrollRequest] = []
        has_content = bool(items)
        if has_content:
            assert items is not None
            top_item = items[0]
            # Recents were re-enabled while at the top: keep them on screen.
            if (
                isinstance(top_item, RecentsListHeader)
                and not isinstance(self.previous_top_item, RecentsListHeader)
                and viewport.at_top
            ):
                requests.append(ScrollToTop())
            self.previous_top_item = top_item

            if not self.showing_content:
                selected_idx = index_of_selected_item(items)
                if selected_idx is not None:
                    requests.append(JumpToItem(selected_idx))
                    requests.append(CenterOnItem(selected_idx))
        self.showing_content = has_content

        if requests:
            self.pending = tuple(requests)
        return tuple(requests)

    def take_pending(self) -> tuple[ScrollRequest, ...]:
        """Return and clear the latest scroll batch."""
        pending = self.pending
        self.pending = ()
        return pending

    def settle(self, items: Sequence[RelayListItem], viewport: ListViewport) -> ListViewport:
        """Apply pending requests in order and return the resulting viewport."""
        for request in self.take_pending():
            viewport = apply_scroll_request(request, viewport, len(items))
        return viewport
