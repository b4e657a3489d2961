"""List-pane selection and scroll coordination."""

from .sync import (
    CenterOnItem,
    JumpToItem,
    ListViewport,
    ScrollRequest,
    ScrollToTop,
    SelectionScrollCoordinator,
    apply_scroll_request,
    centered_start,
    index_of_selected_item,
)

__all__ = [
    "CenterOnItem",
    "JumpToItem",
    "ListViewport",
    "ScrollRequest",
    "ScrollToTop",
    "SelectionScrollCoordinator",
    "apply_scroll_request",
    "centered_start",
    "index_of_selected_item",
]
