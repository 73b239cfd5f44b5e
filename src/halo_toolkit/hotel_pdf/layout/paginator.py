"""
Module: hotel_pdf.layout.paginator

Purpose:
    Vertical flow of line items and continuation pages.
    A hotel starts on its own page; only its highlight lines may spill
    onto continuation pages.

Key Functions:
    - flow_bullets(): Place lines until the page bottom is passed

Key Classes:
    - BulletFlow: Result of one flow pass
    - PageBuilder: Accumulates commands for one hotel's pages

Algorithm:
    1. Place each item at the cursor and advance by the line height
    2. If the cursor is already past the page bottom before an item,
       stop and report that item as the overflow point
    3. PageBuilder seals the page, opens a continuation page (brand mark
       only), resets the cursor to the top margin and resumes

Dependencies:
    - hotel_pdf.layout.models: Page, commands
    - hotel_pdf.layout.config: LayoutConfig

Used By:
    - hotel_pdf.layout.composer: Hotel pages
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

from .config import LayoutConfig
from .models import DrawCommand, LayoutBox, Page, PageKind

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class BulletFlow(Generic[T]):
    """
    Result of flowing line items down a page.

    Attributes:
        placements: (item, baseline_y) for each item placed on this page
        next_y: Cursor after the last placed item
        overflow_index: Index of the first item that did not fit, or None
    """

    placements: Tuple[Tuple[T, float], ...]
    next_y: float
    overflow_index: Optional[int] = None

    @property
    def overflowed(self) -> bool:
        """True when some items must continue on a new page."""
        return self.overflow_index is not None


def flow_bullets(
    items: Sequence[T],
    cursor_y: float,
    page_bottom: float,
    line_height: float,
) -> BulletFlow[T]:
    """
    Place items top-down until the cursor passes `page_bottom`.

    The check happens before each item: an item is placed as long as the
    cursor has not yet gone past the bottom, so the last line on a page
    may sit up to one line height below `page_bottom`.

    Args:
        items: Lines to place, in order
        cursor_y: Baseline of the first item
        page_bottom: Lowest cursor position that may still receive a line
        line_height: Advance per item

    Returns:
        BulletFlow describing placements and the overflow point

    Example:
        >>> flow = flow_bullets(["a", "b", "c"], 90, 100, 6)
        >>> [y for _, y in flow.placements], flow.overflow_index
        ([90, 96], 2)
    """
    placements: List[Tuple[T, float]] = []
    y = cursor_y
    for index, item in enumerate(items):
        if y > page_bottom:
            return BulletFlow(tuple(placements), y, index)
        placements.append((item, y))
        y += line_height
    return BulletFlow(tuple(placements), y, None)


class PageBuilder:
    """
    Collects draw commands for one hotel and seals them into pages.

    Every page opened by the builder (primary and continuation) starts
    with the `header` commands, i.e. the brand mark.

    Example:
        >>> builder = PageBuilder(LayoutConfig(), hotel_index=0)
        >>> builder.y = builder.layout.content_top
        >>> len(builder.finish())
        1
    """

    def __init__(
        self,
        layout: LayoutConfig,
        *,
        hotel_index: Optional[int] = None,
        kind: PageKind = PageKind.CONTENT,
        header: Sequence[DrawCommand] = (),
    ) -> None:
        self.layout = layout
        self.hotel_index = hotel_index
        self.kind = kind
        self.header = tuple(header)
        self.y = layout.margin
        self._pages: List[Page] = []
        self._commands: List[DrawCommand] = list(self.header)
        self._boxes: List[LayoutBox] = []

    @property
    def page_count(self) -> int:
        """Pages sealed so far plus the open one."""
        return len(self._pages) + 1

    def add(self, command: DrawCommand) -> None:
        """Append a draw command to the open page."""
        self._commands.append(command)

    def add_box(self, box: LayoutBox) -> None:
        """Record an image or placeholder placement on the open page."""
        self._boxes.append(box)

    def advance(self, delta: float) -> None:
        """Move the cursor down."""
        self.y += delta

    def ensure_room(self, limit: Optional[float] = None) -> None:
        """Open a continuation page if the cursor is past `limit` (default: page bottom)."""
        if self.y > (self.layout.page_bottom if limit is None else limit):
            self.break_page()

    def break_page(self) -> None:
        """Seal the open page and start a continuation page."""
        self._seal()
        self._commands = list(self.header)
        self._boxes = []
        self.y = self.layout.margin
        logger.debug(
            f"Hotel {self.hotel_index}: continuation page {self.page_count}"
        )

    def flow(
        self,
        items: Sequence[T],
        draw: Callable[[T, float], DrawCommand],
        line_height: float,
    ) -> None:
        """
        Flow `items` down the page, breaking pages as needed.

        Args:
            items: Lines to place
            draw: Builds the draw command for an item at a baseline
            line_height: Advance per item
        """
        pending = list(items)
        while pending:
            result = flow_bullets(pending, self.y, self.layout.page_bottom, line_height)
            for item, y in result.placements:
                self.add(draw(item, y))
            self.y = result.next_y
            if result.overflow_index is None:
                break
            pending = pending[result.overflow_index:]
            self.break_page()

    def finish(self) -> List[Page]:
        """Seal the open page and return all pages in order."""
        self._seal()
        pages = self._pages
        self._pages = []
        self._commands = list(self.header)
        self._boxes = []
        return pages

    def _seal(self) -> None:
        self._pages.append(Page(
            kind=self.kind,
            commands=tuple(self._commands),
            boxes=tuple(self._boxes),
            hotel_index=self.hotel_index,
            is_continuation=bool(self._pages),
        ))
