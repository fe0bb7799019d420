"""Table layout engine: buffers cells during a table block, then draws a grid.

Cells arrive row-major while the table is open. Nothing is written until
:meth:`TableLayout.draw` runs at the end of the table, because column widths
depend on every cell::

    ┌──────┬─────┐
    │ Name │ Qty │
    ├──────┼─────┤
    │ foo  │   1 │
    └──────┴─────┘
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Sequence

from mdt.term.events import Alignment
from mdt.term.utils import Writer, align_to_width, visible_width

logger = logging.getLogger(__name__)

TablePhase = Literal["head", "body"]


# ---------------------------------------------------------------------------
# Border glyph sets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BorderStyle:
    """Glyphs used to draw the frame, the header separator and cell walls."""

    horizontal: str
    vertical: str
    top_left: str
    top_join: str
    top_right: str
    mid_left: str
    mid_join: str
    mid_right: str
    bottom_left: str
    bottom_join: str
    bottom_right: str


ASCII_BORDERS = BorderStyle(
    horizontal="-",
    vertical="|",
    top_left="+",
    top_join="+",
    top_right="+",
    mid_left="+",
    mid_join="+",
    mid_right="+",
    bottom_left="+",
    bottom_join="+",
    bottom_right="+",
)

UNICODE_BORDERS = BorderStyle(
    horizontal="─",
    vertical="│",
    top_left="┌",
    top_join="┬",
    top_right="┐",
    mid_left="├",
    mid_join="┼",
    mid_right="┤",
    bottom_left="└",
    bottom_join="┴",
    bottom_right="┘",
)


# ---------------------------------------------------------------------------
# TableLayout
# ---------------------------------------------------------------------------


class TableLayout:
    """Accumulates the cells of one table and draws it on demand."""

    def __init__(
        self,
        alignments: Sequence[Alignment],
        borders: BorderStyle = UNICODE_BORDERS,
    ) -> None:
        self.alignments: list[Alignment] = list(alignments)
        self.borders = borders
        self.rows: list[list[str]] = []
        self.phase: TablePhase = "head"
        self.column = 0
        self._head_rows = 0

    @property
    def column_count(self) -> int:
        return len(self.alignments)

    # -- accumulation -------------------------------------------------------

    def start_row(self) -> None:
        self.rows.append([])
        self.column = 0
        if self.phase == "head":
            self._head_rows += 1

    def push(self, text: str) -> None:
        """Append *text* to the cell under the cursor.

        Consecutive pushes before :meth:`end_cell` land in the same cell.
        """
        if not self.rows:
            self.start_row()
        row = self.rows[-1]
        if len(row) <= self.column:
            row.extend([""] * (self.column - len(row)))
            row.append(text)
        else:
            row[self.column] += text

    def end_cell(self) -> None:
        if not self.rows:
            self.start_row()
        row = self.rows[-1]
        if len(row) <= self.column:
            row.extend([""] * (self.column + 1 - len(row)))
        self.column += 1

    # -- drawing ------------------------------------------------------------

    def column_widths(self) -> list[int]:
        widths = [1] * self.column_count
        for row in self.rows:
            for col, cell in enumerate(row[: self.column_count]):
                widths[col] = max(widths[col], visible_width(cell))
        return widths

    def draw(self, output: Writer) -> None:
        """Write the finished grid to *output*.

        Cells beyond the declared column count are dropped; short rows are
        padded with empty cells.
        """
        if not self.rows or not self.column_count:
            if self.rows:
                logger.warning("Table has cells but no columns; skipping it")
            return

        overflow = max(len(row) for row in self.rows) - self.column_count
        if overflow > 0:
            logger.warning(
                "Table row has %d cell(s) more than its %d column(s); extra cells dropped",
                overflow,
                self.column_count,
            )

        b = self.borders
        widths = self.column_widths()

        lines = [self._border(widths, b.top_left, b.top_join, b.top_right)]
        for index, row in enumerate(self.rows):
            lines.append(self._row(row, widths))
            if index + 1 == self._head_rows:
                lines.append(self._border(widths, b.mid_left, b.mid_join, b.mid_right))
        lines.append(self._border(widths, b.bottom_left, b.bottom_join, b.bottom_right))

        logger.debug("Drawing table: %d row(s) x %d column(s)", len(self.rows), self.column_count)
        output.write("".join(line + "\n" for line in lines))

    def _border(self, widths: list[int], left: str, join: str, right: str) -> str:
        segments = (self.borders.horizontal * (w + 2) for w in widths)
        return left + join.join(segments) + right

    def _row(self, row: list[str], widths: list[int]) -> str:
        cells: list[str] = []
        for col, width in enumerate(widths):
            text = row[col] if col < len(row) else ""
            cells.append(" " + align_to_width(text, width, self.alignments[col]) + " ")
        v = self.borders.vertical
        return v + v.join(cells) + v
