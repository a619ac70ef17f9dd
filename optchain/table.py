"""Text table showing an option chain: calls on the left, puts on the right."""

from __future__ import annotations

import threading
from bisect import bisect_left
from enum import IntEnum
from typing import Iterable, Optional

from .terminal import TERMINAL_HEIGHT, TERMINAL_WIDTH

HEADER_HEIGHT = 1
HEADER_WIDTH = 70
HEADER_START_Y = 0
HEADER_START_X = 1
TABLE_HEIGHT = 33  # odd, so the chain sits symmetrically around the middle
TABLE_WIDTH = 70
TABLE_START_Y = 1
TABLE_START_X = 1
FOOTER_HEIGHT = 2
FOOTER_WIDTH = 70
FOOTER_START_Y = 35
FOOTER_START_X = 1
MAX_ROWS = 33
DATA_COLUMNS = 7
COLUMN_WIDTH = TABLE_WIDTH // DATA_COLUMNS

FOOTER_TEXT = "Press 'q' to quit"


class Column(IntEnum):
    """Columns of the table, left to right."""

    CALL_BID = 0
    CALL_ASK = 1
    CALL_LAST = 2
    STRIKE = 3
    PUT_BID = 4
    PUT_ASK = 5
    PUT_LAST = 6


_HEADER_LABELS = {
    Column.CALL_BID: "Bid",
    Column.CALL_ASK: "Ask",
    Column.CALL_LAST: "Last",
    Column.STRIKE: "Strike",
    Column.PUT_BID: "Bid",
    Column.PUT_ASK: "Ask",
    Column.PUT_LAST: "Last",
}


def format_number(number: float) -> str:
    """Format a strike: no decimals if the fraction is under 0.1, else one decimal."""
    fractional = number - int(number)
    if 0.0 <= fractional < 0.1:
        return f"{number:.0f}"
    return f"{number:.1f}"


def format_number2(number: float) -> str:
    """Format a price with two decimals."""
    return f"{number:.2f}"


def layout_strikes(strikes: Iterable[float], closest_strike: float) -> dict[float, int]:
    """Map the strikes shown on screen to their rows.

    The closest strike and the strikes above it fill the rows below the
    middle; the strikes beneath it fill the rows from the middle upward.
    """
    ordered = sorted(set(strikes))
    position = bisect_left(ordered, closest_strike)
    if position == len(ordered) or ordered[position] != closest_strike:
        raise ValueError(f"strike {closest_strike!r} is not in the chain")

    rows: dict[float, int] = {}
    upper = ordered[position:]
    for row, strike in zip(range(MAX_ROWS // 2 + 1, MAX_ROWS), upper):
        rows.setdefault(strike, row)

    lower = reversed(ordered[:position])
    for row, strike in zip(range(MAX_ROWS // 2, 0, -1), lower):
        rows.setdefault(strike, row)
    return rows


def _column_start(column: int, text: str) -> int:
    return column * COLUMN_WIDTH + max(0, (COLUMN_WIDTH - len(text)) // 2)


def _blank(height: int, width: int) -> list[str]:
    return [" " * width for _ in range(height)]


def _put(lines: list[str], row: int, col: int, text: str) -> None:
    if not 0 <= row < len(lines) or col < 0:
        return
    line = lines[row]
    width = len(line)
    if col >= width:
        return
    text = text[: width - col]
    lines[row] = line[:col] + text + line[col + len(text):]


class Table:
    """The on-screen option chain table.

    The text of each window is always kept in ``header``, ``body`` and
    ``footer``; when ``use_curses`` is true it is also drawn on the terminal.
    """

    def __init__(self, use_curses: bool = True) -> None:
        self.use_curses = use_curses
        self.strikes: list[float] = []
        self.active_strikes: dict[float, int] = {}
        self.header = _blank(HEADER_HEIGHT, HEADER_WIDTH)
        self.body = _blank(TABLE_HEIGHT, TABLE_WIDTH)
        self.footer = _blank(FOOTER_HEIGHT, FOOTER_WIDTH)
        self._lock = threading.Lock()
        self._stdscr = None
        self._header_window = None
        self._table_window = None
        self._footer_window = None

    def __enter__(self) -> "Table":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def draw_cell(self, row_index: int, column_index: int, text: str) -> None:
        """Write text centred in a cell of the table body."""
        start = _column_start(column_index, text)
        with self._lock:
            _put(self.body, row_index, start, text)
            if self._table_window is not None:
                self._curses_write(self._table_window, row_index, start, text)

    def initialize_table(self, strikes: Iterable[float], closest_strike: float) -> None:
        """Set up the windows and draw the header, footer and strike column."""
        self.strikes = sorted(set(strikes))
        if self.use_curses:
            self._open_curses()

        self._draw_header()
        self._draw_borders()
        self._draw_footer()
        if self._stdscr is not None:
            self._stdscr.refresh()
        self._draw_strikes(closest_strike)

    def get_row_index(self, strike: float) -> Optional[int]:
        """Return the row showing the strike, or None if it is not on screen."""
        return self.active_strikes.get(strike)

    def close(self) -> None:
        """Release the terminal if it was taken over."""
        if self._stdscr is None:
            return
        import curses

        self._header_window = None
        self._table_window = None
        self._footer_window = None
        self._stdscr = None
        try:
            curses.endwin()
        except curses.error:
            pass

    def _open_curses(self) -> None:
        import curses

        self._stdscr = curses.initscr()
        curses.cbreak()
        curses.noecho()
        self._stdscr.refresh()
        self._header_window = self._create_window(HEADER_HEIGHT, HEADER_WIDTH, HEADER_START_Y, HEADER_START_X)
        self._table_window = self._create_window(TABLE_HEIGHT, TABLE_WIDTH, TABLE_START_Y, TABLE_START_X)
        self._footer_window = self._create_window(FOOTER_HEIGHT, FOOTER_WIDTH, FOOTER_START_Y, FOOTER_START_X)

    @staticmethod
    def _create_window(height: int, width: int, start_y: int, start_x: int):
        import curses

        try:
            window = curses.newwin(height, width, start_y, start_x)
        except curses.error:
            return None
        window.refresh()
        return window

    @staticmethod
    def _curses_write(window, row: int, col: int, text: str) -> None:
        import curses

        try:
            window.addstr(row, col, text)
        except curses.error:
            pass
        window.refresh()

    def _draw_header(self) -> None:
        for column, label in _HEADER_LABELS.items():
            start = _column_start(column, label)
            _put(self.header, 0, start, label)
            if self._header_window is not None:
                self._curses_write(self._header_window, 0, start, label)

    def _draw_borders(self) -> None:
        if self._stdscr is None:
            return
        import curses

        for row in (HEADER_HEIGHT, TERMINAL_HEIGHT - FOOTER_HEIGHT):
            try:
                self._stdscr.hline(row, 0, curses.ACS_HLINE, TERMINAL_WIDTH)
            except curses.error:
                pass
        if self._table_window is not None:
            self._table_window.refresh()

    def _draw_footer(self) -> None:
        _put(self.footer, 0, 0, FOOTER_TEXT)
        if self._footer_window is not None:
            self._curses_write(self._footer_window, 0, 0, FOOTER_TEXT)

    def _draw_strikes(self, closest_strike: float) -> None:
        layout = layout_strikes(self.strikes, closest_strike)
        for strike, row in layout.items():
            self.draw_cell(row, Column.STRIKE, format_number(strike))
            self.active_strikes.setdefault(strike, row)