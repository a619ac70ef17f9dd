"""Option chain book-keeping, records and a curses table for futures-option quotes."""

__version__ = "0.1.0"