"""
core.calendar
Quarter index -> (year, quarter-in-year).
"""

from __future__ import annotations

from typing import Tuple

QUARTERS_PER_YEAR = 4


def quarter_index_to_calendar(quarter: int) -> Tuple[int, int]:
    """Map a 1-based quarter index to (year, quarter_in_year).

    quarter 1..4 -> year 1, quarter 5 -> (2, 1), quarter 40 -> (10, 4).
    """
    q = int(quarter) - 1
    return q // QUARTERS_PER_YEAR + 1, q % QUARTERS_PER_YEAR + 1


def format_quarter(quarter: int) -> str:
    year, qiy = quarter_index_to_calendar(quarter)
    return f"Y{year} Q{qiy}"
