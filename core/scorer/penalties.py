#!/usr/bin/env python3
"""
Penalty Calculations - employment gap deduction.

The deduction is subtracted from the blended score; it never multiplies
it, and the final score is floored at 0 by the ranking engine.
"""

from typing import Optional
import logging

from core.utils import non_negative

logger = logging.getLogger(__name__)

LONG_GAP_MONTHS = 24
LONG_GAP_PENALTY = 20.0
MODERATE_GAP_MONTHS = 12
MODERATE_GAP_PENALTY = 10.0


def calculate_gap_penalty(total_gap_months: Optional[float]) -> float:
    """
    Tiered flat deduction for total employment gap.

    > 24 months -> 20, over 12 up to 24 months -> 10, otherwise 0.
    Unknown gaps count as 0 months.
    """
    months = non_negative(total_gap_months, "total_gap_months")

    if months > LONG_GAP_MONTHS:
        return LONG_GAP_PENALTY
    if months > MODERATE_GAP_MONTHS:
        return MODERATE_GAP_PENALTY
    return 0.0
