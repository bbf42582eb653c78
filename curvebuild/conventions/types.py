"""
Basic convention enums used by index conventions.
"""

from enum import Enum

import QuantLib as ql


class BusinessDayAdjustment(Enum):
    """Business day adjustment rules."""

    NO_ADJUSTMENT = "NO_ADJUSTMENT"
    FOLLOWING = "FOLLOWING"
    MODIFIED_FOLLOWING = "MODIFIED_FOLLOWING"
    PRECEDING = "PRECEDING"
    MODIFIED_PRECEDING = "MODIFIED_PRECEDING"

    @property
    def ql_convention(self) -> int:
        """QuantLib business day convention constant."""
        return {
            BusinessDayAdjustment.NO_ADJUSTMENT: ql.Unadjusted,
            BusinessDayAdjustment.FOLLOWING: ql.Following,
            BusinessDayAdjustment.MODIFIED_FOLLOWING: ql.ModifiedFollowing,
            BusinessDayAdjustment.PRECEDING: ql.Preceding,
            BusinessDayAdjustment.MODIFIED_PRECEDING: ql.ModifiedPreceding,
        }[self]
