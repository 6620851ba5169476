'''
Static enums shared by the ORM, the API models and the core.
'''
import enum
from typing import Optional


class ListableEnum(str, enum.Enum):
    """A custom Enum base class that can list all member names."""
    @classmethod
    def get_all_names(cls) -> list[str]:
        return [member.value for member in cls]


class SlotType(ListableEnum):
    """
    The closed set of recurrence variants an availability pattern can have.
    Each value selects its own expansion strategy in the slot generator.
    """
    MINUTE = "Minute"
    HOUR = "Hour"
    DAY = "Day"
    WEEK = "Week"
    MONTH = "Month"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional['SlotType']:
        """
        Case-insensitive lookup. Returns None for anything that is not one
        of the five variants, so callers can treat it as "no slots".
        """
        if raw is None:
            return None
        if isinstance(raw, SlotType):
            return raw
        lowered = str(raw).strip().lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        return None


class DurationUnit(ListableEnum):
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    MONTHS = "months"
