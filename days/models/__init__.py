from days.models.calendar import CalendarRecord
from days.models.calendar_entry import CalendarEntryRecord
from days.models.color_setting import ColorSettingRecord
from days.models.user import UserRecord

__all__ = [
    "UserRecord",
    "CalendarRecord",
    "ColorSettingRecord",
    "CalendarEntryRecord",
]
