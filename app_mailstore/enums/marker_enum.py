from enum import IntEnum


class MarkerEnum(IntEnum):
    SEEN = 1
    REPLIED = 2
    FORWARDED = 3
