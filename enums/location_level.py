from enum import Enum


class LocationLevel(Enum):
    """Levels of the cascading address selector, parent first."""
    PROVINCE = "province"
    DISTRICT = "district"
    WARD = "ward"

    @property
    def child(self) -> "LocationLevel | None":
        if self == LocationLevel.PROVINCE:
            return LocationLevel.DISTRICT
        if self == LocationLevel.DISTRICT:
            return LocationLevel.WARD
        return None

    @property
    def descendants(self) -> list["LocationLevel"]:
        levels = []
        level = self.child
        while level is not None:
            levels.append(level)
            level = level.child
        return levels
