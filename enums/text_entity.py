from enum import Enum


class TextEntity(Enum):
    ADMIN = 1
    USER = 2
    COMMON = 3
