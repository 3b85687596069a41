from enum import Enum


class SelectorStatus(Enum):
    UNSELECTED = "UNSELECTED"   # No code chosen, option list may be empty
    LOADING = "LOADING"         # Option list fetch in flight
    READY = "READY"             # Option list fetched (possibly empty), nothing chosen yet
    SELECTED = "SELECTED"       # A specific option is chosen
