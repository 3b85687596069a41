from enum import Enum


class Currency(Enum):
    USD = "USD"
    EUR = "EUR"
    VND = "VND"
