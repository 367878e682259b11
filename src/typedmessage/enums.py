"""Enumerations for typedmessage type-safe constants.

Uses StrEnum for automatic string conversion. StrEnum members are strings
themselves, so they compare equal to the raw tokens found in locale files.
"""

from enum import StrEnum


class PlaceholderType(StrEnum):
    """Recognized placeholder type annotations.

    StrEnum provides automatic string conversion: str(PlaceholderType.NUMBER) == "number"
    """

    STRING = "string"
    """Implicit default: {name} or {name:string}"""

    NUMBER = "number"
    """Numeric value: {count:number}"""

    BOOLEAN = "boolean"
    """Boolean flag: {enabled:boolean}"""

    DATE = "date"
    """Calendar date: {createdAt:date}"""


class LocaleLoadStatus(StrEnum):
    """Load status exposed by LocaleController.

    Lifecycle: IDLE -> LOADING -> READY, or LOADING -> ERROR.
    """

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


__all__ = [
    "LocaleLoadStatus",
    "PlaceholderType",
]
