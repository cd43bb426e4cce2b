"""Common schemas: enums shared by queries, records and validation."""

from enum import StrEnum


class ValueType(StrEnum):
    TEXT = "TEXT"
    LONG_TEXT = "LONG_TEXT"
    MULTI_TEXT = "MULTI_TEXT"
    LETTER = "LETTER"
    PHONE_NUMBER = "PHONE_NUMBER"
    EMAIL = "EMAIL"
    BOOLEAN = "BOOLEAN"
    TRUE_ONLY = "TRUE_ONLY"
    DATE = "DATE"
    DATETIME = "DATETIME"
    TIME = "TIME"
    NUMBER = "NUMBER"
    UNIT_INTERVAL = "UNIT_INTERVAL"
    PERCENTAGE = "PERCENTAGE"
    INTEGER = "INTEGER"
    INTEGER_POSITIVE = "INTEGER_POSITIVE"
    INTEGER_NEGATIVE = "INTEGER_NEGATIVE"
    INTEGER_ZERO_OR_POSITIVE = "INTEGER_ZERO_OR_POSITIVE"
    TRACKER_ASSOCIATE = "TRACKER_ASSOCIATE"
    USERNAME = "USERNAME"
    COORDINATE = "COORDINATE"
    ORGANISATION_UNIT = "ORGANISATION_UNIT"
    REFERENCE = "REFERENCE"
    AGE = "AGE"
    URL = "URL"
    FILE_RESOURCE = "FILE_RESOURCE"
    IMAGE = "IMAGE"
    GEOJSON = "GEOJSON"

    @classmethod
    def from_string(cls, value: str) -> "ValueType":
        """Parse a value type name, case-insensitively.

        Raises ValueError for unknown names.
        """
        return cls(value.strip().upper())


class DimensionItemType(StrEnum):
    DATA_ELEMENT = "DATA_ELEMENT"
    DATA_ELEMENT_OPERAND = "DATA_ELEMENT_OPERAND"
    INDICATOR = "INDICATOR"
    REPORTING_RATE = "REPORTING_RATE"
    PROGRAM_DATA_ELEMENT = "PROGRAM_DATA_ELEMENT"
    PROGRAM_ATTRIBUTE = "PROGRAM_ATTRIBUTE"
    PROGRAM_INDICATOR = "PROGRAM_INDICATOR"


class RootJunction(StrEnum):
    AND = "AND"
    OR = "OR"


class OrderField(StrEnum):
    DISPLAY_NAME = "displayName"
    NAME = "name"
    DISPLAY_SHORT_NAME = "displayShortName"
    SHORT_NAME = "shortName"


class OrderDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"
