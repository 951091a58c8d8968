"""
Smart-album rule criteria.

A rule is a ``(key, value)`` pair. The key decides which kind of value is
legal through the static ``RULE_TO_TYPE`` table:

    person                                  -> UUID of a Person
    taken-after                             -> point in time
    city, state, country, make, model       -> non-empty text
    location                                -> geo-circle (lat, long, radius in km)

``parse_rule_value`` is the single place that enforces this. It returns the
typed variant or raises ``InvalidCriterionValueError``; values are never
coerced from one variant into another.
"""

import re
import uuid
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, TypeAdapter, ValidationError

from photostore.exceptions import InvalidCriterionValueError


class RuleKey(str, Enum):
    """Criterion kinds a smart album can filter on."""
    PERSON = "person"
    TAKEN_AFTER = "taken-after"
    CITY = "city"
    STATE = "state"
    COUNTRY = "country"
    MAKE = "make"
    MODEL = "model"
    LOCATION = "location"


class RuleValueType(str, Enum):
    """Shapes a rule value can take."""
    UUID = "uuid"
    STRING = "string"
    DATE = "date"
    GEO = "geo"


RULE_TO_TYPE: dict[RuleKey, RuleValueType] = {
    RuleKey.PERSON: RuleValueType.UUID,
    RuleKey.TAKEN_AFTER: RuleValueType.DATE,
    RuleKey.CITY: RuleValueType.STRING,
    RuleKey.STATE: RuleValueType.STRING,
    RuleKey.COUNTRY: RuleValueType.STRING,
    RuleKey.MAKE: RuleValueType.STRING,
    RuleKey.MODEL: RuleValueType.STRING,
    RuleKey.LOCATION: RuleValueType.GEO,
}


class RuleGeoValue(BaseModel):
    """Circle on the map: center coordinates in degrees, radius in kilometers."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    lat: float = Field(ge=-90, le=90, strict=True)
    long: float = Field(ge=-180, le=180, strict=True)
    radius: float = Field(gt=0, strict=True)


RuleValue = Union[uuid.UUID, str, datetime, RuleGeoValue]

_ADAPTERS: dict[RuleValueType, TypeAdapter] = {
    RuleValueType.UUID: TypeAdapter(uuid.UUID),
    RuleValueType.STRING: TypeAdapter(Annotated[str, StringConstraints(strict=True, min_length=1)]),
    RuleValueType.DATE: TypeAdapter(datetime),
    RuleValueType.GEO: TypeAdapter(RuleGeoValue),
}

# Python types each adapter may see; pydantic would otherwise coerce bytes and numbers
_ACCEPTED_INPUTS: dict[RuleValueType, tuple[type, ...]] = {
    RuleValueType.UUID: (str, uuid.UUID),
    RuleValueType.DATE: (str, datetime),
}

_NUMERIC = re.compile(r"[+-]?\d+(\.\d+)?")


def value_type_for(key: RuleKey) -> RuleValueType:
    """Value type required by ``key``."""
    return RULE_TO_TYPE[RuleKey(key)]


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"])
        parts.append(f"{loc}: {error['msg']}" if loc else error["msg"])
    return "; ".join(parts)


def parse_rule_value(key: RuleKey, value: Any) -> RuleValue:
    """
    Validate ``value`` against the type required by ``key``.

    Args:
        key: Rule key (enum member or its string value)
        value: Candidate value, either already typed or in its stored/JSON form

    Returns:
        The typed value: ``uuid.UUID``, ``str``, ``datetime`` or ``RuleGeoValue``

    Raises:
        InvalidCriterionValueError: If the value does not match the key's type
    """
    key = RuleKey(key)
    value_type = value_type_for(key)
    if isinstance(value, bool):
        # bool passes several lax validators as an int
        raise InvalidCriterionValueError(key, value_type, "boolean is not a valid value")
    accepted = _ACCEPTED_INPUTS.get(value_type)
    if accepted is not None and not isinstance(value, accepted):
        raise InvalidCriterionValueError(key, value_type, f"{type(value).__name__} is not a valid input")
    if value_type is RuleValueType.DATE and isinstance(value, str) and _NUMERIC.fullmatch(value.strip()):
        # Lax datetime parsing reads digit strings as unix timestamps
        raise InvalidCriterionValueError(key, value_type, "numeric string is not a timestamp")
    try:
        return _ADAPTERS[value_type].validate_python(value)
    except ValidationError as exc:
        raise InvalidCriterionValueError(key, value_type, _describe(exc)) from exc


def dump_rule_value(key: RuleKey, value: Any) -> Any:
    """
    Validate and encode a value into its JSON storage form.

    Timestamps are stored in canonical ``datetime.isoformat()`` form, so
    ``"2023-06-01T12:00:00.000Z"`` is written as ``"2023-06-01T12:00:00+00:00"``.
    """
    parsed = parse_rule_value(key, value)
    if isinstance(parsed, RuleGeoValue):
        return parsed.model_dump()
    if isinstance(parsed, uuid.UUID):
        return str(parsed)
    if isinstance(parsed, datetime):
        return parsed.isoformat()
    return parsed
