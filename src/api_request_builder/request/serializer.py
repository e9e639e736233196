"""Value serializer — turns one parameter value into (suffix, literal) pairs.

No escaping happens here; literals are percent-encoded later, when the
template is expanded into a concrete URL. The one exception is the
space-delimited separator, which is already the escape `%20`; pairs joined
with it keep their raw elements so the expansion can escape only those.
"""

from collections.abc import Mapping, Set
from datetime import date, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, NamedTuple

from api_request_builder.exceptions import MissingRequiredParameter, UnsupportedStyle, UnsupportedValue
from api_request_builder.parser.base import Param, ParamLocation, ParamStyle

SEPARATORS = MappingProxyType({
    ParamStyle.SIMPLE: ",",
    ParamStyle.FORM: ",",
    ParamStyle.SPACE_DELIMITED: "%20",
    ParamStyle.PIPE_DELIMITED: "|",
})

# Separators that are already percent-encoded
ENCODED_SEPARATORS = frozenset({"%20"})


class SerializedPair(NamedTuple):
    suffix: str  # "" for a single value, "0", "1", ... for exploded elements
    literal: str
    elements: tuple[str, ...] = ()  # raw elements of a literal joined with an encoded separator


def serialize(param: Param) -> list[SerializedPair]:
    """Serialize the value bound to ``param``.

    Returns an empty list when an optional parameter is absent, or when an
    exploded multi-valued parameter has no elements.

    :raises MissingRequiredParameter: if a required parameter has no value.
    :raises UnsupportedStyle: for styles with no serialization rule.
    :raises UnsupportedValue: for mappings, sets and nested sequences.
    """
    if not param.is_present:
        if param.required:
            raise MissingRequiredParameter(param.name, param.location.value)
        return []

    separator = SEPARATORS.get(param.style)
    if separator is None:
        raise UnsupportedStyle(param.name, param.style.value)

    if not is_multi_valued(param.value):
        _check_scalar(param.name, param.value)
        return [SerializedPair("", render_scalar(param.value))]

    for v in param.value:
        _check_scalar(param.name, v)
    elements = [render_scalar(v) for v in param.value]
    # Path placeholders hold exactly one value, so path arrays always collapse.
    if param.explode and param.location is not ParamLocation.PATH:
        return [SerializedPair(str(i), literal) for i, literal in enumerate(elements)]
    if separator in ENCODED_SEPARATORS:
        return [SerializedPair("", separator.join(elements), tuple(elements))]
    return [SerializedPair("", separator.join(elements))]


def is_multi_valued(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _check_scalar(name: str, value: Any) -> None:
    # Sets have no element order, mappings need an object style
    if isinstance(value, (Mapping, Set, list, tuple)):
        raise UnsupportedValue(name, type(value).__name__)


def render_scalar(value: Any) -> str:
    """Render a scalar the way it should appear on the wire, before escaping."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)
