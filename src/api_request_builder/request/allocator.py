"""Template variable naming for serialized parameter values.

URI template engines bind each placeholder name to one value, so a parameter
that serializes to several values needs one distinct placeholder per value.
"""

from typing import NamedTuple

from api_request_builder.request.serializer import SerializedPair


class BoundVariable(NamedTuple):
    template_name: str
    value: str
    elements: tuple[str, ...] = ()


def allocate(parameter_name: str, pairs: list[SerializedPair]) -> list[BoundVariable]:
    """Name the placeholders for one parameter's serialized pairs.

    A single unsuffixed pair keeps the parameter name; otherwise each pair is
    named ``parameter_name + suffix`` (``status0``, ``status1``, ...).
    """
    if len(pairs) == 1 and not pairs[0].suffix:
        return [BoundVariable(parameter_name, pairs[0].literal, pairs[0].elements)]
    return [BoundVariable(f"{parameter_name}{pair.suffix}", pair.literal, pair.elements) for pair in pairs]
