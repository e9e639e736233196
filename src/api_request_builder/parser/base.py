"""Normalized operation models consumed by the request pipeline.

The loader (and any other upstream model builder) converts API documents
into these models; the request pipeline only ever reads them.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, model_validator

from api_request_builder.exceptions import UnknownParameter


class ParamLocation(str, Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


class ParamStyle(str, Enum):
    SIMPLE = "simple"
    FORM = "form"
    SPACE_DELIMITED = "spaceDelimited"
    PIPE_DELIMITED = "pipeDelimited"
    DEEP_OBJECT = "deepObject"


DEFAULT_STYLES = {
    ParamLocation.PATH: ParamStyle.SIMPLE,
    ParamLocation.QUERY: ParamStyle.FORM,
    ParamLocation.HEADER: ParamStyle.SIMPLE,
    ParamLocation.COOKIE: ParamStyle.FORM,
}


class Param(BaseModel):
    """A single operation parameter plus the value supplied for one call.

    ``value`` is ``None`` when the caller omitted the parameter. Path
    parameters are always required.
    """

    name: str
    location: ParamLocation
    required: bool = False
    param_type: str = "string"  # string / integer / number / boolean / array / object
    style: ParamStyle | None = None
    explode: bool | None = None
    description: str = ""
    constraints: dict = {}  # min, max, pattern, enum, etc.
    value: Any = None

    @model_validator(mode="after")
    def _apply_defaults(self) -> "Param":
        if self.style is None:
            self.style = DEFAULT_STYLES[self.location]
        if self.explode is None:
            self.explode = self.style is ParamStyle.FORM
        if self.location is ParamLocation.PATH:
            self.required = True
        return self

    @property
    def is_present(self) -> bool:
        return self.value is not None

    def bind(self, value: Any) -> "Param":
        """Return a copy of this parameter carrying ``value``."""
        return self.model_copy(update={"value": value})


class ApiEndpoint(BaseModel):
    """A single API operation with the metadata the request pipeline needs."""

    operation_id: str = ""
    method: str  # GET / POST / PUT / DELETE / PATCH
    path: str  # /pet/{petId}
    summary: str = ""
    parameters: list[Param] = []
    request_body: dict | None = None
    consumes: list[str] = []  # request media types, in declaration order
    produces: list[str] = []  # response media types, in declaration order
    responses: dict = {}  # {status_code: {description}}
    tags: list[str] = []

    def bind(self, arguments: Mapping[str, Any]) -> list[Param]:
        """Attach caller arguments to the declared parameters, in declaration order.

        A ``"<location>.<name>"`` key (``"header.api_key"``) targets one
        parameter; a bare ``"<name>"`` key applies to every parameter of that
        name that has no qualified argument.

        :raises UnknownParameter: if an argument matches no declared parameter.
        """
        used: set[str] = set()
        bound = []
        for param in self.parameters:
            qualified = f"{param.location.value}.{param.name}"
            if qualified in arguments:
                key = qualified
            elif param.name in arguments:
                key = param.name
            else:
                bound.append(param.bind(None))
                continue
            used.add(key)
            bound.append(param.bind(arguments[key]))

        for key in arguments:
            if key not in used:
                raise UnknownParameter(key, self.operation_id)
        return bound
