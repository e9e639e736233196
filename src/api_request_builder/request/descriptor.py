"""Request descriptor — the transport-ready description of one HTTP call."""

from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from api_request_builder.exceptions import DuplicateTemplateVariable
from api_request_builder.parser.base import ParamStyle
from api_request_builder.request.serializer import SEPARATORS
from api_request_builder.request.template import PLACEHOLDER_RE

SPACE_SEPARATOR = SEPARATORS[ParamStyle.SPACE_DELIMITED]


class RequestDescriptor(BaseModel):
    """Method, URL template, bindings, headers and body of one call.

    ``variables`` is the single binding map a transport resolves the template
    against; ``path_variables`` and ``query_variables`` are its two halves.
    ``joined_elements`` keeps the raw elements of space-delimited values so
    ``expand_url`` can escape them without escaping their ``%20`` separator.
    """

    model_config = ConfigDict(frozen=True)

    method: str
    url_template: str
    path_variables: dict[str, str] = {}
    query_variables: dict[str, str] = {}
    variables: dict[str, str] = {}
    headers: dict[str, str] = {}
    body: Any = None
    joined_elements: dict[str, tuple[str, ...]] = Field(default_factory=dict, exclude=True)

    def expand_url(self, base_url: str = "") -> str:
        """Substitute the bindings into the template, percent-encoding each value."""

        def _replace(match) -> str:
            name = match.group(1)
            if name not in self.variables:
                raise KeyError(f"No binding for template variable '{name}'")
            if name in self.joined_elements:
                return SPACE_SEPARATOR.join(encode_literal(e) for e in self.joined_elements[name])
            return encode_literal(self.variables[name])

        return base_url.rstrip("/") + PLACEHOLDER_RE.sub(_replace, self.url_template)


def emit(
    method: str,
    url_template: str,
    path_variables: dict[str, str],
    query_variables: dict[str, str],
    headers: dict[str, str],
    body: Any = None,
    joined_elements: dict[str, tuple[str, ...]] | None = None,
) -> RequestDescriptor:
    """Assemble the descriptor, merging path and query bindings into one map.

    :raises DuplicateTemplateVariable: if a path and a query binding share a name.
    """
    variables = dict(path_variables)
    for name, value in query_variables.items():
        if name in variables:
            raise DuplicateTemplateVariable(name)
        variables[name] = value

    return RequestDescriptor(
        method=method.upper(),
        url_template=url_template,
        path_variables=dict(path_variables),
        query_variables=dict(query_variables),
        variables=variables,
        headers=dict(headers),
        body=body,
        joined_elements=dict(joined_elements or {}),
    )


def encode_literal(value: str) -> str:
    """Percent-encode every reserved character of ``value``, ``%`` included."""
    return quote(value, safe="")
