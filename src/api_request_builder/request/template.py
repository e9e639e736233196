"""URL template builder — path substitution plus a placeholder query string.

The query string keeps the declared parameter name as the visible key while
the bindings use the allocated template variable names, so an exploded
parameter renders as ``status={status0}&status={status1}``.
"""

import logging
import re
from typing import NamedTuple

from api_request_builder.exceptions import DuplicateTemplateVariable, MissingRequiredParameter
from api_request_builder.parser.base import Param
from api_request_builder.request.allocator import allocate
from api_request_builder.request.serializer import serialize

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")


class UrlTemplate(NamedTuple):
    url_template: str
    path_variables: dict[str, str]
    query_variables: dict[str, str]
    # raw elements of values joined with an already-encoded separator
    joined_elements: dict[str, tuple[str, ...]]


def path_placeholders(path_pattern: str) -> list[str]:
    """Return the ``{name}`` placeholders of a path pattern, in order."""
    return PLACEHOLDER_RE.findall(path_pattern)


def build(method: str, path_pattern: str, path_params: list[Param], query_params: list[Param]) -> UrlTemplate:
    """Build the URL template and the path/query bindings for one call.

    :raises MissingRequiredParameter: if a path placeholder has no bound value.
    :raises DuplicateTemplateVariable: if two query values share a placeholder.
    """
    path_variables: dict[str, str] = {}
    joined_elements: dict[str, tuple[str, ...]] = {}
    for param in path_params:
        for variable in allocate(param.name, serialize(param)):
            path_variables[variable.template_name] = variable.value
            if variable.elements:
                joined_elements[variable.template_name] = variable.elements

    for placeholder in path_placeholders(path_pattern):
        if placeholder not in path_variables:
            raise MissingRequiredParameter(placeholder, "path")

    query_variables: dict[str, str] = {}
    fragments = []
    for param in query_params:
        variables = allocate(param.name, serialize(param))
        if not variables:
            logger.debug("%s %s: omitting query parameter %s", method, path_pattern, param.name)
        for variable in variables:
            if variable.template_name in query_variables:
                raise DuplicateTemplateVariable(variable.template_name)
            query_variables[variable.template_name] = variable.value
            if variable.elements:
                joined_elements[variable.template_name] = variable.elements
            fragments.append(f"{param.name}={{{variable.template_name}}}")

    url_template = path_pattern
    if fragments:
        url_template += ("&" if "?" in path_pattern else "?") + "&".join(fragments)

    return UrlTemplate(url_template, path_variables, query_variables, joined_elements)
