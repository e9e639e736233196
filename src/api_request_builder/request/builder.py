"""Request builder — runs the whole parameter-to-descriptor pipeline for one call."""

import logging
from collections.abc import Mapping
from typing import Any

from api_request_builder.config import BuilderSettings, get_settings
from api_request_builder.exceptions import MissingRequiredParameter
from api_request_builder.logging import redact_headers
from api_request_builder.parser.base import ApiEndpoint, Param, ParamLocation
from api_request_builder.request import headers, template
from api_request_builder.request.descriptor import RequestDescriptor, emit

logger = logging.getLogger(__name__)


class RequestBuilder:
    """Builds request descriptors from operation models and call arguments.

    The builder holds nothing but its settings snapshot, so one instance can
    be shared across threads.
    """

    def __init__(self, settings: BuilderSettings | None = None):
        self.settings = settings or get_settings()

    def build(
        self,
        endpoint: ApiEndpoint,
        arguments: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> RequestDescriptor:
        """Build the descriptor for calling ``endpoint`` with ``arguments``."""
        if body is None and (endpoint.request_body or {}).get("required"):
            raise MissingRequiredParameter("body", "body")

        params = endpoint.bind(arguments or {})
        return self.build_from_params(
            endpoint.method,
            endpoint.path,
            params,
            consumes=endpoint.consumes,
            produces=endpoint.produces,
            body=body,
        )

    def build_from_params(
        self,
        method: str,
        path_pattern: str,
        params: list[Param],
        *,
        consumes: list[str] | None = None,
        produces: list[str] | None = None,
        body: Any = None,
    ) -> RequestDescriptor:
        """Build the descriptor from parameters that already carry their values."""
        by_location: dict[ParamLocation, list[Param]] = {location: [] for location in ParamLocation}
        for param in params:
            by_location[param.location].append(param)

        url = template.build(
            method,
            path_pattern,
            by_location[ParamLocation.PATH],
            by_location[ParamLocation.QUERY],
        )
        request_headers = headers.assemble(
            consumes or [],
            produces or [],
            self.settings,
            has_body=body is not None,
            header_params=by_location[ParamLocation.HEADER],
            cookie_params=by_location[ParamLocation.COOKIE],
        )
        descriptor = emit(
            method,
            url.url_template,
            url.path_variables,
            url.query_variables,
            request_headers,
            body,
            url.joined_elements,
        )

        logger.debug(
            "Built %s %s variables=%s headers=%s",
            descriptor.method,
            descriptor.url_template,
            redact_headers(descriptor.variables),
            redact_headers(descriptor.headers),
        )
        return descriptor


def build_request(
    endpoint: ApiEndpoint,
    arguments: Mapping[str, Any] | None = None,
    body: Any = None,
    settings: BuilderSettings | None = None,
) -> RequestDescriptor:
    """Shortcut for ``RequestBuilder(settings).build(endpoint, arguments, body)``."""
    return RequestBuilder(settings).build(endpoint, arguments, body)
