"""Build transport-ready request descriptors from API operation parameters."""

__version__ = "0.1.0"

from api_request_builder.config import BuilderSettings, get_settings
from api_request_builder.exceptions import (
    DuplicateTemplateVariable,
    MissingRequiredParameter,
    RequestBuildError,
    UnknownParameter,
    UnsupportedStyle,
    UnsupportedValue,
)
from api_request_builder.parser.base import ApiEndpoint, Param, ParamLocation, ParamStyle
from api_request_builder.request.builder import RequestBuilder, build_request
from api_request_builder.request.descriptor import RequestDescriptor

__all__ = [
    "ApiEndpoint",
    "BuilderSettings",
    "DuplicateTemplateVariable",
    "MissingRequiredParameter",
    "Param",
    "ParamLocation",
    "ParamStyle",
    "RequestBuildError",
    "RequestBuilder",
    "RequestDescriptor",
    "UnknownParameter",
    "UnsupportedStyle",
    "UnsupportedValue",
    "build_request",
    "get_settings",
]
