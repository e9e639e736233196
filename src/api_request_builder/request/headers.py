"""Header assembler — content negotiation, User-Agent and header/cookie parameters."""

from collections.abc import Iterable

from api_request_builder.config import BuilderSettings
from api_request_builder.parser.base import Param
from api_request_builder.request.serializer import serialize


def assemble(
    consumes: list[str],
    produces: list[str],
    settings: BuilderSettings,
    *,
    has_body: bool = False,
    header_params: Iterable[Param] = (),
    cookie_params: Iterable[Param] = (),
) -> dict[str, str]:
    """Compute the ordered request headers for one call.

    Order is Accept, Content-Type, configured defaults, User-Agent, then
    header parameters in declaration order and finally the Cookie header. A
    header parameter replaces any earlier header of the same name.
    """
    headers: dict[str, str] = {}
    if produces:
        headers["Accept"] = ", ".join(produces)
    if consumes:
        headers["Content-Type"] = consumes[0]
    elif has_body:
        headers["Content-Type"] = settings.default_content_type

    for name, value in settings.default_headers.items():
        set_header(headers, name, value)
    set_header(headers, "User-Agent", settings.user_agent)

    for param in header_params:
        pairs = serialize(param)
        if pairs:
            set_header(headers, param.name, ",".join(pair.literal for pair in pairs))

    cookies = []
    for param in cookie_params:
        cookies.extend(f"{param.name}={pair.literal}" for pair in serialize(param))
    if cookies:
        set_header(headers, "Cookie", "; ".join(cookies))

    return headers


def set_header(headers: dict[str, str], name: str, value: str) -> None:
    """Set ``name`` to ``value``, dropping any entry whose name differs only in case."""
    for existing in [key for key in headers if key.lower() == name.lower()]:
        del headers[existing]
    headers[name] = value
