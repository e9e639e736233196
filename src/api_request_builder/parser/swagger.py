"""OpenAPI / Swagger document parser.

Parses OpenAPI 3.x and Swagger 2.0 documents into ApiEndpoint models with
resolved parameter style and explode settings.
"""

from pathlib import Path

from api_request_builder.exceptions import UnsupportedStyle
from api_request_builder.parser.base import ApiEndpoint, Param, ParamLocation, ParamStyle
from api_request_builder.parser.detect import detect_format, load_document

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")

# Swagger 2.0 collectionFormat -> (style, explode); csv depends on the location
COLLECTION_FORMATS = {
    "multi": (ParamStyle.FORM, True),
    "ssv": (ParamStyle.SPACE_DELIMITED, False),
    "pipes": (ParamStyle.PIPE_DELIMITED, False),
}


def parse_openapi(file_path: Path) -> list[ApiEndpoint]:
    """Parse an OpenAPI/Swagger file into a list of ApiEndpoint."""
    return parse_document(load_document(file_path))


def parse_document(doc: dict) -> list[ApiEndpoint]:
    """Parse an already-loaded OpenAPI/Swagger document."""
    fmt = detect_format(doc)
    endpoints = []

    for path, path_item in (doc.get("paths") or {}).items():
        shared_parameters = path_item.get("parameters", [])
        for method, operation in path_item.items():
            if method.upper() not in HTTP_METHODS:
                continue

            raw_params = _merge_parameters(
                [_resolve(doc, p) for p in shared_parameters],
                [_resolve(doc, p) for p in operation.get("parameters", [])],
            )
            if fmt == "openapi":
                params = [_parse_openapi_parameter(p) for p in raw_params]
                request_body = _resolve(doc, operation["requestBody"]) if "requestBody" in operation else None
                consumes = list((request_body or {}).get("content", {}))
                produces = _openapi_produces(doc, operation.get("responses", {}))
            else:
                params = [_parse_swagger_parameter(p) for p in raw_params if p.get("in") not in ("body", "formData")]
                request_body = _swagger_request_body(raw_params)
                consumes = operation.get("consumes", doc.get("consumes", []))
                produces = operation.get("produces", doc.get("produces", []))

            endpoints.append(
                ApiEndpoint(
                    operation_id=operation.get("operationId") or _fallback_operation_id(method, path),
                    method=method.upper(),
                    path=path,
                    summary=operation.get("summary", ""),
                    parameters=params,
                    request_body=request_body,
                    consumes=consumes,
                    produces=produces,
                    responses=_parse_responses(operation.get("responses", {})),
                    tags=operation.get("tags", []),
                )
            )

    return endpoints


def server_url(doc: dict) -> str:
    """Base URL declared by the document, or '' if it declares none."""
    if detect_format(doc) == "openapi":
        servers = doc.get("servers") or []
        return servers[0].get("url", "") if servers else ""
    base_path = doc.get("basePath", "")
    if "host" not in doc:
        return base_path
    scheme = (doc.get("schemes") or ["http"])[0]
    return f"{scheme}://{doc['host']}{base_path}"


def _resolve(doc: dict, node: dict) -> dict:
    """Follow a local ``$ref`` (``#/components/parameters/...``) if present."""
    ref = node.get("$ref")
    if ref is None:
        return node
    if not ref.startswith("#/"):
        raise ValueError(f"Only local references are supported: {ref}")
    target = doc
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(target, dict) or part not in target:
            raise ValueError(f"Unresolvable reference: {ref}")
        target = target[part]
    return _resolve(doc, target)


def _merge_parameters(shared: list[dict], own: list[dict]) -> list[dict]:
    """Operation-level parameters override path-level ones with the same name and location."""
    merged = {(p["name"], p.get("in", "query")): p for p in shared}
    for p in own:
        merged[(p["name"], p.get("in", "query"))] = p
    return list(merged.values())


def _parse_openapi_parameter(p: dict) -> Param:
    schema = p.get("schema", {})
    style = p.get("style")
    if style is not None:
        try:
            style = ParamStyle(style)
        except ValueError:
            raise UnsupportedStyle(p["name"], style) from None

    return Param(
        name=p["name"],
        location=ParamLocation(p.get("in", "query")),
        required=p.get("required", False),
        param_type=schema.get("type", "string"),
        style=style,
        explode=p.get("explode"),
        description=p.get("description", ""),
        constraints=_constraints(schema),
    )


def _parse_swagger_parameter(p: dict) -> Param:
    location = ParamLocation(p.get("in", "query"))
    style = explode = None
    if p.get("type") == "array":
        collection_format = p.get("collectionFormat", "csv")
        if collection_format == "csv":
            style = ParamStyle.FORM if location in (ParamLocation.QUERY, ParamLocation.COOKIE) else ParamStyle.SIMPLE
            explode = False
        elif collection_format in COLLECTION_FORMATS:
            style, explode = COLLECTION_FORMATS[collection_format]
        else:
            raise UnsupportedStyle(p["name"], collection_format)

    return Param(
        name=p["name"],
        location=location,
        required=p.get("required", False),
        param_type=p.get("type", "string"),
        style=style,
        explode=explode,
        description=p.get("description", ""),
        constraints=_constraints(p),
    )


def _constraints(schema: dict) -> dict:
    constraints = {}
    for key in ("minimum", "maximum", "minLength", "maxLength", "pattern", "enum"):
        if key in schema:
            constraints[key] = schema[key]
    return constraints


def _swagger_request_body(params: list[dict]) -> dict | None:
    for p in params:
        if p.get("in") == "body":
            return {"required": p.get("required", False), "schema": p.get("schema", {})}

    form_params = [p for p in params if p.get("in") == "formData"]
    if not form_params:
        return None
    return {
        "required": any(p.get("required", False) for p in form_params),
        "schema": {
            "type": "object",
            "properties": {p["name"]: {"type": p.get("type", "string")} for p in form_params},
        },
    }


def _openapi_produces(doc: dict, responses: dict) -> list[str]:
    produces: list[str] = []
    for resp in responses.values():
        for media_type in _resolve(doc, resp).get("content", {}):
            if media_type not in produces:
                produces.append(media_type)
    return produces


def _parse_responses(responses: dict) -> dict:
    result = {}
    for status_code, resp in responses.items():
        result[str(status_code)] = {"description": resp.get("description", "")}
    return result


def _fallback_operation_id(method: str, path: str) -> str:
    sanitized = path.strip("/").replace("/", "_").replace("{", "").replace("}", "")
    return f"{method.lower()}_{sanitized or 'root'}"
