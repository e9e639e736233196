"""Adapter from request descriptors to unsent ``requests`` objects.

Nothing here opens a connection; sending the prepared request is up to the
caller's ``requests.Session``.
"""

import requests

from api_request_builder.request.descriptor import RequestDescriptor


def to_prepared_request(descriptor: RequestDescriptor, base_url: str = "") -> requests.PreparedRequest:
    """Expand ``descriptor`` against ``base_url`` and prepare it for sending.

    Structured bodies of JSON requests are passed as ``json=``; anything else
    is sent as it is.
    """
    content_type = next(
        (value for name, value in descriptor.headers.items() if name.lower() == "content-type"),
        "",
    )
    json_body = data = None
    if isinstance(descriptor.body, (bytes, str)) or not _is_json(content_type):
        data = descriptor.body
    else:
        json_body = descriptor.body

    request = requests.Request(
        method=descriptor.method,
        url=descriptor.expand_url(base_url),
        headers=dict(descriptor.headers),
        json=json_body,
        data=data,
    )
    return request.prepare()


def _is_json(content_type: str) -> bool:
    media_type = content_type.split(";")[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")
