"""Resource routing: operation + identity -> request description.

Every client operation is a row in a static endpoint table. A call resolves
its row, fills the row's route template from the caller's identity and
entity ids, filters optional query parameters and returns a ``RequestSpec``
for the transport to execute.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping
from urllib.parse import quote
from uuid import UUID

from gitrest.api.exceptions import InvalidIdentityError
from gitrest.api.identity import ResourceIdentity, normalize_ref
from gitrest.api.query import QueryParameters

logger = logging.getLogger(__name__)


class MediaType(str, Enum):
    JSON = "application/json"
    OCTET_STREAM = "application/octet-stream"
    ZIP = "application/zip"
    TEXT = "text/plain"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass(frozen=True)
class EndpointDescriptor:
    """One row of the operation table.

    ``required`` names the entity placeholders a call must fill. A missing
    one raises instead of falling back to the collection route.
    """

    name: str
    location_id: UUID
    method: HttpMethod
    route_template: str
    api_version: str = "2.0"
    response_media_type: MediaType = MediaType.JSON
    request_media_type: MediaType | None = None
    required: tuple[str, ...] = ()


@dataclass(frozen=True)
class RequestSpec:
    """A fully resolved request, ready for the transport."""

    endpoint: EndpointDescriptor
    path: str
    route_values: dict[str, str] = field(default_factory=dict)
    query: tuple[tuple[str, str], ...] = ()
    body: Any = None

    @property
    def method(self) -> str:
        return self.endpoint.method.value

    @property
    def query_dict(self) -> dict[str, str]:
        return dict(self.query)


def expand_route(template: str, values: Mapping[str, str]) -> str:
    """Fill ``{placeholder}`` segments of a route template.

    A placeholder with no value is dropped when it is the first segment
    (project scope) or the last one (the collection form of the resource).
    Anywhere else the route cannot be built.
    """
    segments = template.split("/")
    out: list[str] = []
    last = len(segments) - 1
    for index, segment in enumerate(segments):
        if not (segment.startswith("{") and segment.endswith("}")):
            out.append(segment)
            continue
        name = segment[1:-1]
        value = values.get(name)
        if value:
            out.append(quote(value, safe=""))
        elif index in (0, last):
            continue
        else:
            raise InvalidIdentityError(f"Route value '{name}' is required")
    return "/".join(out)


def build_request(
    descriptor: EndpointDescriptor,
    identity: ResourceIdentity | None = None,
    *,
    route_values: Mapping[str, Any] | None = None,
    query: QueryParameters | None = None,
    body: Any = None,
) -> RequestSpec:
    """Resolve one call of ``descriptor`` into a ``RequestSpec``.

    Only present identity components and entity ids end up in the route
    values; ``None`` and ``""`` are dropped, unless the descriptor lists the
    id as required, in which case ``InvalidIdentityError`` is raised.
    """
    values = identity.route_values() if identity is not None else {}
    entity_values = dict(route_values or {})
    for name in descriptor.required:
        entity_values.setdefault(name, None)
    for key, value in entity_values.items():
        required = key in descriptor.required
        if isinstance(value, (str, UUID)) or value is None:
            resolved = normalize_ref(value, key, required=required)
        else:
            resolved = str(value)
        if resolved is not None:
            values[key] = resolved

    path = expand_route(descriptor.route_template, values)
    spec = RequestSpec(
        endpoint=descriptor,
        path=path,
        route_values=values,
        query=query.items() if query is not None else (),
        body=body,
    )
    logger.debug(
        "Routed %s -> %s %s %s", descriptor.name, spec.method, path, spec.query
    )
    return spec
