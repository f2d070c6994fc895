"""Registered endpoints and the base document they produce per version."""

import copy
from collections.abc import Iterable

from api_doc_pipeline.document.base import Components, Document, Operation, Server
from api_doc_pipeline.routing.base import ApiVersion, RouteEndpoint, VersionDescriptor


class RouteTable:
    """The endpoints known to the routing layer."""

    def __init__(
        self,
        endpoints: Iterable[RouteEndpoint],
        schemas: dict[str, dict] | None = None,
        servers: Iterable[Server] = (),
    ):
        self.endpoints = list(endpoints)
        self.schemas = schemas or {}
        self.servers = list(servers)

    def endpoint_for(self, operation: Operation, version: ApiVersion) -> RouteEndpoint | None:
        """The endpoint that serves ``operation`` in ``version``."""
        for ep in self.endpoints:
            if ep.key == operation.key and ep.applies_to(version):
                return ep
        return None

    def requires_authorization(self, operation: Operation, version: ApiVersion) -> bool:
        """Whether the handler behind ``operation`` in ``version`` carries an authorization requirement."""
        endpoint = self.endpoint_for(operation, version)
        return endpoint is not None and endpoint.requires_authorization

    def base_document(self, descriptor: VersionDescriptor) -> Document:
        """Build a fresh, untransformed document for one version."""
        operations = [
            _to_operation(ep) for ep in self.endpoints if ep.applies_to(descriptor.version)
        ]
        return Document(
            name=descriptor.name,
            servers=list(self.servers),
            components=Components(schemas=copy.deepcopy(self.schemas)),
            operations=operations,
        )


def _to_operation(endpoint: RouteEndpoint) -> Operation:
    return Operation(
        method=endpoint.method,
        path=endpoint.path,
        summary=endpoint.summary,
        operation_id=endpoint.operation_id,
        tags=list(endpoint.tags),
        parameters=list(endpoint.parameters),
        responses=dict(endpoint.responses),
        deprecated=endpoint.deprecated,
    )
