"""API manifest parser.

A manifest describes what the routing layer knows: the API versions, and the
endpoints registered for them in an OpenAPI-like ``paths`` section, with two
extra operation keys: ``authorize`` and ``versions``.
"""

from pathlib import Path
from typing import NamedTuple

import yaml

from api_doc_pipeline.document.base import Param, Response, Server
from api_doc_pipeline.routing.base import Link, RouteEndpoint, SunsetPolicy, VersionDescriptor
from api_doc_pipeline.routing.table import RouteTable
from api_doc_pipeline.routing.versions import VersionDescriptorProvider
from api_doc_pipeline.values import to_primitive

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")

CONSTRAINT_KEYS = ("minimum", "maximum", "minLength", "maxLength", "pattern", "enum", "format")


class Manifest(NamedTuple):
    versions: VersionDescriptorProvider
    routes: RouteTable


def load_manifest(file_path: Path) -> Manifest:
    """Parse a manifest file into version descriptors and a route table."""
    text = file_path.read_text(encoding="utf-8")
    doc = yaml.safe_load(text) or {}
    return parse_manifest(doc)


def parse_manifest(doc: dict) -> Manifest:
    versions = VersionDescriptorProvider(_parse_version(v) for v in doc.get("versions") or [])

    endpoints = []
    for path, methods in (doc.get("paths") or {}).items():
        for method, operation in (methods or {}).items():
            if method.upper() not in HTTP_METHODS:
                continue
            endpoints.append(_parse_endpoint(path, method, operation or {}))

    schemas = (doc.get("components") or {}).get("schemas") or {}
    servers = [Server(**s) for s in doc.get("servers") or []]
    return Manifest(versions=versions, routes=RouteTable(endpoints, schemas=schemas, servers=servers))


def _parse_version(entry: dict) -> VersionDescriptor:
    sunset = entry.get("sunset")
    policy = None
    if sunset:
        policy = SunsetPolicy(
            date=sunset.get("date"),
            links=[Link(**link) for link in sunset.get("links") or []],
        )
    return VersionDescriptor(
        name=entry["name"],
        version=entry["version"],
        deprecated=entry.get("deprecated", False),
        sunset_policy=policy,
    )


def _parse_endpoint(path: str, method: str, operation: dict) -> RouteEndpoint:
    return RouteEndpoint(
        method=method.upper(),
        path=path,
        summary=operation.get("summary", ""),
        operation_id=operation.get("operationId"),
        tags=operation.get("tags") or [],
        parameters=_parse_parameters(operation.get("parameters") or []),
        responses=_parse_responses(operation.get("responses") or {}),
        deprecated=operation.get("deprecated", False),
        requires_authorization=operation.get("authorize", False),
        versions=operation.get("versions") or [],
    )


def _parse_parameters(params: list[dict]) -> list[Param]:
    result = []
    for p in params:
        schema = p.get("schema") or {}
        constraints = {}
        for key in CONSTRAINT_KEYS:
            if key in schema:
                constraints[key] = schema[key]

        example = None
        if "example" in schema:
            example = to_primitive(schema["example"])
            if not example.supported:
                raise ValueError(f"Parameter '{p['name']}' has a non-primitive example")

        result.append(
            Param(
                name=p["name"],
                location=p.get("in", "query"),
                required=p.get("required", False),
                param_type=schema.get("type", "string"),
                description=p.get("description", ""),
                constraints=constraints,
                example=example,
            )
        )
    return result


def _parse_responses(responses: dict) -> dict[str, Response]:
    result = {}
    for status_code, resp in responses.items():
        result[str(status_code)] = Response(description=(resp or {}).get("description", ""))
    return result
