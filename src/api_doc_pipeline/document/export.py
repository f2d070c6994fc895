"""Serialize finalized documents for the serving layer."""

import json

import yaml

from api_doc_pipeline.document.base import Document

ROUTE_TEMPLATE = "/openapi/{name}.json"

FORMATS = ("json", "yaml")


def document_route(name: str) -> str:
    """Return the path a document is served under, e.g. ``/openapi/v1.json``."""
    return ROUTE_TEMPLATE.format(name=name)


def document_filename(name: str, fmt: str = "json") -> str:
    return f"{name}.{fmt}"


def dump_document(document: Document, fmt: str = "json") -> str:
    data = document.to_openapi()
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    raise ValueError(f"Unsupported document format: {fmt}")
