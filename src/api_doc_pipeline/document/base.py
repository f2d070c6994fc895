"""Data models for generated API description documents.

Documents are built fresh for every generation request. Models are frozen so
that a finalized document cannot be changed after it is published; the
pipeline produces new instances with ``model_copy`` instead.
"""

import copy
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from api_doc_pipeline.values import PrimitiveValue


class Param(BaseModel):
    """A single operation parameter (query, path, header, or cookie)."""

    model_config = ConfigDict(frozen=True)

    name: str
    location: str  # query / path / header / cookie
    required: bool = False
    param_type: str = "string"
    description: str = ""
    constraints: dict = {}  # minimum, maximum, pattern, enum, etc.
    example: PrimitiveValue | None = None


class Response(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str


class Operation(BaseModel):
    """One documented HTTP action."""

    model_config = ConfigDict(frozen=True)

    method: str  # GET / POST / PUT / DELETE / PATCH
    path: str  # /api/catalog/items/{id}
    summary: str = ""
    operation_id: str | None = None
    tags: list[str] = []
    parameters: list[Param] = []
    responses: dict[str, Response] = {}  # {status_code: Response}
    deprecated: bool = False
    security: list[dict[str, list[str]]] = []

    @property
    def key(self) -> str:
        return f"{self.method.upper()} {self.path}"


class SecurityScheme(BaseModel):
    """An OAuth2 implicit-flow security scheme."""

    model_config = ConfigDict(frozen=True)

    type: Literal["oauth2"] = "oauth2"
    flow: Literal["implicit"] = "implicit"
    authorization_url: str
    token_url: str
    scopes: dict[str, str]

    def to_openapi(self) -> dict:
        return {
            "type": self.type,
            "flows": {
                self.flow: {
                    "authorizationUrl": self.authorization_url,
                    "tokenUrl": self.token_url,
                    "scopes": dict(self.scopes),
                }
            },
        }


class Components(BaseModel):
    model_config = ConfigDict(frozen=True)

    schemas: dict[str, dict] = {}
    security_schemes: dict[str, SecurityScheme] = {}


class Info(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    version: str = ""
    description: str = ""


class Server(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    description: str | None = None


class Document(BaseModel):
    """The API description for a single version."""

    model_config = ConfigDict(frozen=True)

    name: str
    openapi: str = "3.0.1"
    info: Info = Field(default_factory=Info)
    servers: list[Server] = []
    components: Components = Field(default_factory=Components)
    operations: list[Operation] = []

    def operation(self, method: str, path: str) -> Operation | None:
        key = f"{method.upper()} {path}"
        for op in self.operations:
            if op.key == key:
                return op
        return None

    def to_openapi(self) -> dict:
        """Render the document as an OpenAPI dict."""
        paths: dict[str, dict] = {}
        for op in self.operations:
            paths.setdefault(op.path, {})[op.method.lower()] = _render_operation(op)

        result: dict = {
            "openapi": self.openapi,
            "info": self.info.model_dump(),
            "servers": [_render_server(s) for s in self.servers],
            "paths": paths,
        }

        components: dict = {}
        if self.components.schemas:
            components["schemas"] = copy.deepcopy(self.components.schemas)
        if self.components.security_schemes:
            components["securitySchemes"] = {
                name: scheme.to_openapi() for name, scheme in self.components.security_schemes.items()
            }
        if components:
            result["components"] = components
        return result


def _render_server(server: Server) -> dict:
    result = {"url": server.url}
    if server.description:
        result["description"] = server.description
    return result


def _render_operation(op: Operation) -> dict:
    result: dict = {}
    if op.tags:
        result["tags"] = list(op.tags)
    if op.summary:
        result["summary"] = op.summary
    if op.operation_id:
        result["operationId"] = op.operation_id
    if op.parameters:
        result["parameters"] = [_render_param(p) for p in op.parameters]
    result["responses"] = {code: {"description": r.description} for code, r in op.responses.items()}
    if op.deprecated:
        result["deprecated"] = True
    if op.security:
        result["security"] = [{name: list(scopes) for name, scopes in req.items()} for req in op.security]
    return result


def _render_param(param: Param) -> dict:
    schema: dict = {"type": param.param_type, **copy.deepcopy(param.constraints)}
    if param.example is not None and param.example.supported:
        schema["example"] = param.example.value

    result: dict = {"name": param.name, "in": param.location}
    if param.description:
        result["description"] = param.description
    if param.required:
        result["required"] = True
    result["schema"] = schema
    return result
