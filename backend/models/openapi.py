"""
Pydantic schemas for the parts of an OpenAPI 3.0 document the corrector touches.
Every model keeps unknown keys (operationId, tags, info, ...) so a converted
document round-trips without losing data.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


class OpenApiModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_openapi(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class Parameter(OpenApiModel):
    name: Optional[str] = None
    location: Optional[str] = Field(None, alias="in")
    description: Optional[str] = None
    required: Optional[bool] = None
    schema_: Optional[dict[str, Any]] = Field(None, alias="schema")


class RequestBody(OpenApiModel):
    description: Optional[str] = None
    content: dict[str, dict] = Field(default_factory=dict)
    required: Optional[bool] = None


class PathOperation(OpenApiModel):
    description: Optional[str] = None
    parameters: list[Parameter] = Field(default_factory=list)
    request_body: Optional[RequestBody] = Field(None, alias="requestBody")
    responses: dict[str, dict] = Field(default_factory=dict)

    def find_parameter(self, name: str, location: Optional[str] = None) -> Optional[Parameter]:
        return next(
            (p for p in self.parameters if p.name == name and (location is None or p.location == location)),
            None,
        )


class PathItem(OpenApiModel):
    get: Optional[PathOperation] = None
    put: Optional[PathOperation] = None
    post: Optional[PathOperation] = None
    delete: Optional[PathOperation] = None
    options: Optional[PathOperation] = None
    head: Optional[PathOperation] = None
    patch: Optional[PathOperation] = None
    trace: Optional[PathOperation] = None

    def operations(self) -> dict[str, PathOperation]:
        """Present operations keyed by lower-case HTTP method."""
        return {m: getattr(self, m) for m in HTTP_METHODS if getattr(self, m) is not None}


class Components(OpenApiModel):
    schemas: dict[str, dict] = Field(default_factory=dict)
    security_schemes: dict[str, dict] = Field(default_factory=dict, alias="securitySchemes")


class OpenApiDocument(OpenApiModel):
    openapi: str = "3.0.1"
    info: Optional[dict[str, Any]] = None
    servers: list[dict] = Field(default_factory=list)
    paths: dict[str, PathItem] = Field(default_factory=dict)
    components: Components = Field(default_factory=Components)
    security: list[dict[str, list[str]]] = Field(default_factory=list)
