"""Pydantic schemas for the per-table JSON Schema objects built from StarRez metadata."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class PropertySchema(BaseModel):
    """A single column's schema fragment. Every field is optional and omitted when unset."""
    model_config = ConfigDict(populate_by_name=True)

    type: Optional[str] = None
    format: Optional[str] = None
    description: Optional[str] = None
    max_length: Optional[int] = Field(None, alias="maxLength")
    nullable: bool = False
    enum: list[Any] = Field(default_factory=list)     # id, label, id, label, ... [None]
    one_of: Optional[list[dict]] = Field(None, alias="oneOf")

    def to_openapi(self) -> dict:
        data = self.model_dump(by_alias=True, exclude_none=True)
        if not self.nullable:
            data.pop("nullable")
        if not self.enum:
            data.pop("enum")
        return data


class TableSchema(BaseModel):
    name: str
    properties: dict[str, PropertySchema] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)

    def add_required(self, property_name: str) -> None:
        if property_name in self.properties and property_name not in self.required:
            self.required.append(property_name)

    def to_openapi(self) -> dict:
        data: dict = {"type": "object"}
        if self.required:
            data["required"] = list(self.required)
        data["properties"] = {name: prop.to_openapi() for name, prop in self.properties.items()}
        return data
