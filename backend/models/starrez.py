"""Pydantic schemas for StarRez upstream connections and raw metadata."""
from pydantic import BaseModel, Field


class StarRezConnection(BaseModel):
    production_url: str
    development_url: str
    username: str = ""
    api_key: str = ""
    timeout_seconds: int = 60

    def base_url(self, dev: bool = False) -> str:
        return (self.development_url if dev else self.production_url).rstrip("/")

    def root_url(self, dev: bool = False) -> str:
        """Base URL without the trailing /services segment (where /swagger lives)."""
        return self.base_url(dev).replace("/services", "")

    def servers(self) -> list[dict]:
        return [
            {"url": self.development_url, "description": "Development"},
            {"url": self.production_url, "description": "Production"},
        ]


class ColumnDefinition(BaseModel):
    """One element of a columnlist XML document."""
    name: str
    attributes: dict[str, str] = Field(default_factory=dict)   # document order


class EnumDefinition(BaseModel):
    name: str
    values: list[tuple[int, str]] = Field(default_factory=list)   # (enumId, description)
