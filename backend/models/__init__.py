from models.starrez import StarRezConnection, ColumnDefinition, EnumDefinition  # noqa: F401
from models.schema import PropertySchema, TableSchema  # noqa: F401
from models.openapi import OpenApiDocument, PathItem, PathOperation, Parameter, RequestBody  # noqa: F401
