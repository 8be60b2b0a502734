from core.type_mapper import map_column_type  # noqa: F401
from core.enum_resolver import EnumCache, apply_enum_values  # noqa: F401
from core.schema_assembler import build_table_schema, collect_schemas, stream_models_json  # noqa: F401
from core.path_corrector import correct_document  # noqa: F401
from core.document_composer import compile_documentation, compile_models  # noqa: F401
