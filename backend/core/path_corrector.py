"""
Path/Operation Corrector — repairs the OpenAPI document produced by converting
the StarRez Swagger 2.0 description.

The converted document declares every endpoint as a POST with a generic
response map. Path names carry enough information to recover the real HTTP
method, missing path/query parameters and the documented response codes.
Every step is safe to run on an already corrected document.
"""
import copy
import logging

from models.openapi import OpenApiDocument, Parameter, PathItem, PathOperation, RequestBody

logger = logging.getLogger(__name__)

FORMAT_VALUES = ["atom", "csv", "htm", "html", "html-xml", "json", "xml"]
DEFAULT_FORMAT = "xml"

STARQL_DESCRIPTION = (
    "Allows the user to select ad-hoc data from the database using StarRez Query Language (StarQL). "
    "The data will be returned in a format appropriate for the desired content accept type."
)
STARQL_QUERY_DESCRIPTION = "StarQL query to execute"

ACCEPT_DESCRIPTION = (
    "Specifies the response return type following the MIME standard as specified by RFC 6838, "
    "section 4, for example `application/json` (for dynamic response typing, use `*/*`)"
)

# Any of these in the path means a read, as long as nothing sends a body.
READ_PATH_FRAGMENTS = ("databaseinfo", "attachment", "select", "test", "get")

ERROR_RESPONSE_SCHEMA = {
    "description": "Response returned from StarRez API",
    "type": "array",
    "nullable": True,
    "items": {
        "description": "StarRez HTTP error message",
        "type": "object",
        "properties": {
            "description": {"description": "Description of error", "type": "string"},
        },
    },
}

ERROR_RESPONSES = {
    "400": "Your request is invalid, or badly formed, and we'll return an error message that tells you why.",
    "403": (
        "Your request is valid, but you do not have permission to select data from the specified table, "
        "or update the specified field."
    ),
    "404": (
        "Your request is valid, but no data was found, or the table you are trying to use does not exist."
    ),
}

BASIC_AUTH_SCHEME_NAME = "Basic"
BASIC_AUTH_SCHEME = {
    "type": "http",
    "description": "Basic authentication scheme",
    "scheme": "Basic",
}


# ── Path templates and parameters ─────────────────────────────────────────────

def rename_table_name_paths(document: OpenApiDocument) -> None:
    """`{tablename}` → `{tableName}` in path keys, keeping path order."""
    document.paths = {
        path.replace("tablename", "tableName"): item for path, item in document.paths.items()
    }


def _format_parameter() -> Parameter:
    return Parameter(name="format", location="path", required=True, schema_={"type": "string"})


def _query_parameter() -> Parameter:
    return Parameter(
        name="q",
        location="query",
        required=True,
        description=STARQL_QUERY_DESCRIPTION,
        schema_={"type": "string", "description": STARQL_QUERY_DESCRIPTION},
    )


def _add_report_format(item: PathItem) -> None:
    for operation in item.operations().values():
        if not operation.find_parameter("format", "path"):
            operation.parameters.append(_format_parameter())


def _add_starql_operations(item: PathItem) -> None:
    post = item.post
    if post is None:
        return
    post.description = STARQL_DESCRIPTION
    post.request_body = RequestBody(
        description=STARQL_QUERY_DESCRIPTION,
        content={"text/plain": {}},
        required=True,
    )

    get = post.model_copy(deep=True)
    get.request_body = None
    get.parameters = [_query_parameter()]
    item.get = get


def add_missing_parameters(document: OpenApiDocument) -> None:
    """Report paths gain a `.{format}` suffix; StarQL query paths gain a body and a GET form."""
    paths: dict[str, PathItem] = {}
    for path, item in document.paths.items():
        if "getreport" in path:
            if not path.endswith(".{format}"):
                path = f"{path}.{{format}}"
            _add_report_format(item)
        elif "query" in path:
            _add_starql_operations(item)
        paths[path] = item
    document.paths = paths


# ── HTTP methods ──────────────────────────────────────────────────────────────

def _is_read_path(path: str) -> bool:
    if "photo" in path and "set" not in path:
        return True
    return any(fragment in path for fragment in READ_PATH_FRAGMENTS)


def correct_http_methods(path: str, item: PathItem) -> None:
    """Move the converter's default POST operation to the method the path implies."""
    post = item.post
    if post is None:
        return

    has_body = any(op.request_body is not None for op in item.operations().values())
    if _is_read_path(path) and not has_body:
        item.get = post
        item.post = None
    elif "delete" in path:
        item.delete = post
        item.post = None
    elif "update" in path and "post" not in path:
        item.patch = post
        item.put = post.model_copy(deep=True)
        item.post = None
    elif "query" in path and item.get is None:
        item.get = post.model_copy(deep=True)


# ── Per-operation parameters and responses ────────────────────────────────────

def _accept_parameter() -> Parameter:
    return Parameter(
        name="Accept",
        location="header",
        required=False,
        description=ACCEPT_DESCRIPTION,
        schema_={"type": "string", "default": "application/json"},
    )


def add_accept_header(operation: PathOperation) -> None:
    if not operation.find_parameter("Accept", "header"):
        operation.parameters.append(_accept_parameter())


def add_format_enum(operation: PathOperation) -> None:
    for parameter in operation.parameters:
        if parameter.name == "format":
            schema = dict(parameter.schema_ or {"type": "string"})
            schema["enum"] = list(FORMAT_VALUES)
            schema["default"] = DEFAULT_FORMAT
            parameter.schema_ = schema


def build_responses(path: str) -> dict[str, dict]:
    """The four documented StarRez response codes."""
    ok: dict = {"description": "Everything went fine."}
    if "query" in path:
        ok["content"] = {
            "application/json": {"schema": {"description": "StarQL response data", "type": "object"}},
        }
    responses = {"200": ok}
    for code, description in ERROR_RESPONSES.items():
        responses[code] = {
            "description": description,
            "content": {"application/json": {"schema": copy.deepcopy(ERROR_RESPONSE_SCHEMA)}},
        }
    return responses


# ── Document level ────────────────────────────────────────────────────────────

def add_basic_auth(document: OpenApiDocument) -> None:
    """Declare the Basic scheme and require it once, however often this runs."""
    document.components.security_schemes.setdefault(BASIC_AUTH_SCHEME_NAME, dict(BASIC_AUTH_SCHEME))
    requirement = {BASIC_AUTH_SCHEME_NAME: []}
    if requirement not in document.security:
        document.security.append(requirement)


def set_servers(document: OpenApiDocument, servers: list[dict]) -> None:
    document.servers = [dict(server) for server in servers]


def correct_document(document: OpenApiDocument, servers: list[dict]) -> OpenApiDocument:
    """Apply every correction to `document` in place and return it."""
    rename_table_name_paths(document)
    add_missing_parameters(document)

    for path, item in document.paths.items():
        correct_http_methods(path, item)
        for operation in item.operations().values():
            if "{format}" not in path:
                add_accept_header(operation)
            add_format_enum(operation)
            operation.responses = build_responses(path)

    add_basic_auth(document)
    set_servers(document, servers)
    logger.info("Corrected %d paths", len(document.paths))
    return document
