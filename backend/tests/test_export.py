import json
import os
import sys
from unittest.mock import patch

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "scripts")))

import export_documentation  # noqa: E402
from starrez_fakes import converted_document, make_client, make_converter  # noqa: E402


@pytest.fixture
def exporter(fake_starrez):
    with patch("export_documentation.StarRezClient", side_effect=lambda connection: make_client(fake_starrez)), \
         patch("export_documentation.SwaggerConverterClient",
               side_effect=lambda: make_converter(converted_document())):
        yield fake_starrez


def test_export_models(exporter, tmp_path):
    output = tmp_path / "models.json"
    assert export_documentation.main(["--models", "--output", str(output)]) == 0

    models = json.loads(output.read_text(encoding="utf-8"))
    assert list(models) == ["Student", "Booking"]
    assert not any(r.url.path.endswith("/swagger") for r in exporter.requests)


def test_export_documentation(exporter, tmp_path):
    output = tmp_path / "openapi.json"
    assert export_documentation.main(["--dev", "--output", str(output)]) == 0

    document = json.loads(output.read_text(encoding="utf-8"))
    assert list(document["components"]["schemas"]) == ["Booking", "Student"]
    assert exporter.requests[0].url.path == "/StarRezRESTDev/swagger"


def test_export_failure_exit_code(exporter, tmp_path):
    exporter.failures["tablelist.xml"] = 503
    output = tmp_path / "models.json"

    assert export_documentation.main(["--models", "--output", str(output)]) == 1
    assert not output.exists()
