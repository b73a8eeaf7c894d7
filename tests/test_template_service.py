"""Tests for CSV template rendering."""

import pytest

from gainai.models import ImportType
from gainai.services.import_types import IMPORT_SPECS
from gainai.services.template_service import build_template, render_csv


def test_render_csv_quotes_only_when_needed() -> None:
    text = render_csv(("name", "notes"), ("Acme", 'Say "hi", then\nleave'))

    assert text == 'name,notes\nAcme,"Say ""hi"", then\nleave"\n'


def test_location_template_quotes_address() -> None:
    filename, text = build_template(ImportType.LOCATION)

    assert filename == "location_import_template.csv"
    header, row = text.splitlines()
    assert header == "client_id,name,address,phone,website_url,primary_category,timezone,latitude,longitude"
    assert '"123 High Street, London, SW1A 1AA"' in row


@pytest.mark.parametrize("import_type", list(ImportType))
def test_template_covers_every_column(import_type: ImportType) -> None:
    spec = IMPORT_SPECS[import_type]
    _, text = build_template(import_type)

    headers = text.splitlines()[0].split(",")

    assert set(headers) == spec.known_columns
    assert headers[: len(spec.required)] == list(spec.required)
    assert text.endswith("\n")
