"""Downloadable CSV templates for each import type."""

import csv
import io

from gainai.models import ImportType
from gainai.services.import_types import IMPORT_SPECS


def render_csv(headers: tuple[str, ...], *rows: tuple[str, ...]) -> str:
    """Render rows as CSV with minimal quoting and ``\\n`` line endings.

    Fields containing a comma, quote or line break are wrapped in double
    quotes with embedded quotes doubled.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue()


def build_template(import_type: ImportType) -> tuple[str, str]:
    """Build the template for an import type.

    Returns:
        Tuple of (filename, csv_text): the header line plus one example row
    """
    template = IMPORT_SPECS[import_type].template
    return template.filename, render_csv(template.headers, template.sample_row)
