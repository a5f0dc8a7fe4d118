from pathlib import Path

import pandas as pd
from rich.markup import escape

from .console import console
from .helpers import is_computed_field, is_optional_field, resolve_property_names
from .meta_types import BaseMetadata
from .typescript import map_typescript
from .zod import map_zod, with_modifiers

COLUMNS = [
    "Table ID",
    "Table Name",
    "Field ID",
    "Field Name",
    "Property Name",
    "Airtable Type",
    "Computed",
    "Optional",
    "TypeScript Type",
    "Zod Schema",
]


def field_rows(metadata: BaseMetadata, flatten: bool = False) -> pd.DataFrame:
    rows: list[dict] = []
    for table in metadata["tables"]:
        names = resolve_property_names(table["fields"], flatten)
        for field, name in zip(table["fields"], names):
            rows.append(
                {
                    "Table ID": table["id"],
                    "Table Name": table["name"],
                    "Field ID": field["id"],
                    "Field Name": field["name"],
                    "Property Name": name,
                    "Airtable Type": field["type"],
                    "Computed": is_computed_field(field),
                    "Optional": is_optional_field(field),
                    "TypeScript Type": map_typescript(field, warn=False).type,
                    "Zod Schema": with_modifiers(field, map_zod(field, warn=False)),
                }
            )
    return pd.DataFrame(rows, columns=COLUMNS)


def gen_csv(metadata: BaseMetadata, folder: Path, flatten: bool = False) -> Path:
    """Export a field-by-field report of the generated types to CSV."""

    fields_output_path = folder / "fields.csv"
    field_rows(metadata, flatten).to_csv(fields_output_path, index=False)
    console.print(f"Fields CSV exported to {escape(fields_output_path.as_posix())}")
    return fields_output_path
