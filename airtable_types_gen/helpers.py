import re

from rich.markup import escape
from rich.table import Table

from .console import console
from .meta_types import FieldMetadata, TableMetadata

COMPUTED_FIELD_TYPES: frozenset[str] = frozenset(
    {
        "formula",
        "rollup",
        "count",
        "lookup",
        "createdTime",
        "lastModifiedTime",
        "createdBy",
        "lastModifiedBy",
        "autoNumber",
        "aiText",
    }
)
"""Field types whose values are maintained by Airtable and cannot be written."""

ALWAYS_PRESENT_COMPUTED_TYPES: frozenset[str] = frozenset({"autoNumber", "createdTime", "lastModifiedTime"})
ALWAYS_PRESENT_FIELD_NAMES: tuple[str, ...] = ("airtable_id", "id")

RESERVED_FLAT_ID = "record_id"

_INVALID_KEY_CHARACTERS = re.compile(r"[^a-zA-Z0-9_$]")


# region CLASSIFIER
def is_computed_field(field: FieldMetadata) -> bool:
    return field["type"] in COMPUTED_FIELD_TYPES


def is_always_present(field: FieldMetadata) -> bool:
    """Computed fields that Airtable fills in for every record."""
    if field["type"] in ALWAYS_PRESENT_COMPUTED_TYPES:
        return True

    name = field["name"].lower()
    return any(name == candidate or candidate in name for candidate in ALWAYS_PRESENT_FIELD_NAMES)


def is_optional_field(field: FieldMetadata) -> bool:
    return is_computed_field(field) and not is_always_present(field)


def enrich_field(field: FieldMetadata) -> FieldMetadata:
    """Returns a copy of the field with `isComputed` and `isReadonly` set."""
    is_computed = is_computed_field(field)
    return {**field, "isComputed": is_computed, "isReadonly": is_computed}


# endregion


# region NAMES
def pascal_case(text: str) -> str:
    """Formats a table name as PascalCase, dropping anything that isn't a letter, digit, space, `-` or `_`"""

    text = re.sub(r"[^a-zA-Z0-9\s\-_]", "", text)
    text = re.sub(r"[\s\-]+", "_", text)
    words = [word[:1].upper() + word[1:].lower() for word in text.split("_")]
    name = "".join(words)
    if name and name[0].isdigit():
        name = f"Table{name}"
    return name


def record_type_name(table_name: str) -> str:
    return f"{pascal_case(table_name)}Record"


def schema_name(table_name: str) -> str:
    return f"{pascal_case(table_name)}Schema"


def table_file_name(table_name: str, fallback: str = "table") -> str:
    """Formats a table name as a kebab-case file name (without extension)"""

    text = table_name.lower()
    text = re.sub(r"[^a-z0-9\s\-_]", "", text)
    text = re.sub(r"[\s\-_]+", "-", text)
    text = text.strip("-")
    return text or fallback.lower()


def resolve_property_names(fields: list[FieldMetadata], flatten: bool) -> list[str]:
    """Gives every field a unique property name, first-seen wins.

    Native blocks only hold fields, so nothing is reserved there. Flattened blocks
    share the object with `record_id`, and a field literally called `id` is
    renamed since it would read like the record ID.
    """

    used: set[str] = {RESERVED_FLAT_ID} if flatten else set()
    names: list[str] = []
    for field in fields:
        name = field["name"]
        if flatten:
            if name == "id":
                if field["type"] == "autoNumber":
                    name = "auto_id"
                elif field["type"] == "number":
                    name = "field_id"
                else:
                    name = f"id_{field['type']}"
            elif name in used:
                name = f"{name}_{field['type']}"
        elif name in used:
            if field["type"] == "autoNumber":
                name = "auto_id"
            elif field["type"] == "number" and name == "id":
                name = "record_id"
            else:
                name = f"{name}_{field['type']}"

        candidate = name
        suffix = 2
        while candidate in used:
            candidate = f"{name}_{suffix}"
            suffix += 1

        used.add(candidate)
        names.append(candidate)
    return names


def property_key(name: str) -> str:
    """Bracket-quotes property names that aren't plain identifiers"""
    if _INVALID_KEY_CHARACTERS.search(name):
        escaped = name.replace("\\", "\\\\").replace('"', '\\"')
        return f'["{escaped}"]'
    return name


def single_quoted(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def double_quoted(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def clean_description(text: str) -> str:
    """Collapses real and escaped line breaks to spaces so the text fits a one-line doc comment"""
    for token in ("\\r\\n", "\\n", "\\r", "\r\n", "\n", "\r"):
        text = text.replace(token, " ")
    return text.replace("*/", "*\\/")


def field_comment(field: FieldMetadata, description: str | None) -> str | None:
    descriptions = []
    if field.get("description"):
        descriptions.append(clean_description(field["description"]))  # type: ignore
    if description:
        descriptions.append(clean_description(description))
    if not descriptions:
        return None
    return " - ".join(descriptions)


def table_description(table: TableMetadata) -> str:
    if table.get("description"):
        return clean_description(table["description"])  # type: ignore
    return f"Table {table['name']} from Airtable"


# endregion


def is_valid_field(field: FieldMetadata) -> bool:
    """Check if the field is `valid` according to Airtable."""
    options = field.get("options") or {}
    if "isValid" in options:
        return bool(options["isValid"])
    return True


def warn_unhandled_airtable_type(field: FieldMetadata, verbose: bool = False):
    console.print(
        f"[yellow]Unknown field type: {escape(str(field['type']))}.[/]",
        f"Field {escape(field['name'])} ({escape(field['id'])}) is typed as string.",
        "Use --verbose for more details" if not verbose else "",
    )
    if verbose:
        table = Table()
        table.add_column("Field")
        table.add_column("Value")
        table.add_row("ID", escape(str(field["id"])))
        table.add_row("Name", escape(str(field["name"])))
        table.add_row("Type", escape(str(field["type"])))
        is_valid = is_valid_field(field)
        color = "green" if is_valid else "red"
        table.add_row("Is Valid", f"[{color}]{is_valid}[/{color}]")
        console.print(table)
