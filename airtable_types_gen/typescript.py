from typing import Optional

from pydantic import BaseModel

from .helpers import (
    double_quoted,
    field_comment,
    is_optional_field,
    property_key,
    record_type_name,
    resolve_property_names,
    single_quoted,
    table_description,
)
from .meta_types import BaseMetadata, FieldMetadata, TableMetadata
from .shapes import Shape, map_field
from .write_to_file import WriteToTypeScriptFile

RUNTIME_MODULE = "airtable-types-gen/runtime"


class TypeMappingResult(BaseModel):
    type: str
    readonly: bool
    strict_type: str
    description: Optional[str] = None


def typescript_type(shape: Shape) -> str:
    """Renders a shape as a TypeScript type expression."""

    match shape.kind:
        case "string" | "number" | "boolean":
            return shape.kind
        case "enum":
            return " | ".join(double_quoted(value) for value in shape.values) or "string"
        case "array":
            if shape.items is None:
                raise ValueError("Array shape without an item shape")
            item = typescript_type(shape.items)
            return f"{item}[]" if shape.items.is_simple() else f"Array<{item}>"
        case "object":
            properties = "; ".join(f"{property_key(name)}: {typescript_type(value)}" for name, value in shape.properties)
            return f"{{ {properties} }}"
        case "union":
            return " | ".join(typescript_type(member) for member in shape.members)


def map_typescript(field: FieldMetadata, warn: bool = True, verbose: bool = False) -> TypeMappingResult:
    mapping = map_field(field, warn=warn, verbose=verbose)
    type = typescript_type(mapping.shape)
    return TypeMappingResult(
        type=type,
        readonly=mapping.readonly,
        strict_type=mapping.shape.alias or type,
        description=mapping.description,
    )


def write_fields(write: WriteToTypeScriptFile, fields: list[FieldMetadata], names: list[str], verbose: bool = False):
    for field, name in zip(fields, names):
        mapping = map_typescript(field, verbose=verbose)
        write.property_row(
            property_key(name),
            mapping.type,
            optional=is_optional_field(field),
            readonly=mapping.readonly,
            comment=field_comment(field, mapping.description),
        )


def render_table(table: TableMetadata, flatten: bool = False, verbose: bool = False) -> str:
    """Renders the interface(s) for one table."""

    name = record_type_name(table["name"])
    fields = table["fields"]
    names = resolve_property_names(fields, flatten)
    description = table_description(table)

    write = WriteToTypeScriptFile()
    if flatten:
        write.block_comment(f'Interface generated for table "{table["name"]}"', f"@description {description}")
        write.line(f"export interface {name} {{")
        write.property_row("record_id", "string", comment="Unique Airtable record ID")
        write_fields(write, fields, names, verbose)
        write.line("}")
    else:
        write.block_comment(f'Fields of table "{table["name"]}"')
        write.line(f"export interface {name}Fields {{")
        write_fields(write, fields, names, verbose)
        write.line("}")
        write.line_empty()
        write.block_comment(f'Interface generated for table "{table["name"]}"', f"@description {description}")
        write.line(f"export interface {name} {{")
        write.property_row("id", "string", comment="Unique Airtable record ID")
        write.property_row("fields", f"{name}Fields", comment="Record fields")
        write.property_row("createdTime", "string", comment="Record creation time")
        write.line("}")
    return write.text()


def render_utility_types(metadata: BaseMetadata, flatten: bool = False) -> str:
    """Renders the types shared by all tables: name union, name → record mapping, accessors."""

    tables = metadata["tables"]
    write = WriteToTypeScriptFile()

    write.block_comment("Union type of all available table names")
    write.literal("AirtableTableName", [single_quoted(table["name"]) for table in tables])
    write.line_empty()

    write.block_comment("Mapping of table names to their record types")
    write.line("export interface AirtableTableTypes {")
    for table in tables:
        write.property_row(single_quoted(table["name"]), record_type_name(table["name"]))
    write.line("}")
    write.line_empty()

    write.block_comment("Generic type to get the record type for a table")
    write.line("export type GetTableRecord<T extends AirtableTableName> = AirtableTableTypes[T];")
    write.line_empty()

    write.block_comment("Airtable select options for queries")
    write.line("export interface AirtableSelectOptions {")
    write.property_row("view", "string", optional=True)
    write.property_row("fields", "string[]", optional=True)
    write.property_row("filterByFormula", "string", optional=True)
    write.property_row("maxRecords", "number", optional=True)
    write.property_row("pageSize", "number", optional=True)
    write.property_row("sort", "Array<{ field: string; direction?: 'asc' | 'desc' }>", optional=True)
    write.property_row("cellFormat", "'json' | 'string'", optional=True)
    write.property_row("timeZone", "string", optional=True)
    write.property_row("userLocale", "string", optional=True)
    write.line("}")
    write.line_empty()

    write_record_operation_types(write, "GetTableRecord", flatten)

    if flatten:
        write_flatten_helpers(write)

    return write.text()


def write_record_operation_types(write: WriteToTypeScriptFile, record_type: str, flatten: bool):
    """Create/Update/Read shapes. Create forbids the record ID, Update requires it."""

    record = f"{record_type}<T>"
    if flatten:
        create = f"Partial<Omit<{record}, 'record_id'>> & {{ record_id?: never }}"
        update = f"Partial<Omit<{record}, 'record_id'>> & {{ record_id: string }}"
    else:
        create = f"{{ id?: never; fields: Partial<{record}['fields']> }}"
        update = f"{{ id: string; fields: Partial<{record}['fields']> }}"

    write.block_comment("Type for creating new records (all fields optional, record ID forbidden)")
    write.line(f"export type CreateRecord<T extends AirtableTableName> = {create};")
    write.line_empty()
    write.block_comment("Type for updating existing records (partial, record ID required)")
    write.line(f"export type UpdateRecord<T extends AirtableTableName> = {update};")
    write.line_empty()
    write.block_comment("Type for reading records (all fields)")
    write.line(f"export type ReadRecord<T extends AirtableTableName> = {record};")


def write_flatten_helpers(write: WriteToTypeScriptFile):
    write.line_empty()
    write.block_comment("Flattened record - fields hoisted next to the record ID")
    write.line("export interface FlattenedRecord {")
    write.property_row("record_id", "string")
    write.property_row("[key: string]", "unknown")
    write.line("}")
    write.line_empty()
    write.block_comment("Flattens an Airtable record by extracting fields and adding the record ID")
    write.line(f"export {{ flattenRecord }} from '{RUNTIME_MODULE}';")


def render_schema(metadata: BaseMetadata, flatten: bool = False, verbose: bool = False) -> str:
    """Renders the whole document: header, one block per table, utility types."""

    write = WriteToTypeScriptFile(header=True)
    for table in metadata["tables"]:
        write.extend(render_table(table, flatten, verbose))
        write.line_empty()
    write.extend(render_utility_types(metadata, flatten))
    return write.text()
