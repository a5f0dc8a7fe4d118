from typing import Optional

from pydantic import BaseModel

from .helpers import (
    field_comment,
    is_computed_field,
    is_optional_field,
    pascal_case,
    property_key,
    record_type_name,
    resolve_property_names,
    schema_name,
    single_quoted,
    table_description,
)
from .meta_types import BaseMetadata, FieldMetadata, TableMetadata
from .shapes import Shape, map_field
from .typescript import write_flatten_helpers, write_record_operation_types
from .write_to_file import WriteToTypeScriptFile

ZOD_IMPORT = "import { z } from 'zod';"

PHONE_PATTERN = r"/^[\+]?[1-9][\d]{0,15}$/"
DATE_PATTERN = r"/^\d{4}-\d{2}-\d{2}$/"


class ZodMappingResult(BaseModel):
    schema_source: str
    readonly: bool
    description: Optional[str] = None


def message_argument(shape: Shape) -> str:
    return single_quoted(shape.message) if shape.message else ""


def zod_schema(shape: Shape) -> str:
    """Renders a shape as Zod source code."""

    match shape.kind:
        case "string":
            source = "z.string()"
            match shape.format:
                case "email" | "url" | "datetime":
                    source += f".{shape.format}({message_argument(shape)})"
                case "phone":
                    source += f".regex({PHONE_PATTERN}, {message_argument(shape) or single_quoted('Invalid format')})"
                case "date":
                    source += f".regex({DATE_PATTERN}, {message_argument(shape) or single_quoted('Invalid format')})"
            return source
        case "number":
            source = "z.number()"
            if shape.integer:
                source += ".int()"
            if shape.positive:
                source += ".positive()"
            if shape.minimum is not None:
                source += f".min({shape.minimum})"
            return source
        case "boolean":
            return "z.boolean()"
        case "enum":
            if not shape.values:
                return "z.string()"
            return f"z.enum([{', '.join(single_quoted(value) for value in shape.values)}])"
        case "array":
            if shape.items is None:
                raise ValueError("Array shape without an item shape")
            return f"z.array({zod_schema(shape.items)})"
        case "object":
            properties = ", ".join(f"{property_key(name)}: {zod_schema(value)}" for name, value in shape.properties)
            return f"z.object({{ {properties} }})"
        case "union":
            return f"z.union([{', '.join(zod_schema(member) for member in shape.members)}])"


def map_zod(field: FieldMetadata, warn: bool = True, verbose: bool = False) -> ZodMappingResult:
    mapping = map_field(field, warn=warn, verbose=verbose)
    return ZodMappingResult(schema_source=zod_schema(mapping.shape), readonly=mapping.readonly, description=mapping.description)


def with_modifiers(field: FieldMetadata, mapping: ZodMappingResult) -> str:
    """The full validator of a field, read-only and optional modifiers included."""
    source = mapping.schema_source
    if mapping.readonly:
        source += ".readonly()"
    if is_optional_field(field):
        source += ".optional()"
    return source


def write_fields(write: WriteToTypeScriptFile, fields: list[FieldMetadata], names: list[str], verbose: bool = False):
    for index, (field, name) in enumerate(zip(fields, names)):
        if index > 0:
            write.line_empty()
        mapping = map_zod(field, verbose=verbose)
        write.object_row(property_key(name), with_modifiers(field, mapping), comment=field_comment(field, mapping.description))


def render_table(table: TableMetadata, flatten: bool = False, verbose: bool = False) -> str:
    """Renders the Zod schema and the inferred type for one table."""

    name = schema_name(table["name"])
    fields = table["fields"]
    names = resolve_property_names(fields, flatten)
    description = table_description(table)

    write = WriteToTypeScriptFile()
    write.block_comment(f'Zod schema for table "{table["name"]}"', f"@description {description}")
    if flatten:
        write.line(f"export const {name} = z.object({{")
        write.object_row("record_id", "z.string()", comment="Unique Airtable record ID")
        if fields:
            write.line_empty()
        write_fields(write, fields, names, verbose)
        write.line("});")
    else:
        write.line(f"export const {name}Fields = z.object({{")
        write_fields(write, fields, names, verbose)
        write.line("});")
        write.line_empty()
        write.line(f"export const {name} = z.object({{")
        write.object_row("id", "z.string()", comment="Unique Airtable record ID")
        write.object_row("fields", f"{name}Fields", comment="Record fields")
        write.object_row("createdTime", "z.string().datetime()", comment="Record creation time")
        write.line("});")

    write.line_empty()
    write.block_comment(f"Inferred TypeScript type for {table['name']}")
    write.line(f"export type {record_type_name(table['name'])} = z.infer<typeof {name}>;")
    return write.text()


def readonly_property_names(table: TableMetadata, flatten: bool) -> list[str]:
    names = resolve_property_names(table["fields"], flatten)
    return [name for field, name in zip(table["fields"], names) if is_computed_field(field)]


def render_utility_types(metadata: BaseMetadata, flatten: bool = False) -> str:
    """Renders read-only field lists, create/update schemas and the table-name accessors."""

    tables = metadata["tables"]
    write = WriteToTypeScriptFile()

    write.region("READONLY FIELDS")
    for table in tables:
        write.docstring(f"Computed fields of `{table['name']}`, these can't be written")
        write.str_list(f"{pascal_case(table['name'])}ReadonlyFields", [single_quoted(name) for name in readonly_property_names(table, flatten)])
    write.endregion()

    if flatten:
        write.region("CREATE / UPDATE SCHEMAS")
        for table in tables:
            base = pascal_case(table["name"])
            omitted = ["record_id"] + readonly_property_names(table, flatten)
            mask = ", ".join(f"{property_key(name)}: true" for name in omitted)
            write.docstring(f"Schema for creating `{table['name']}` records (no record ID, no computed fields)")
            write.line(f"export const {base}CreateSchema = {schema_name(table['name'])}.omit({{ {mask} }});")
            write.docstring(f"Schema for updating `{table['name']}` records (every field optional)")
            write.line(f"export const {base}UpdateSchema = {schema_name(table['name'])}.partial();")
            write.line(f"export type {base}Create = z.infer<typeof {base}CreateSchema>;")
            write.line(f"export type {base}Update = z.infer<typeof {base}UpdateSchema>;")
            write.line_empty()
        write.endregion()

    write.block_comment("Union type of all available table names")
    write.literal("AirtableTableName", [single_quoted(table["name"]) for table in tables])
    write.line_empty()

    write.block_comment("Zod schema of every table, by table name")
    write.line("export const airtableTableSchemas = {")
    for table in tables:
        write.object_row(single_quoted(table["name"]), schema_name(table["name"]))
    write.line("} as const;")
    write.line_empty()

    write.block_comment("Mapping of table names to their schemas and types")
    write.line("export interface AirtableTableSchemas {")
    for table in tables:
        write.property_row(single_quoted(table["name"]), f"{{ schema: typeof {schema_name(table['name'])}; type: {record_type_name(table['name'])} }}")
    write.line("}")
    write.line_empty()

    write.block_comment("Generic type to get the Zod schema for a table")
    write.line("export type GetTableSchema<T extends AirtableTableName> = AirtableTableSchemas[T]['schema'];")
    write.line_empty()
    write.block_comment("Generic type to get the TypeScript type for a table")
    write.line("export type GetTableType<T extends AirtableTableName> = AirtableTableSchemas[T]['type'];")
    write.line_empty()

    write.block_comment("Validates data against the schema of the given table")
    write.line("export const validateRecord = <T extends AirtableTableName>(tableName: T, data: unknown): GetTableType<T> => {")
    write.line_indented("return airtableTableSchemas[tableName].parse(data) as GetTableType<T>;")
    write.line("};")
    write.line_empty()

    write_record_operation_types(write, "GetTableType", flatten)

    if flatten:
        write_flatten_helpers(write)

    return write.text()


def render_schema(metadata: BaseMetadata, flatten: bool = False, verbose: bool = False) -> str:
    """Renders the whole document: header, Zod import, one schema per table, utilities."""

    write = WriteToTypeScriptFile(header=True)
    write.line(ZOD_IMPORT)
    write.line_empty()
    for table in metadata["tables"]:
        write.extend(render_table(table, flatten, verbose))
        write.line_empty()
    write.extend(render_utility_types(metadata, flatten))
    return write.text()
