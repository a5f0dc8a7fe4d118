from . import typescript, zod
from .helpers import record_type_name, schema_name, table_file_name
from .meta_types import BaseMetadata, OutputFormat, TableMetadata
from .write_to_file import WriteToTypeScriptFile


def table_file_names(metadata: BaseMetadata) -> list[str]:
    """One unique module name per table, in schema order"""
    names: list[str] = []
    for table in metadata["tables"]:
        name = table_file_name(table["name"], fallback=table["id"])
        candidate = name
        suffix = 2
        while candidate in names or candidate == "index":
            candidate = f"{name}-{suffix}"
            suffix += 1
        names.append(candidate)
    return names


def generate_table_file(table: TableMetadata, format: OutputFormat, flatten: bool = False, verbose: bool = False) -> str:
    write = WriteToTypeScriptFile(header=True)
    if format == "zod":
        write.line(zod.ZOD_IMPORT)
        write.line_empty()
        write.extend(zod.render_table(table, flatten, verbose))
    else:
        write.extend(typescript.render_table(table, flatten, verbose))
    return write.text()


def generate_index_file(metadata: BaseMetadata, format: OutputFormat, flatten: bool = False) -> str:
    """Imports what the utility section refers to, re-exports every table module, then the utility section."""

    file_names = table_file_names(metadata)
    write = WriteToTypeScriptFile(header=True)

    write.region("IMPORTS")
    if format == "zod" and flatten:
        write.line(zod.ZOD_IMPORT)
    for table, file_name in zip(metadata["tables"], file_names):
        if format == "zod":
            write.line(f"import {{ {schema_name(table['name'])}, type {record_type_name(table['name'])} }} from './{file_name}.js';")
        else:
            write.line(f"import type {{ {record_type_name(table['name'])} }} from './{file_name}.js';")
    write.endregion()

    write.region("EXPORTS")
    for file_name in file_names:
        write.line(f"export * from './{file_name}.js';")
    write.endregion()

    if format == "zod":
        write.extend(zod.render_utility_types(metadata, flatten))
    else:
        write.extend(typescript.render_utility_types(metadata, flatten))
    return write.text()


def generate_multiple_files(metadata: BaseMetadata, format: OutputFormat, flatten: bool = False, verbose: bool = False) -> dict[str, str]:
    """Returns file name → content, one module per table plus `index.ts`."""

    files: dict[str, str] = {}
    for table, file_name in zip(metadata["tables"], table_file_names(metadata)):
        files[f"{file_name}.ts"] = generate_table_file(table, format, flatten, verbose)
    files["index.ts"] = generate_index_file(metadata, format, flatten)
    return files
