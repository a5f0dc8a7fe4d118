from enum import Enum
from pathlib import Path
from typing import Annotated, NoReturn, Optional

from dotenv import load_dotenv
from rich.markup import escape
from typer import Argument, Exit, Option, Typer, echo

from airtable_types_gen import __version__
from airtable_types_gen.console import console
from airtable_types_gen.csv import gen_csv
from airtable_types_gen.generator import GenerateOptions
from airtable_types_gen.generator import generate as generate_types
from airtable_types_gen.meta import (
    ConfigurationError,
    SchemaFetchError,
    filter_tables,
    gen_meta,
    get_base_id,
    get_base_meta_data,
    get_token,
)
from airtable_types_gen.meta_types import BaseMetadata
from airtable_types_gen.write_to_file import write_files, write_output

app = Typer(help="Generate TypeScript types or Zod schemas from an Airtable base.")


class Format(str, Enum):
    zod = "zod"
    typescript = "typescript"


def fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/] {escape(message)}")
    raise Exit(code=1)


def split_tables(tables: Optional[str]) -> list[str]:
    if not tables:
        return []
    return [table.strip() for table in tables.split(",") if table.strip()]


def fetch_metadata(base_id: Optional[str]) -> BaseMetadata:
    try:
        _base_id = get_base_id(base_id)
        token = get_token()
    except ConfigurationError as e:
        fail(str(e))
    try:
        return get_base_meta_data(_base_id, token)
    except SchemaFetchError as e:
        fail(f"Error fetching schema: {e}")


def version_callback(value: bool):
    if value:
        echo(__version__)
        raise Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool], Option("--version", "-v", callback=version_callback, is_eager=True, help="Show version information.")
    ] = None,
):
    """Generate TypeScript types or Zod schemas from an Airtable base."""
    load_dotenv()


@app.command()
def generate(
    base_id: Annotated[Optional[str], Option("--base-id", "-b", help="Airtable base ID. Defaults to AIRTABLE_BASE_ID.")] = None,
    output: Annotated[Optional[Path], Option("--output", "-o", help="Output file, or output folder with --separate-files. Defaults to stdout.")] = None,
    flatten: Annotated[bool, Option("--flatten", "-f", help="Hoist fields next to `record_id` instead of the native {id, fields, createdTime} shape.")] = False,
    format: Annotated[Format, Option("--format", help="Emit Zod schemas with inferred types, or plain TypeScript interfaces.")] = Format.zod,
    tables: Annotated[Optional[str], Option("--tables", "-t", help="Comma-separated list of table names to include.")] = None,
    separate_files: Annotated[bool, Option("--separate-files", "-s", help="Write one file per table plus an index file.")] = False,
    verbose: Annotated[bool, Option("--verbose", help="Show details about fields with unknown types.")] = False,
):
    """Generate types from the schema of an Airtable base"""
    try:
        options = GenerateOptions(
            base_id=get_base_id(base_id),
            token=get_token(),
            flatten=flatten,
            format=format.value,
            tables=split_tables(tables),
            separate_files=separate_files,
            verbose=verbose,
        )
    except ConfigurationError as e:
        fail(str(e))

    folder: Optional[Path] = None
    if separate_files:
        if output is None:
            fail("--separate-files requires --output directory to be specified.")
        folder = output

    kind = "Zod schemas" if format == Format.zod else "TypeScript types"
    try:
        result = generate_types(options)
        if folder is not None:
            write_files(folder, result.files)
            console.print(f"[green]{kind} generated successfully[/]")
            console.print(f"Generated {len(result.files)} files for {result.table_count} tables:")
        else:
            write_output(result.content, output)
            if output is not None:
                console.print(f"[green]{kind} generated successfully and saved to {escape(output.as_posix())}[/]")
            console.print(f"Generated {kind} for {result.table_count} tables:")
    except SchemaFetchError as e:
        fail(f"Error generating types: {e}")
    except OSError as e:
        fail(f"Error writing output: {e}")

    for table in result.metadata["tables"]:
        console.print(f"   - {escape(table['name'])} ({len(table['fields'])} fields)")


@app.command()
def meta(
    folder: Annotated[Path, Argument(help="Path to the output folder")],
    base_id: Annotated[Optional[str], Option("--base-id", "-b", help="Airtable base ID. Defaults to AIRTABLE_BASE_ID.")] = None,
):
    """Fetch Airtable metadata into a json file."""
    metadata = fetch_metadata(base_id)
    folder.mkdir(parents=True, exist_ok=True)
    gen_meta(metadata=metadata, folder=folder)


@app.command()
def csv(
    folder: Annotated[Path, Argument(help="Path to the output folder")],
    base_id: Annotated[Optional[str], Option("--base-id", "-b", help="Airtable base ID. Defaults to AIRTABLE_BASE_ID.")] = None,
    flatten: Annotated[bool, Option("--flatten", "-f", help="Report property names of the flattened shape.")] = False,
    tables: Annotated[Optional[str], Option("--tables", "-t", help="Comma-separated list of table names to include.")] = None,
):
    """Export a field-by-field report of the generated types to CSV."""
    metadata = filter_tables(fetch_metadata(base_id), split_tables(tables))
    folder.mkdir(parents=True, exist_ok=True)
    gen_csv(metadata=metadata, folder=folder, flatten=flatten)


if __name__ == "__main__":
    app()
