from typing import Any

from pydantic import BaseModel

from . import typescript, zod
from .console import console
from .meta import filter_tables, get_base_meta_data
from .meta_types import BaseMetadata, OutputFormat
from .multi_file import generate_multiple_files


class GenerateOptions(BaseModel):
    base_id: str
    token: str
    flatten: bool = False
    format: OutputFormat = "zod"
    tables: list[str] = []
    separate_files: bool = False
    verbose: bool = False


class GenerateResult(BaseModel):
    content: str = ""
    files: dict[str, str] = {}
    metadata: dict[str, Any]

    @property
    def table_count(self) -> int:
        return len(self.metadata["tables"])


def render(metadata: BaseMetadata, format: OutputFormat = "zod", flatten: bool = False, verbose: bool = False) -> str:
    """Renders a single document for every table in `metadata`."""
    if format == "zod":
        return zod.render_schema(metadata, flatten, verbose)
    return typescript.render_schema(metadata, flatten, verbose)


def render_files(metadata: BaseMetadata, format: OutputFormat = "zod", flatten: bool = False, verbose: bool = False) -> dict[str, str]:
    return generate_multiple_files(metadata, format, flatten, verbose)


def generate(options: GenerateOptions) -> GenerateResult:
    """Fetches the base schema and renders it. Nothing is written here."""

    console.print("[dim][Generator] Starting type generation...[/]")
    metadata = get_base_meta_data(options.base_id, options.token)
    metadata = filter_tables(metadata, options.tables)

    if options.separate_files:
        result = GenerateResult(files=render_files(metadata, options.format, options.flatten, options.verbose), metadata=metadata)
    else:
        result = GenerateResult(content=render(metadata, options.format, options.flatten, options.verbose), metadata=metadata)

    console.print(f"[dim][Generator] Generated types for {result.table_count} tables[/]")
    return result
