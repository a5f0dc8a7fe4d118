import json
import os
from pathlib import Path

import httpx
from rich.markup import escape

from .console import console
from .meta_types import BaseMetadata

META_URL = "https://api.airtable.com/v0/meta/bases/{base_id}/tables"


class ConfigurationError(Exception):
    """A required identifier or credential is missing."""


class SchemaFetchError(Exception):
    """The Airtable metadata endpoint could not be read."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def get_base_meta_data(base_id: str, token: str) -> BaseMetadata:
    """Fetch the schema of a base. Tables and fields keep the order Airtable returns."""

    console.print(f"[dim][Schema] Fetching base schema for {escape(base_id)}[/]")
    url = META_URL.format(base_id=base_id)
    try:
        response = httpx.get(url, headers={"Authorization": f"Bearer {token}", "Content-Type": "application/json"})
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise SchemaFetchError(f"HTTP error! status: {e.response.status_code}", status_code=e.response.status_code) from e
    except httpx.HTTPError as e:
        raise SchemaFetchError(f"Request failed: {e}") from e

    try:
        data: BaseMetadata = response.json()
    except ValueError as e:
        raise SchemaFetchError(f"Invalid schema response: {e}") from e
    if not isinstance(data, dict) or not isinstance(data.get("tables"), list):
        raise SchemaFetchError("Invalid schema response: missing tables")

    console.print(f"[dim][Schema] Successfully fetched schema for {len(data['tables'])} tables[/]")
    return data


def get_base_id(base_id: str | None = None) -> str:
    """Get the Airtable Base ID from the argument or the environment."""
    base_id = base_id or os.getenv("AIRTABLE_BASE_ID")
    if not base_id:
        raise ConfigurationError("Base ID is required. Provide it via --base-id or AIRTABLE_BASE_ID environment variable.")
    return base_id


def get_token() -> str:
    """Get the Airtable personal access token from the environment."""
    token = os.getenv("AIRTABLE_PERSONAL_TOKEN") or os.getenv("AIRTABLE_API_KEY")
    if not token:
        raise ConfigurationError("Airtable personal token is required. Set AIRTABLE_PERSONAL_TOKEN environment variable.")
    return token


def filter_tables(metadata: BaseMetadata, tables: list[str] | None) -> BaseMetadata:
    """Keep only the named tables (exact, case-sensitive), in schema order."""
    if not tables:
        return metadata
    console.print(f"[dim][Generator] Filtering to {len(tables)} specified tables[/]")
    return {"tables": [table for table in metadata["tables"] if table["name"] in tables]}


def gen_meta(metadata: BaseMetadata, folder: Path) -> Path:
    """Write Airtable metadata into a json file."""

    p = folder / "meta.json"
    with open(p, "w") as f:
        f.write(json.dumps(metadata, indent=4))
    console.print(f"Base metadata written to {escape(p.as_posix())}")
    return p
