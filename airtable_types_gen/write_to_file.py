import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

import typer
from pydantic import BaseModel
from rich.markup import escape

from .console import console

HEADER = [
    "// ==========================================",
    "// Auto-generated file. Do not edit directly.",
    "// ==========================================",
]


class WriteToFile(BaseModel):
    """Collects lines of generated code."""

    lines: list[str] = []
    header: bool = False
    indent_text: str = "    "

    def header_lines(self) -> list[str]:
        return []

    def text(self) -> str:
        lines = self.header_lines() + [""] if self.header else []
        return "\n".join(lines + self.lines) + "\n"

    def line(self, text: str):
        self.lines.append(text)

    def line_empty(self):
        self.lines.append("")

    def line_indented(self, text: str, indent: int = 1):
        self.lines.append(self.indent_text * indent + text)

    def extend(self, text: str):
        """Appends already-rendered code, one line at a time"""
        self.lines.extend(text.rstrip("\n").split("\n"))


class WriteToTypeScriptFile(WriteToFile):
    def header_lines(self) -> list[str]:
        return list(HEADER)

    def region(self, text: str):
        self.lines.append(f"// #region {text}")

    def endregion(self):
        self.lines.append("// #endregion")
        self.line_empty()

    def docstring(self, text: str, indent: int = 0):
        if indent:
            self.line_indented(f"/** {text} */", indent=indent)
        else:
            self.line(f"/** {text} */")

    def block_comment(self, *rows: str):
        self.line("/**")
        for row in rows:
            self.line(f" * {row}")
        self.line(" */")

    def property_row(self, key: str, type: str, optional: bool = False, readonly: bool = False, comment: str | None = None):
        if comment:
            self.docstring(comment, indent=1)
        self.line_indented(f"{'readonly ' if readonly else ''}{key}{'?' if optional else ''}: {type};")

    def object_row(self, key: str, value: str, comment: str | None = None):
        if comment:
            self.docstring(comment, indent=1)
        self.line_indented(f"{key}: {value},")

    def literal(self, name: str, items: list[str]):
        self.line(f"export type {name} = {' | '.join(items) if items else 'never'};")

    def str_list(self, name: str, items: list[str]):
        self.line(f"export const {name} = [{', '.join(items)}] as const;")


def write_output(content: str, path: Optional[Path] = None):
    """Writes to `path`, replacing whatever is there, or to stdout when no path is given."""
    if path is None:
        typer.echo(content, nl=False)
        return
    os.makedirs(path.parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def write_files(folder: Path, files: dict[str, str]) -> list[Path]:
    """Writes every file into `folder` in parallel, and waits for all of them."""

    folder.mkdir(parents=True, exist_ok=True)

    def write_one(item: tuple[str, str]) -> Path:
        file_name, content = item
        path = folder / file_name
        write_output(content, path)
        console.print(f"[dim][MultiFile] Generated: {escape(path.as_posix())}[/]")
        return path

    with ThreadPoolExecutor() as executor:
        paths = list(executor.map(write_one, files.items()))

    console.print(f"[dim][MultiFile] Generated {len(paths)} files in {escape(folder.as_posix())}[/]")
    return paths
