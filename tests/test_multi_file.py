"""Tests for per-table modules, the index module, and writing them out."""

from airtable_types_gen.multi_file import generate_index_file, generate_multiple_files, table_file_names
from airtable_types_gen.write_to_file import HEADER, WriteToTypeScriptFile, write_files, write_output


def empty_table(id: str, name: str) -> dict:
    return {"id": id, "name": name, "primaryFieldId": "", "fields": [], "views": []}


class TestTableFileNames:
    def test_kebab_case(self, schema):
        assert table_file_names(schema) == ["users", "projects"]

    def test_duplicates_get_suffix(self):
        metadata = {"tables": [empty_table("tbl1", "Users"), empty_table("tbl2", "users"), empty_table("tbl3", "USERS")]}
        assert table_file_names(metadata) == ["users", "users-2", "users-3"]

    def test_index_is_reserved(self):
        assert table_file_names({"tables": [empty_table("tbl1", "Index")]}) == ["index-2"]

    def test_fallback_to_table_id(self):
        assert table_file_names({"tables": [empty_table("tblAbc", "???")]}) == ["tblabc"]


class TestGenerateMultipleFiles:
    def test_file_set(self, schema):
        files = generate_multiple_files(schema, "zod")
        assert list(files) == ["users.ts", "projects.ts", "index.ts"]

    def test_zod_table_file(self, schema):
        users = generate_multiple_files(schema, "zod", flatten=True)["users.ts"]

        assert users.startswith(HEADER[0])
        assert "import { z } from 'zod';" in users
        assert "export const UsersSchema = z.object({" in users
        assert "ProjectsSchema" not in users
        assert "AirtableTableName" not in users

    def test_typescript_table_file(self, schema):
        users = generate_multiple_files(schema, "typescript")["users.ts"]

        assert "import" not in users
        assert "export interface UsersRecord {" in users

    def test_every_table_is_re_exported(self, schema):
        index = generate_multiple_files(schema, "zod")["index.ts"]

        assert "export * from './users.js';" in index
        assert "export * from './projects.js';" in index
        assert "export type AirtableTableName = 'Users' | 'Projects';" in index


class TestIndexFile:
    def test_zod_imports(self, schema):
        index = generate_index_file(schema, "zod")

        assert "import { UsersSchema, type UsersRecord } from './users.js';" in index
        assert "import { ProjectsSchema, type ProjectsRecord } from './projects.js';" in index
        assert "import { z } from 'zod';" not in index

    def test_zod_flattened_imports_z(self, schema):
        index = generate_index_file(schema, "zod", flatten=True)

        assert "import { z } from 'zod';" in index
        assert "export const UsersCreateSchema = " in index

    def test_typescript_imports(self, schema):
        index = generate_index_file(schema, "typescript")

        assert "import type { UsersRecord } from './users.js';" in index
        assert "export interface AirtableTableTypes {" in index

    def test_imports_before_exports(self, schema):
        index = generate_index_file(schema, "typescript")
        assert index.index("// #region IMPORTS") < index.index("// #region EXPORTS") < index.index("export type AirtableTableName")


class TestWriter:
    def test_text_with_header(self):
        write = WriteToTypeScriptFile(header=True)
        write.line("export type A = string;")

        assert write.text() == "\n".join(HEADER + ["", "export type A = string;"]) + "\n"

    def test_writer_only_collects_lines(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        write = WriteToTypeScriptFile()
        write.line_indented("a: string;")

        assert set(WriteToTypeScriptFile.model_fields) == {"lines", "header", "indent_text"}
        assert write.text() == "    a: string;\n"
        assert list(tmp_path.iterdir()) == []


class TestWriteOutput:
    def test_stdout(self, capsys):
        write_output("export type A = string;\n")
        assert capsys.readouterr().out == "export type A = string;\n"

    def test_creates_parent_folders(self, tmp_path):
        path = tmp_path / "nested" / "deeper" / "types.ts"
        write_output("content\n", path)
        assert path.read_text(encoding="utf-8") == "content\n"

    def test_overwrites(self, tmp_path):
        path = tmp_path / "types.ts"
        path.write_text("old", encoding="utf-8")
        write_output("new\n", path)
        assert path.read_text(encoding="utf-8") == "new\n"


class TestWriteFiles:
    def test_writes_every_file(self, tmp_path, schema):
        files = generate_multiple_files(schema, "typescript")
        paths = write_files(tmp_path / "types", files)

        assert sorted(path.name for path in paths) == ["index.ts", "projects.ts", "users.ts"]
        for name, content in files.items():
            assert (tmp_path / "types" / name).read_text(encoding="utf-8") == content

    def test_logs_to_stderr(self, tmp_path, capsys):
        write_files(tmp_path, {"a.ts": "a\n"})

        captured = capsys.readouterr()
        assert "Generated 1 files" in captured.err
        assert captured.out == ""
