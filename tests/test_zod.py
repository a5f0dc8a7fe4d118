"""Tests for the Zod schema renderer."""

from airtable_types_gen.write_to_file import HEADER
from airtable_types_gen.zod import render_schema, render_table, render_utility_types


class TestRenderTableFlattened:
    def test_record_id_is_required(self, users_table):
        result = render_table(users_table, flatten=True)

        assert "export const UsersSchema = z.object({" in result
        assert "    record_id: z.string()," in result
        assert "record_id: z.string().optional()" not in result

    def test_field_validators(self, users_table):
        result = render_table(users_table, flatten=True)

        assert "    Name: z.string()," in result
        assert "    Email: z.string().email('Invalid email format')," in result
        assert "    Age: z.number()," in result
        assert "    Active: z.boolean()," in result

    def test_select_enum(self, users_table):
        assert "    Role: z.enum(['Admin', 'User', 'Guest'])," in render_table(users_table, flatten=True)

    def test_readonly_and_optional(self, users_table):
        result = render_table(users_table, flatten=True)

        assert "    Created: z.string().datetime('Invalid ISO datetime format').readonly()," in result
        assert '    ["Auto ID"]: z.number().int().positive().readonly(),' in result
        assert "    Total: z.number().readonly().optional()," in result
        assert '    ["AI Summary"]: z.object({' in result
        assert "}).readonly().optional()," in result

    def test_inferred_type(self, users_table):
        result = render_table(users_table, flatten=True)
        assert "export type UsersRecord = z.infer<typeof UsersSchema>;" in result

    def test_property_name_conflict(self, id_collision_table):
        result = render_table(id_collision_table, flatten=True)

        assert "    auto_id: z.number().int().positive().readonly()," in result
        assert "    field_id: z.number()," in result
        assert "    record_id: z.string()," in result

    def test_no_import_in_table_block(self, users_table):
        assert "import { z }" not in render_table(users_table, flatten=True)


class TestRenderTableNative:
    def test_nested_structure(self, users_table):
        result = render_table(users_table, flatten=False)

        assert "export const UsersSchemaFields = z.object({" in result
        assert "export const UsersSchema = z.object({" in result
        assert "    id: z.string()," in result
        assert "    fields: UsersSchemaFields," in result
        assert "    createdTime: z.string().datetime()," in result
        assert "record_id" not in result

    def test_idempotent(self, users_table):
        assert render_table(users_table) == render_table(users_table)


class TestUtilityTypes:
    def test_readonly_fields(self, schema):
        result = render_utility_types(schema)

        assert "export const UsersReadonlyFields = ['Created', 'Auto ID', 'AI Summary', 'Total'] as const;" in result
        assert "export const ProjectsReadonlyFields = [] as const;" in result

    def test_table_accessors(self, schema):
        result = render_utility_types(schema)

        assert "export type AirtableTableName = 'Users' | 'Projects';" in result
        assert "    'Users': UsersSchema," in result
        assert "    'Users': { schema: typeof UsersSchema; type: UsersRecord };" in result
        assert "export type GetTableSchema<T extends AirtableTableName> = AirtableTableSchemas[T]['schema'];" in result
        assert "export type GetTableType<T extends AirtableTableName> = AirtableTableSchemas[T]['type'];" in result
        assert "export const validateRecord = <T extends AirtableTableName>(tableName: T, data: unknown): GetTableType<T> => {" in result
        assert "    return airtableTableSchemas[tableName].parse(data) as GetTableType<T>;" in result

    def test_native_has_no_create_schemas(self, schema):
        result = render_utility_types(schema, flatten=False)

        assert "CreateSchema" not in result
        assert "flattenRecord" not in result
        assert "export type CreateRecord<T extends AirtableTableName> = { id?: never; fields: Partial<GetTableType<T>['fields']> };" in result

    def test_flattened_create_and_update_schemas(self, schema):
        result = render_utility_types(schema, flatten=True)

        assert (
            'export const UsersCreateSchema = UsersSchema.omit({ record_id: true, Created: true, ["Auto ID"]: true, ["AI Summary"]: true, Total: true });'
            in result
        )
        assert "export const UsersUpdateSchema = UsersSchema.partial();" in result
        assert "export const ProjectsCreateSchema = ProjectsSchema.omit({ record_id: true });" in result
        assert "export type UsersCreate = z.infer<typeof UsersCreateSchema>;" in result
        assert "export { flattenRecord } from 'airtable-types-gen/runtime';" in result
        assert "Partial<Omit<GetTableType<T>, 'record_id'>> & { record_id: string };" in result

    def test_readonly_fields_follow_renames(self, id_collision_table):
        result = render_utility_types({"tables": [id_collision_table]}, flatten=True)
        assert "export const IdsReadonlyFields = ['auto_id'] as const;" in result


class TestRenderSchema:
    def test_document_layout(self, schema):
        result = render_schema(schema, flatten=True)

        assert result.startswith(HEADER[0])
        assert result.count("import { z } from 'zod';") == 1
        assert result.index("import { z } from 'zod';") < result.index("export const UsersSchema ")
        assert result.index("export const ProjectsSchema ") < result.index("export const UsersReadonlyFields")

    def test_filtered_schema_only_has_those_tables(self, users_table):
        result = render_schema({"tables": [users_table]})

        assert "UsersSchema" in result
        assert "ProjectsSchema" not in result
        assert "export type AirtableTableName = 'Users';" in result


class TestTableDescription:
    def test_comment_terminator_is_escaped(self, users_table):
        users_table["description"] = "ends */ early"

        for flatten in (True, False):
            result = render_table(users_table, flatten=flatten)
            assert " * @description ends *\\/ early" in result
            assert "ends */" not in result
