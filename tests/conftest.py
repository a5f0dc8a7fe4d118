"""Shared Airtable schema fixtures."""

import pytest


def make_field(id: str, name: str, type: str, **extra) -> dict:
    return {"id": id, "name": name, "type": type, **extra}


@pytest.fixture
def users_table() -> dict:
    return {
        "id": "tblUsers",
        "name": "Users",
        "primaryFieldId": "fldName",
        "description": "User records",
        "fields": [
            make_field("fldName", "Name", "singleLineText"),
            make_field("fldEmail", "Email", "email"),
            make_field("fldAge", "Age", "number"),
            make_field("fldActive", "Active", "checkbox"),
            make_field(
                "fldRole",
                "Role",
                "singleSelect",
                options={"choices": [{"name": "Admin"}, {"name": "User"}, {"name": "Guest"}]},
            ),
            make_field("fldCreated", "Created", "createdTime"),
            make_field("fldAutoNumber", "Auto ID", "autoNumber"),
            make_field("fldSummary", "AI Summary", "aiText"),
            make_field("fldTotal", "Total", "formula", options={"result": {"type": "number"}}),
            make_field("fldNotes", "Notes", "multilineText", description="Free text\nsecond line"),
        ],
        "views": [{"id": "viwAll", "name": "All Users", "type": "grid"}],
    }


@pytest.fixture
def projects_table() -> dict:
    return {
        "id": "tblProjects",
        "name": "Projects",
        "primaryFieldId": "fldProjectName",
        "fields": [
            make_field("fldProjectName", "Project Name", "singleLineText"),
            make_field(
                "fldStatus",
                "Status",
                "multipleSelects",
                options={"choices": [{"name": "Planning"}, {"name": "In Progress"}, {"name": "Completed"}]},
            ),
            make_field("fldAssignees", "Assignees", "multipleRecordLinks"),
        ],
        "views": [{"id": "viwActive", "name": "Active Projects", "type": "grid"}],
    }


@pytest.fixture
def schema(users_table: dict, projects_table: dict) -> dict:
    return {"tables": [users_table, projects_table]}


@pytest.fixture
def id_collision_table() -> dict:
    return {
        "id": "tblIds",
        "name": "Ids",
        "primaryFieldId": "fldAuto",
        "fields": [
            make_field("fldAuto", "id", "autoNumber"),
            make_field("fldNumber", "id", "number"),
        ],
        "views": [],
    }
