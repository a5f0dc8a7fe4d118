"""Field type → target shape.

Both the TypeScript and the Zod backends render from the same `Shape`, so the
decision of what a field holds lives in one place (`map_field`) and the
backends only differ in syntax.
"""

from typing import Literal, Optional

from pydantic import BaseModel

from .helpers import enrich_field, warn_unhandled_airtable_type
from .meta_types import FieldMetadata

ShapeKind = Literal["string", "number", "boolean", "enum", "array", "object", "union"]
StringFormat = Literal["email", "url", "phone", "date", "datetime"]

AI_TEXT_STATES = ["generated", "pending", "error", "empty"]
AI_TEXT_ALIAS = "AirtableAiTextValue"

COMPUTED = "🔒 Computed by Airtable"


class Shape(BaseModel):
    """Abstract description of a value, independent of the output language."""

    kind: ShapeKind
    format: Optional[StringFormat] = None
    message: Optional[str] = None
    integer: bool = False
    minimum: Optional[int] = None
    positive: bool = False
    values: list[str] = []
    items: Optional["Shape"] = None
    properties: list[tuple[str, "Shape"]] = []
    members: list["Shape"] = []
    alias: Optional[str] = None

    def is_simple(self) -> bool:
        return self.kind in ("string", "number", "boolean")


Shape.model_rebuild()


class FieldMapping(BaseModel):
    shape: Shape
    readonly: bool
    description: Optional[str] = None
    known: bool = True


# region CONSTRUCTORS
def string(format: Optional[StringFormat] = None, message: Optional[str] = None) -> Shape:
    return Shape(kind="string", format=format, message=message)


def number(integer: bool = False, minimum: Optional[int] = None, positive: bool = False) -> Shape:
    return Shape(kind="number", integer=integer, minimum=minimum, positive=positive)


def boolean() -> Shape:
    return Shape(kind="boolean")


def enum(values: list[str]) -> Shape:
    return Shape(kind="enum", values=values)


def array(items: Shape) -> Shape:
    return Shape(kind="array", items=items)


def obj(properties: list[tuple[str, Shape]], alias: Optional[str] = None) -> Shape:
    return Shape(kind="object", properties=properties, alias=alias)


def union(members: list[Shape]) -> Shape:
    return Shape(kind="union", members=members)


# endregion


def attachment() -> Shape:
    return obj(
        [
            ("id", string()),
            ("url", string("url")),
            ("filename", string()),
            ("size", number(positive=True)),
            ("type", string()),
        ]
    )


def collaborator() -> Shape:
    return obj([("id", string()), ("email", string("email")), ("name", string())])


def ai_text() -> Shape:
    return obj([("state", enum(AI_TEXT_STATES)), ("value", string()), ("isStale", boolean())], alias=AI_TEXT_ALIAS)


def choice_names(field: FieldMetadata) -> list[str]:
    """Select choices in the order Airtable lists them"""
    options = field.get("options") or {}
    choices = options.get("choices") or []
    return [choice["name"] for choice in choices]


def formula_result_type(field: FieldMetadata) -> str | None:
    options = field.get("options") or {}
    result = options.get("result") or {}
    return result.get("type")


def computed(readonly: bool, computed_text: str, plain_text: str) -> str:
    return f"{COMPUTED} - {computed_text}" if readonly else plain_text


def map_field(field: FieldMetadata, warn: bool = True, verbose: bool = False) -> FieldMapping:
    """Returns the shape of a field's value, whether it's read-only, and a short description."""

    readonly = bool(enrich_field(field)["isReadonly"])
    description: str | None = None
    known = True

    match field["type"]:
        case "singleLineText" | "multilineText" | "richText":
            shape = string()
        case "email":
            shape = string("email", "Invalid email format")
        case "url":
            shape = string("url", "Invalid URL format")
        case "phoneNumber":
            shape = string("phone", "Invalid phone number format")
        case "number" | "currency" | "percent" | "rating":
            shape = number()
        case "checkbox":
            shape = boolean()
        case "singleSelect":
            choices = choice_names(field)
            shape = enum(choices) if choices else string()
        case "multipleSelects":
            choices = choice_names(field)
            shape = array(enum(choices) if choices else string())
        case "date":
            shape = string("date", "Invalid date format (YYYY-MM-DD)")
            description = "ISO date string"
        case "dateTime":
            shape = string("datetime", "Invalid ISO datetime format")
            description = "ISO datetime string"
        case "createdTime" | "lastModifiedTime":
            shape = string("datetime", "Invalid ISO datetime format")
            description = computed(readonly, "readonly ISO datetime string", "ISO datetime string")
        case "multipleAttachments":
            shape = array(attachment())
        case "multipleRecordLinks":
            shape = array(string())
            description = "Array of linked record IDs"
        case "formula":
            if formula_result_type(field) in ("number", "currency"):
                shape = number()
            else:
                shape = string()
            description = computed(readonly, "formula result", "Formula result")
        case "rollup":
            shape = union([string(), number()])
            description = computed(readonly, "aggregated values from linked records", "Rollup values")
        case "count":
            shape = number(integer=True, minimum=0)
            description = computed(readonly, "count of linked records", "Count of linked records")
        case "lookup":
            shape = array(string())
            description = computed(readonly, "values from linked records", "Lookup values")
        case "multipleLookupValues":
            shape = array(string())
            description = computed(readonly, "multiple lookup values", "Multiple lookup values")
        case "createdBy" | "lastModifiedBy":
            shape = collaborator()
            description = computed(readonly, "user information", "User information")
        case "barcode":
            shape = obj([("text", string()), ("type", string())])
        case "button":
            shape = obj([("label", string()), ("url", string("url"))])
        case "autoNumber":
            shape = number(integer=True, positive=True)
            description = computed(readonly, "auto-incrementing number", "Auto-incrementing number")
        case "aiText":
            shape = ai_text()
            description = computed(readonly, "AI generated text object", "AI generated text object")
        case _:
            if warn:
                warn_unhandled_airtable_type(field, verbose)
            shape = string()
            known = False

    return FieldMapping(shape=shape, readonly=readonly, description=description, known=known)
