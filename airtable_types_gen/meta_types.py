from typing import Any, Literal, NotRequired, Optional, TypedDict

FieldType = Literal[
    "singleLineText",
    "multilineText",
    "richText",
    "email",
    "url",
    "phoneNumber",
    "number",
    "currency",
    "percent",
    "rating",
    "checkbox",
    "singleSelect",
    "multipleSelects",
    "date",
    "dateTime",
    "createdTime",
    "lastModifiedTime",
    "multipleAttachments",
    "multipleRecordLinks",
    "formula",
    "rollup",
    "count",
    "lookup",
    "multipleLookupValues",
    "createdBy",
    "lastModifiedBy",
    "barcode",
    "button",
    "autoNumber",
    "aiText",
]


class ChoiceMetadata(TypedDict):
    id: NotRequired[str]
    name: str
    color: NotRequired[str]


class ResultMetadata(TypedDict):
    type: str
    options: NotRequired[dict[str, Any]]


class FieldOptions(TypedDict, total=False):
    choices: list[ChoiceMetadata]
    result: ResultMetadata
    isValid: bool
    formula: str
    referencedFieldIds: list[str]
    linkedTableId: str
    precision: int


class FieldMetadata(TypedDict):
    id: str
    name: str
    type: str
    options: NotRequired[Optional[FieldOptions]]
    description: NotRequired[Optional[str]]
    isComputed: NotRequired[bool]
    isReadonly: NotRequired[bool]


class ViewMetadata(TypedDict):
    id: str
    name: str
    type: str


class TableMetadata(TypedDict):
    id: str
    name: str
    primaryFieldId: str
    fields: list[FieldMetadata]
    views: list[ViewMetadata]
    description: NotRequired[Optional[str]]


class BaseMetadata(TypedDict):
    tables: list[TableMetadata]


OutputFormat = Literal["typescript", "zod"]
