from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

# Accept snake_case and the camelCase keys sent by form payloads.
_MODEL_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    coerce_numbers_to_str=True,
)

_BOOL = TypeAdapter(bool)


def _fields_by_name(model: type, data: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(data)
    for name, field in model.model_fields.items():
        if field.alias and field.alias != name and field.alias in data:
            value = data.pop(field.alias)
            data.setdefault(name, value)
    return data


class CascadeAction(str, Enum):
    """Referential action applied on delete/update of the referenced row.

    Values are the literal SQL keywords so they can be placed into DDL verbatim.
    """

    CASCADE = "CASCADE"
    SET_NULL = "SET NULL"
    SET_DEFAULT = "SET DEFAULT"
    RESTRICT = "RESTRICT"
    NO_ACTION = "NO ACTION"

    @classmethod
    def parse(cls, value: Any) -> "CascadeAction":
        """Parse a catalog rule or member name (``"set null"``, ``"SET_NULL"``)."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unsupported cascade action: {value!r}")
        cleaned = " ".join(value.replace("_", " ").split()).upper()
        for action in cls:
            if action.value == cleaned:
                return action
        raise ValueError(f"Unsupported cascade action: {value!r}")


class Reference(BaseModel):
    """Target of a foreign key column.

    ``on_delete`` / ``on_update`` are ``None`` when no action was given; the DDL
    synthesizer then emits no clause for them.
    """

    table: str
    column: str
    on_delete: Optional[CascadeAction] = None
    on_update: Optional[CascadeAction] = None

    model_config = _MODEL_CONFIG

    @model_validator(mode="before")
    @classmethod
    def _parse_actions(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = _fields_by_name(cls, data)
        for key in ("on_delete", "on_update"):
            value = data.get(key)
            data[key] = CascadeAction.parse(value) if value not in (None, "") else None
        return data


class Column(BaseModel):
    """Canonical representation of a table column.

    A primary key column is always non-nullable and unique; the model coerces
    those flags at construction time so no consumer can observe a nullable
    primary key. ``length`` is only used when synthesizing DDL; introspected
    columns carry any length inside ``type``.
    """

    name: str
    type: str
    is_primary_key: bool = False
    is_nullable: bool = True
    is_unique: bool = False
    default_value: Optional[str] = None
    is_foreign_key: bool = False
    references: Optional[Reference] = None
    length: Optional[str] = None

    model_config = _MODEL_CONFIG

    @model_validator(mode="before")
    @classmethod
    def _enforce_primary_key(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = _fields_by_name(cls, data)
        try:
            # Form payloads send "false"/"0"; parse before coercing.
            is_primary_key = _BOOL.validate_python(data.get("is_primary_key", False))
        except PydanticValidationError:
            # Reported by field validation.
            return data
        if is_primary_key:
            data["is_nullable"] = False
            data["is_unique"] = True
        return data

    @model_validator(mode="after")
    def _check_reference(self) -> "Column":
        if self.is_foreign_key and self.references is None:
            raise ValueError(f"Foreign key column '{self.name}' has no reference.")
        if self.references is not None and not self.is_foreign_key:
            raise ValueError(f"Column '{self.name}' has a reference but is not a foreign key.")
        return self
