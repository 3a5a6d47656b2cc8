from typing import Optional, Tuple

from pydantic import BaseModel, field_validator

from .column_def import Column


class Table(BaseModel):
    """Canonical representation of a database table definition."""

    name: str
    columns: Tuple[Column, ...] = ()

    model_config = {"frozen": True}

    @field_validator("columns")
    @classmethod
    def _unique_column_names(cls, columns: Tuple[Column, ...]) -> Tuple[Column, ...]:
        seen = set()
        for col in columns:
            if col.name in seen:
                raise ValueError(f"Duplicate column name '{col.name}'.")
            seen.add(col.name)
        return columns

    def column(self, name: str) -> Optional[Column]:
        """Return the column with the given (case-sensitive) name, if any."""
        for col in self.columns:
            if col.name == name:
                return col
        return None

    @property
    def primary_key_columns(self) -> Tuple[Column, ...]:
        return tuple(col for col in self.columns if col.is_primary_key)

    @property
    def foreign_key_columns(self) -> Tuple[Column, ...]:
        return tuple(col for col in self.columns if col.is_foreign_key)
