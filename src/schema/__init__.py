"""Canonical schema models shared by the DAL and the diagram builder."""

from .column_def import CascadeAction, Column, Reference
from .database_def import DatabaseInfo
from .table_def import Table

__all__ = ["CascadeAction", "Column", "DatabaseInfo", "Reference", "Table"]
