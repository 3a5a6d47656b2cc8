"""Shared configuration helpers for the schema-canvas core."""
