from sqlbulk.mapping.fields import RecordSchema, get_record_schema, map_fields, materialize
from sqlbulk.mapping.literals import render_literal, render_string

__all__ = ("RecordSchema", "get_record_schema", "map_fields", "materialize", "render_literal", "render_string")
