from .source import SourceSchemaProperty, SourceSchemaType, read_source_types_by_type

__all__ = ["SourceSchemaProperty", "SourceSchemaType", "read_source_types_by_type"]
