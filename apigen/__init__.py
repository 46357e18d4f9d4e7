"""Building blocks for OpenAPI code generation: JSON Schema parsing, JSON Pointer and format codecs."""

__version__ = "0.1.0"