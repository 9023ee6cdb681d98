"""Read JSON Schemas, model their types and generate Protocol Buffer descriptions."""

__version__ = "0.1.0"