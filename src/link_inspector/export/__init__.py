"""CSV and JSON renderers for analyzed candidates."""

from link_inspector.export.exporter import (
    ExportedFile,
    build_filename,
    escape_csv,
    export_results,
    to_csv,
    to_json,
)

__all__ = ["ExportedFile", "build_filename", "escape_csv", "export_results", "to_csv", "to_json"]
