"""Output module - documentation, reports and result files."""

from .lib import (
    DOCS_FILE_NAME,
    format_compilation_report,
    format_program_tree,
    generate_documentation,
    write_output,
)

__all__ = [
    "DOCS_FILE_NAME",
    "generate_documentation",
    "format_program_tree",
    "format_compilation_report",
    "write_output",
]
