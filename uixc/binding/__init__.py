"""Binding module - bind-target scanning and internal/external partition.

Example usage:
    >>> from uixc.binding import classify, scan_program
    >>> partition = classify(scan_program(app))
    >>> partition.internal_names
    ['name']
"""

from .lib import (
    BindCandidate,
    BindingScan,
    Partition,
    classify,
    parameter_list,
    scan_program,
)

__all__ = [
    "BindCandidate",
    "BindingScan",
    "Partition",
    "scan_program",
    "classify",
    "parameter_list",
]
