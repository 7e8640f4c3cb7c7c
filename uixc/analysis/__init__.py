"""Analysis module - parameter usage inference for custom components."""

from .lib import (
    ARRAY_SUFFIXES,
    BOOLEAN_KEYS,
    STRING_SUFFIXES,
    UsageProfile,
    analyze_parameter_usage,
    infer_component_schemas,
    infer_parameter_types,
    synthesize_schema,
)

__all__ = [
    "BOOLEAN_KEYS",
    "ARRAY_SUFFIXES",
    "STRING_SUFFIXES",
    "UsageProfile",
    "analyze_parameter_usage",
    "synthesize_schema",
    "infer_component_schemas",
    "infer_parameter_types",
]
