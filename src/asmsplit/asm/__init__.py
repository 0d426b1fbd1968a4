"""Assembly segmentation: markers, boundaries, catalog and references."""

from asmsplit.asm.boundary import LineRange, extract_function, resolve_function_range
from asmsplit.asm.catalog import FunctionRecord, function_names, list_functions
from asmsplit.asm.markers import Marker, MarkerKind, classify_line, function_name
from asmsplit.asm.references import extract_calls, extract_module_calls
from asmsplit.asm.source import AssemblySource

__all__ = [
    "AssemblySource",
    "FunctionRecord",
    "LineRange",
    "Marker",
    "MarkerKind",
    "classify_line",
    "extract_calls",
    "extract_function",
    "extract_module_calls",
    "function_name",
    "function_names",
    "list_functions",
    "resolve_function_range",
]
