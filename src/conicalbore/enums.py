"""Type-safe enums for the conical bore calculator."""

from enum import Enum


class OutputFormat(Enum):
    """Report format produced by the command line tool"""
    SUMMARY = "summary"    # Plain-text hole list
    MARKDOWN = "markdown"  # Markdown design sheet
    JSON = "json"          # Machine-readable report


class StlEncoding(Enum):
    """STL file encoding"""
    BINARY = "binary"  # Compact, what most slicers expect
    ASCII = "ascii"    # Human-readable, much larger
