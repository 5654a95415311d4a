"""Data module - read, discover, select, and merge YAML data."""

from ymlgen.data.discover import discover_data_files, is_data_file
from ymlgen.data.reader import parse_document, read_merge_source
from ymlgen.data.select import merge_data, select_data

__all__ = [
    "discover_data_files",
    "is_data_file",
    "merge_data",
    "parse_document",
    "read_merge_source",
    "select_data",
]
