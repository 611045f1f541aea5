"""Signature table comparison."""

from .engine import DiffResult, ModifiedMethod, compare_files, diff_tables, table_from_file

__all__ = ["DiffResult", "ModifiedMethod", "compare_files", "diff_tables", "table_from_file"]
