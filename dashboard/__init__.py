"""Core (UI-agnostic) dashboard logic.

This package contains:
- spreadsheet loading (XLSX -> pandas)
- row normalization against versioned sheet schemas
- views (category filter, priority sort, categorical counts)
- display formatters and table / chart assembly
- page compute functions (JSON-serializable payloads)
"""
