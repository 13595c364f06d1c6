"""Core (UI-agnostic) dashboard logic.

This package contains:
- supplier aggregation (raw CSV rows -> ranked summary records)
- data loading (CSV -> text rows, cached per file signature)
- filter normalization
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
