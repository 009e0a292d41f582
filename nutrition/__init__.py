"""Core (UI-agnostic) beverage explorer logic.

This package contains:
- data loading (CSV -> pandas -> typed records)
- control normalization and filtering
- scale domains and color encodings
- render instructions and mark reconciliation
- legend specs
- chart helpers (Altair -> Vega-Lite spec dict)
"""
