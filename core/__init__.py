"""Core (UI-agnostic) admin panel logic.

This package contains:
- configuration (env -> PanelConfig)
- the resource client for the remote admin API (requests + pydantic)
- per-screen view state controllers with request sequencing
- view payloads and chart helpers (Altair -> Vega-Lite spec dict)
"""
