"""Exports & reporting: stable serialization, CSV writers and Markdown reports.

- serialize.py: one-decimal camelCase dicts for JSON and prompts
- writers.py: CSV emitters with fixed schemas
- reports.py: assumptions.md and validation_report.md generators
"""
