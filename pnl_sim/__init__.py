"""Scenario P&L simulator: projects a target-year P&L from a baseline statement and strategic levers."""
