"""Baseline statement: prior-period P&L actuals, validation and payload parsing."""
