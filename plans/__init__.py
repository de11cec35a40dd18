"""
Plans app.

Sellable plans with per-currency prices, and the currency rate table.
"""
