"""Swappable stores behind the query execution and booking aggregation ports."""
