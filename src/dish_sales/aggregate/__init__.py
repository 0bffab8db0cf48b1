"""Aggregation helpers.

Pure functions that turn a validated `SalesSheet` into per-dish series,
rankings, growth rates and summary rows. Inputs are a few dozen dishes over a
dozen months, so everything is computed eagerly in memory.
"""
