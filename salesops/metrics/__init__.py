"""Funnel aggregation and derived-metrics engine.

Reduces report rows into totals, derives conversion rates and cost
metrics, classifies them against benchmarks, compares reporting periods
and paces goals.

Deterministic -- no I/O, no shared state.
"""
