"""
Benchmark suite for jsontree parsing and serializing performance.

Compares jsontree against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Run with ``pytest benchmarks`` after installing the ``benchmark`` extra.
"""
