"""
Benchmark suite for lzon parsing performance.

Compares lzon against established JSON libraries on documents inside the
grammar both accept:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures parsing speed and memory usage across different data shapes.
"""
