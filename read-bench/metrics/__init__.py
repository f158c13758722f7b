"""
Benchmark results, statistics and reports.
"""
