"""
Read benchmark algorithms: range partitioning, single-iteration reads and run orchestration.
"""
