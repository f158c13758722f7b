"""
Command line interface for the read benchmark.
"""
