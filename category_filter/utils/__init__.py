"""
Utility functions: logging, validation, responses and metrics.
"""
