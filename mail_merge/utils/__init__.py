"""
Logging, validation and file helpers.
"""
