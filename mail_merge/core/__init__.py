"""
Core configuration, errors and batch orchestration.
"""
