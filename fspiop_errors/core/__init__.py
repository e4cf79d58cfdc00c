"""
Core package.

Contains library configuration.
"""
