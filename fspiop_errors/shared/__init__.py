"""
Shared module package.

Contains cross-cutting concerns such as logging configuration.
"""
