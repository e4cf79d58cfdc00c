"""
Interfaces layer package.

Contains the FastAPI exception handlers, the adapters from framework
errors, and the Pydantic schemas of the error body.
"""
