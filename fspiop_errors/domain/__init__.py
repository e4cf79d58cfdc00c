"""
Domain layer package.

Contains the error-code registry, the error-type bands and the
canonical FSPIOPError. pydantic models are accepted as input and
pydantic-settings configuration is read; no web framework imports, no IO.
"""
