"""
Application layer package.

Contains the factory functions that build, convert and validate
FSPIOPErrors. Depends on the domain layer, never on interfaces.
"""
