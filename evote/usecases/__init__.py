"""Use-case layer for the login and signup workflows.

Each module coordinates domain objects and ports without performing transport
I/O directly, preserving MVVM + Hexagonal boundaries.
"""
