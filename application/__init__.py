"""
Application Layer for the IronMatch Arena API.

This package contains:
- ports/: Repository and clock interfaces (what the engine needs)
- exceptions: Engine errors translated to HTTP statuses by api/errors.py
"""
