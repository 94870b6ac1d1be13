"""
Pytest configuration; keeps the repository root importable so the tests
run against the working tree without an install.
"""
