"""
Integration tests package.

Services and repositories exercised together against SQLite.
"""
