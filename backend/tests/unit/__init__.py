"""
Unit tests package.

Contains isolated tests for services, guards, DTOs and core helpers that run
without a database by mocking the repository interfaces.
"""
