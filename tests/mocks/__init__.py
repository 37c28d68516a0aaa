"""
Centralized mock objects for testing.

This package provides reusable mock factories for WebSocket connections
and relay messages, reducing code duplication across test files.
"""
