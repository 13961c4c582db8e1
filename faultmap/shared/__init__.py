"""
Shared module package.

Contains cross-cutting concerns:
- HTTP exception handling middleware and registration
- Logging configuration
"""
