"""
Shared module package.

Contains cross-cutting concerns used by every route:
- Error normalization and the terminal error handler
- The callback-style handler pipeline and async wrapper
- Security headers and rate limiting
- Logging configuration
"""
