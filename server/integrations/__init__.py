"""
Upstream API integrations.

Each module describes how an upstream API reports failures, so the
shared error handler can translate them into HTTP responses.
"""
