"""
SessionAuth application.

Session-based authentication: registration, login, token refresh,
email verification and password reset.
"""
