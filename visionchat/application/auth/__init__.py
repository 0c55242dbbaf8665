"""
Application layer for the auth bounded context.

Use cases coordinate accounts, password hashing, session tokens and
email delivery through domain ports.
"""
