"""
Auth bounded context: domain layer.

Regular and Google accounts, session token claims, and one-shot
verification / password-reset tokens.
"""
