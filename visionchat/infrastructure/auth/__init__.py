"""
Infrastructure adapters for the auth bounded context.

SQL repositories, bcrypt hashing, JWT sessions, Google token
verification and SMTP email delivery.
"""
