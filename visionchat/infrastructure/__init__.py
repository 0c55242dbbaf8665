"""
Infrastructure layer package.

Adapters implementing domain ports: SQL storage, HTTP clients, SMTP.
"""
