"""
Market bounded context: domain layer.

Ticker values, indicator arithmetic over price series, and the
aggregates shown on the dashboard.
"""
