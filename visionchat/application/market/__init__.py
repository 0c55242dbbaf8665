"""
Application layer for the market bounded context.

Async use cases fanning out to exchange, global-market and news ports.
"""
