"""
Infrastructure adapters for the chat bounded context.

SQL chat storage and the OpenRouter completion client.
"""
