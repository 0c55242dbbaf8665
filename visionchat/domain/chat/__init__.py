"""
Chat bounded context: domain layer.

Conversations owned by an account, their titles, and the streaming
reply protocol relayed from the completion provider.
"""
