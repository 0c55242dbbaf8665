"""
Chat bounded context: application layer.

Use cases orchestrating chat storage and streamed assistant replies.
"""
