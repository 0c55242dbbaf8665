"""HTTP interface of the chat bounded context."""
