"""HTTP interface of the auth bounded context."""
