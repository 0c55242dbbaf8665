"""HTTP interface of the market bounded context."""
