"""HTTP API for receipt token operations."""
