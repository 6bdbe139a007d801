"""Request, response and error models for the HTTP API."""
