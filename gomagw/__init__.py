"""Address validation, CORS, middleware, RSA key and health-check helpers for an API gateway."""

__version__ = "0.1.0"