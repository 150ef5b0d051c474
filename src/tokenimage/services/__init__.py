"""External service clients and token image services."""
