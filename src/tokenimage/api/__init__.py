"""HTTP API for TokenImage."""
