"""HTTP API for TaskFlow."""
