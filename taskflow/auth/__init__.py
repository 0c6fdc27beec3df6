"""Authentication for TaskFlow."""
