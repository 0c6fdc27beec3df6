"""Persistence layer for TaskFlow."""
