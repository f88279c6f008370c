"""Core modules for TaskFlow."""
