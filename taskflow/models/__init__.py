"""Database models for TaskFlow."""
