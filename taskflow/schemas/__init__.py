"""Pydantic schemas for TaskFlow."""
