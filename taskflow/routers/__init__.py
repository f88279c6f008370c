"""API routers for TaskFlow."""
