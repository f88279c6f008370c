"""
Request handlers exports.
"""
from .auth import AuthHandler
from .tasks import TaskHandler

__all__ = ["AuthHandler", "TaskHandler"]
