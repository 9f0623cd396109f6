"""CLI commands for repwise."""

from .feedback import feedback
from .init import init
from .notify import notify
from .progress import progress
from .serve import serve
from .streak import streak

__all__ = [
    "feedback",
    "init",
    "notify",
    "progress",
    "serve",
    "streak",
]
