"""Client-side workflows driving the playlist service."""

from .approval import ApprovalWorkflow
from .creation import CreationWorkflow
from .generation import GenerationWorkflow

__all__ = [
    "ApprovalWorkflow",
    "CreationWorkflow",
    "GenerationWorkflow",
]
