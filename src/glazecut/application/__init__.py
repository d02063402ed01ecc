"""Application layer - use cases and orchestration."""

from .commands import BuildSolutionCommand
from .dtos import ExportMeta, GlassReport, ItemFailure, ProfileReport, SolutionOutput

__all__ = [
    "BuildSolutionCommand",
    "ExportMeta",
    "GlassReport",
    "ItemFailure",
    "ProfileReport",
    "SolutionOutput",
]
