"""FastAPI dependency injection for cut list services."""

from typing import Annotated

from fastapi import Depends

from excut.application import OptimizeCutListCommand


def get_optimize_command() -> OptimizeCutListCommand:
    """Dependency for OptimizeCutListCommand."""
    return OptimizeCutListCommand()


# Type aliases for cleaner endpoint signatures
OptimizeCommandDep = Annotated[OptimizeCutListCommand, Depends(get_optimize_command)]
