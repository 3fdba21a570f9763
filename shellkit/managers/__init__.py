"""Workflows that combine the workspace store with external tools.

Managers raise domain exceptions from ``shellkit.errors`` and never exit
the process -- mapping errors to exit codes is the CLI's responsibility.
"""

from shellkit.managers.orchestrator import WorkspaceOrchestrator

__all__ = ["WorkspaceOrchestrator"]
