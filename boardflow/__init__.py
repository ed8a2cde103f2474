"""
BoardFlow - workflow-aligned board column management

Keeps a board's user-editable column layout consistent with the workflow
state machine that governs its work items:

- Loads a project's workflow as a normalized status/transition graph
- Reports columns that are structurally misaligned with that graph
- Regenerates or incrementally syncs columns from the graph
- Validates work item moves against the graph before they are committed
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
