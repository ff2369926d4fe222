"""Error types separating aborting failures from collected tool failures.

Test/build failures are never raised; they are returned as ``ToolResult``
values and collected by the evaluator.
"""

from __future__ import annotations


class AlltestError(Exception):
    """Base class for errors that abort the whole run."""


class InfrastructureError(AlltestError):
    """Directory listing, identity or tool-start failure during traversal."""


class ConfigurationError(AlltestError):
    """Run configuration could not be resolved before traversal."""


__all__ = [
    "AlltestError",
    "InfrastructureError",
    "ConfigurationError",
]
