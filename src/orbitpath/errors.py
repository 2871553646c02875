"""Error handling utilities for orbital route finding."""

import sys
from typing import Optional


class OrbitPathError(Exception):
    """Base exception for orbitpath-specific errors."""

    def __init__(self, message: str, suggestions: Optional[list[str]] = None):
        """Initialize with message and optional suggestions.

        Args:
            message: Error description
            suggestions: Optional list of actionable suggestions
        """
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with suggestions."""
        formatted = f"{self.message}"
        if self.suggestions:
            formatted += "\n\nSuggestions:"
            for suggestion in self.suggestions:
                formatted += f"\n  - {suggestion}"
        return formatted


class DomainError(OrbitPathError):
    """Raised for degenerate geometry such as normalizing a zero-length vector."""


class InputError(OrbitPathError):
    """Raised when position or scenario data is malformed or incomplete."""


class ScenarioFileNotFoundError(InputError):
    """Raised when a scenario file does not exist."""

    def __init__(self, path: str):
        message = f"Scenario file not found: '{path}'"
        suggestions = [
            "Check the path passed on the command line",
            "Scenario files contain a '#SEED:' line, satellite lines and one ROUTE line",
        ]
        super().__init__(message, suggestions)
        self.path = path


class ScenarioParseError(InputError):
    """Raised when a scenario line cannot be parsed."""

    def __init__(self, line_number: int, line: str, reason: str):
        message = f"Invalid scenario line {line_number}: '{line}' ({reason})"
        suggestions = [
            "Satellite lines look like 'SAT0,-12.5,104.2,512.3' (id,lat,lon,altitude km)",
            "The route line looks like 'ROUTE,lat1,lon1,lat2,lon2'",
        ]
        super().__init__(message, suggestions)
        self.line_number = line_number
        self.line = line
        self.reason = reason


class GraphFrozenError(OrbitPathError):
    """Raised when a built graph is modified."""

    def __init__(self, operation: str):
        message = f"Cannot {operation}: graph is frozen after construction"
        suggestions = [
            "Build a new graph with build_visibility_graph() for different positions",
        ]
        super().__init__(message, suggestions)


def print_error(error: Exception) -> None:
    """Print error to stderr with formatted output.

    Args:
        error: Exception to print
    """
    if not isinstance(error, OrbitPathError):
        print(f"Error: {error}", file=sys.stderr)
        return

    print(f"Error: {error.message}", file=sys.stderr)
    if error.suggestions:
        print(file=sys.stderr)
        print("Suggestions:", file=sys.stderr)
        for suggestion in error.suggestions:
            print(f"  - {suggestion}", file=sys.stderr)


def handle_error(error: Exception, context: Optional[str] = None) -> int:
    """Handle an error with optional context and return exit code.

    Args:
        error: Exception that occurred
        context: Optional description of what was being attempted

    Returns:
        Exit code (1 for error)
    """
    if context:
        print(f"Error while {context}:", file=sys.stderr)

    print_error(error)

    import traceback

    if not isinstance(error, OrbitPathError):
        traceback.print_exc()

    return 1
