"""Rule engine for the "depend on all projects" check."""

__all__ = [
    "selectors",
    "inclusion",
    "identity",
    "scanner",
    "report",
    "depend_on_all",
]
