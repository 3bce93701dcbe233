"""Maven ecosystem components."""

__all__ = [
    "detector",
    "pom_reader",
    "reactor",
]
