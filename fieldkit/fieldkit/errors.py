from __future__ import annotations

from typing import Any, Dict, Optional


class FieldkitError(Exception):
    pass


class NodeNotFoundError(FieldkitError, KeyError):
    def __init__(self, node_id: str):
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"node not found: {self.node_id}"


class InvalidChoiceError(FieldkitError, ValueError):
    def __init__(self, node_id: str, next_id: str):
        super().__init__(f"{next_id!r} is not an option of node {node_id!r}")
        self.node_id = node_id
        self.next_id = next_id


class TreeConfigError(FieldkitError):
    """Raised when a decision graph fails structural validation."""

    def __init__(self, message: str, report: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.report = report or {}
