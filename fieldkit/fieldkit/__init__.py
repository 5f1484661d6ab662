"""Offline first-aid decision support: triage graph, keyword router, fallback policy."""

from .engine import DiagnosticSession, advance, get_node, go_back, reset, walk
from .errors import FieldkitError, InvalidChoiceError, NodeNotFoundError, TreeConfigError
from .router import classify, classify_category, offline_reply, respond
from .schema import BranchNode, LeafNode, NodeResult, Option, TraversalState

__all__ = [
    "BranchNode",
    "DiagnosticSession",
    "FieldkitError",
    "InvalidChoiceError",
    "LeafNode",
    "NodeNotFoundError",
    "NodeResult",
    "Option",
    "TraversalState",
    "TreeConfigError",
    "advance",
    "classify",
    "classify_category",
    "get_node",
    "go_back",
    "offline_reply",
    "reset",
    "respond",
    "walk",
]
