"""
Stack-based traversal over the triage graph.

State is owned by the caller; every operation returns a new TraversalState.
Back navigation replays the caller's own path rather than a structural parent,
since the same node can be reached through different questions.
"""
from __future__ import annotations

from typing import Iterable, Mapping, Optional, Union

from .errors import InvalidChoiceError, NodeNotFoundError
from .protocols import MEDICAL_DECISION_TREE
from .schema import ROOT_ID, DecisionNode, TraversalState
from .utils.logging import get_logger

logger = get_logger(__name__)

Node = DecisionNode
Tree = Mapping[str, Node]


def get_node(node_id: str, tree: Optional[Tree] = None) -> Node:
    tree = MEDICAL_DECISION_TREE if tree is None else tree
    try:
        return tree[node_id]
    except KeyError:
        raise NodeNotFoundError(node_id) from None


def advance(state: TraversalState, next_id: str, *, strict: bool = False, tree: Optional[Tree] = None) -> TraversalState:
    target = get_node(next_id, tree)
    if strict:
        current = get_node(state.current_node_id, tree)
        if next_id not in current.targets():
            raise InvalidChoiceError(state.current_node_id, next_id)
    logger.debug("advance %s -> %s", state.current_node_id, target.id)
    return TraversalState(current_node_id=target.id, history=state.history + (state.current_node_id,))


def go_back(state: TraversalState) -> TraversalState:
    if not state.history:
        return state
    logger.debug("back %s -> %s", state.current_node_id, state.history[-1])
    return TraversalState(current_node_id=state.history[-1], history=state.history[:-1])


def reset(state: Optional[TraversalState] = None) -> TraversalState:
    return TraversalState(current_node_id=ROOT_ID, history=())


def walk(path: Iterable[str], *, strict: bool = True, tree: Optional[Tree] = None) -> TraversalState:
    """Replay a sequence of chosen next ids starting from ROOT."""
    state = reset()
    for next_id in path:
        state = advance(state, next_id, strict=strict, tree=tree)
    return state


class DiagnosticSession:
    """Single-owner wrapper around one traversal, as driven by a manual/triage panel."""

    def __init__(self, tree: Optional[Tree] = None, strict: bool = True):
        self.tree = MEDICAL_DECISION_TREE if tree is None else tree
        self.strict = strict
        self.state = reset()

    @property
    def node(self) -> Node:
        return get_node(self.state.current_node_id, self.tree)

    @property
    def is_finished(self) -> bool:
        return self.node.is_leaf

    @property
    def path(self) -> list[str]:
        return list(self.state.history) + [self.state.current_node_id]

    @property
    def can_go_back(self) -> bool:
        return bool(self.state.history)

    def choose(self, choice: Union[int, str]) -> Node:
        """Pick an option by zero-based index or by its next id."""
        if isinstance(choice, bool):
            raise InvalidChoiceError(self.state.current_node_id, str(choice))
        if isinstance(choice, int):
            options = self.node.options
            if not 0 <= choice < len(options):
                raise InvalidChoiceError(self.state.current_node_id, str(choice))
            next_id = options[choice].next_id
        else:
            next_id = choice
        self.state = advance(self.state, next_id, strict=self.strict, tree=self.tree)
        return self.node

    def back(self) -> Node:
        self.state = go_back(self.state)
        return self.node

    def restart(self) -> Node:
        self.state = reset(self.state)
        return self.node
