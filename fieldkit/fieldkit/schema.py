from __future__ import annotations

from typing import Annotated, List, Literal, Tuple, Union

from pydantic import BaseModel, Field, model_validator


ROOT_ID = "ROOT"

Severity = Literal["CRITICAL", "WARNING", "INFO"]
OptionStyle = Literal["danger", "safe", "neutral"]
ProtocolCategory = Literal["MEDICAL", "WATER", "SHELTER", "FIRE", "NAVIGATION"]


class Option(BaseModel):
    label: str
    next_id: str
    style: OptionStyle = "neutral"

    model_config = {"extra": "forbid", "frozen": True}


class NodeResult(BaseModel):
    title: str
    severity: Severity
    content: str
    action_item: str

    model_config = {"extra": "forbid", "frozen": True}


class BranchNode(BaseModel):
    kind: Literal["branch"] = "branch"
    id: str
    question: str
    options: Tuple[Option, ...]

    @model_validator(mode="after")
    def validate_nonempty(self) -> "BranchNode":
        if not self.options:
            raise ValueError(f"branch node {self.id} must have at least one option")
        return self

    @property
    def is_leaf(self) -> bool:
        return False

    def targets(self) -> List[str]:
        return [o.next_id for o in self.options]

    model_config = {"extra": "forbid", "frozen": True}


class LeafNode(BaseModel):
    kind: Literal["leaf"] = "leaf"
    id: str
    question: str
    result: NodeResult

    @property
    def is_leaf(self) -> bool:
        return True

    @property
    def options(self) -> Tuple[Option, ...]:
        # Leaves render like branches with nothing to pick
        return ()

    def targets(self) -> List[str]:
        return []

    model_config = {"extra": "forbid", "frozen": True}


DecisionNode = Annotated[Union[BranchNode, LeafNode], Field(discriminator="kind")]


class TraversalState(BaseModel):
    """Caller-owned position in the triage graph plus the path that led there."""

    current_node_id: str = ROOT_ID
    history: Tuple[str, ...] = ()

    model_config = {"extra": "forbid", "frozen": True}


class ChatReply(BaseModel):
    text: str
    source: Literal["remote", "remote-empty", "remote-error", "offline-protocol", "offline-generic"]
    category: ProtocolCategory | None = None

    model_config = {"extra": "forbid", "frozen": True}


class SessionRecord(BaseModel):
    path: List[str]
    final_node_id: str
    title: str
    severity: Severity
    action_item: str
    timestamp: str

    model_config = {"extra": "forbid"}
