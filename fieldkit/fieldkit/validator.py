"""
Structural validator for decision graphs: closure, reachability, branch/leaf
exclusivity and cycle detection.
"""
from __future__ import annotations

from collections import deque
from typing import Any, Dict, Iterator, List, Mapping, Set, Tuple

from .errors import TreeConfigError
from .schema import ROOT_ID
from .utils.logging import get_logger

logger = get_logger(__name__)


def _targets(node: Any) -> List[str]:
    return [o.next_id for o in getattr(node, "options", ()) or ()]


def find_dangling(tree: Mapping[str, Any]) -> List[Tuple[str, str]]:
    dangling: List[Tuple[str, str]] = []
    for nid, node in tree.items():
        for t in _targets(node):
            if t not in tree:
                dangling.append((nid, t))
    return dangling


def reachable_from(tree: Mapping[str, Any], root_id: str = ROOT_ID) -> Set[str]:
    seen: Set[str] = set()
    if root_id not in tree:
        return seen
    dq: deque[str] = deque([root_id])
    while dq:
        u = dq.popleft()
        if u in seen:
            continue
        seen.add(u)
        for v in _targets(tree[u]):
            if v in tree:
                dq.append(v)
    return seen


def find_ambiguous(tree: Mapping[str, Any]) -> List[str]:
    """Nodes that are neither a pure branch nor a pure leaf."""
    bad: List[str] = []
    for nid, node in tree.items():
        has_options = bool(_targets(node))
        has_result = getattr(node, "result", None) is not None
        if has_options == has_result:
            bad.append(nid)
    return bad


def find_cycles(tree: Mapping[str, Any]) -> List[List[str]]:
    # Tarjan SCC; components of size > 1 or self loops are cycles
    index = 0
    indices: Dict[str, int] = {}
    lowlink: Dict[str, int] = {}
    stack: List[str] = []
    onstack: Set[str] = set()
    cycles: List[List[str]] = []

    def strongconnect(v: str) -> None:
        nonlocal index
        indices[v] = index
        lowlink[v] = index
        index += 1
        stack.append(v)
        onstack.add(v)
        for w in _targets(tree[v]):
            if w not in tree:
                continue
            if w not in indices:
                strongconnect(w)
                lowlink[v] = min(lowlink[v], lowlink[w])
            elif w in onstack:
                lowlink[v] = min(lowlink[v], indices[w])
        if lowlink[v] == indices[v]:
            comp: List[str] = []
            while True:
                w = stack.pop()
                onstack.remove(w)
                comp.append(w)
                if w == v:
                    break
            if len(comp) > 1 or v in _targets(tree[v]):
                cycles.append(sorted(comp))

    for v in tree:
        if v not in indices:
            strongconnect(v)
    return cycles


def check_tree(tree: Mapping[str, Any], root_id: str = ROOT_ID) -> Dict[str, Any]:
    has_root = root_id in tree
    dangling = find_dangling(tree)
    reach = reachable_from(tree, root_id)
    unreachable = sorted(n for n in tree if n not in reach)
    ambiguous = find_ambiguous(tree)
    key_mismatch = sorted(k for k, node in tree.items() if getattr(node, "id", k) != k)
    cycles = find_cycles(tree)

    return {
        "root_id": root_id,
        "node_count": len(tree),
        "has_root": has_root,
        "dangling": [list(d) for d in dangling],
        "unreachable": unreachable,
        "ambiguous": ambiguous,
        "key_mismatch": key_mismatch,
        "cycles": cycles,
        "summary_pass": has_root and not dangling and not unreachable and not ambiguous and not key_mismatch,
    }


def validate_tree(tree: Mapping[str, Any], root_id: str = ROOT_ID) -> Dict[str, Any]:
    report = check_tree(tree, root_id)
    if not report["summary_pass"]:
        logger.error("decision graph failed validation: %s", report)
        problems = [k for k in ("dangling", "unreachable", "ambiguous", "key_mismatch") if report[k]]
        if not report["has_root"]:
            problems.insert(0, "missing root")
        raise TreeConfigError(f"invalid decision graph: {', '.join(problems)}", report)
    if report["cycles"]:
        logger.warning("decision graph contains cycles: %s", report["cycles"])
    return report


def iter_leaf_paths(tree: Mapping[str, Any], root_id: str = ROOT_ID) -> Iterator[List[str]]:
    """Yield every root-to-leaf path as a list of node ids. Cycles are not re-entered."""
    if root_id not in tree:
        return
    stack: List[Tuple[str, List[str]]] = [(root_id, [root_id])]
    while stack:
        nid, path = stack.pop()
        targets = _targets(tree[nid])
        if not targets:
            yield path
            continue
        unique = [t for i, t in enumerate(targets) if t not in targets[:i] and t not in path and t in tree]
        for t in reversed(unique):
            stack.append((t, path + [t]))
