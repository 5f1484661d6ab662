import pytest

from fieldkit.engine import DiagnosticSession, advance, get_node, go_back, reset, walk
from fieldkit.errors import InvalidChoiceError, NodeNotFoundError
from fieldkit.protocols import MEDICAL_DECISION_TREE
from fieldkit.schema import TraversalState
from fieldkit.validator import iter_leaf_paths


def _all_states():
    """Every state reachable by walking a prefix of some root-to-leaf path."""
    states = {}
    for path in iter_leaf_paths(MEDICAL_DECISION_TREE):
        for i in range(len(path)):
            s = TraversalState(current_node_id=path[i], history=tuple(path[:i]))
            states[(s.current_node_id, s.history)] = s
    return list(states.values())


def test_get_node_is_pure_lookup():
    assert get_node("ROOT") is get_node("ROOT")
    assert get_node("BLEEDING_CHECK").id == "BLEEDING_CHECK"


def test_get_node_unknown_raises():
    with pytest.raises(NodeNotFoundError) as exc:
        get_node("NOPE")
    assert isinstance(exc.value, KeyError)
    assert exc.value.node_id == "NOPE"


def test_initial_state_is_root():
    s = TraversalState()
    assert s.current_node_id == "ROOT"
    assert s.history == ()


def test_advance_pushes_history():
    s = advance(TraversalState(), "BLEEDING_CHECK")
    assert s.current_node_id == "BLEEDING_CHECK"
    assert s.history == ("ROOT",)


def test_advance_unknown_raises():
    with pytest.raises(NodeNotFoundError):
        advance(TraversalState(), "NOPE")


def test_back_forward_inverse_for_every_option():
    for s in _all_states():
        for opt in get_node(s.current_node_id).options:
            assert go_back(advance(s, opt.next_id)) == s


def test_back_at_root_is_noop():
    s = TraversalState(current_node_id="ROOT", history=())
    assert go_back(s) is s


def test_reset_idempotent():
    for s in _all_states():
        assert reset(reset(s)) == reset(s) == TraversalState(current_node_id="ROOT", history=())


def test_tourniquet_scenario():
    s = reset()
    assert "BLEEDING_CHECK" in get_node(s.current_node_id).targets()
    s = advance(s, "BLEEDING_CHECK")
    assert "TOURNIQUET_APPLY" in get_node(s.current_node_id).targets()
    s = advance(s, "TOURNIQUET_APPLY")
    node = get_node(s.current_node_id)
    assert node.is_leaf
    assert node.result.severity == "CRITICAL"
    assert node.result.action_item == "APLICAR AHORA"


def test_convergent_node_back_follows_caller_path():
    # RECOVERY_POS is reachable both from AIRWAY_CHECK and BREATHING_LOOK
    direct = walk(["AIRWAY_CHECK", "RECOVERY_POS"])
    via_breathing = walk(["AIRWAY_CHECK", "BREATHING_LOOK", "RECOVERY_POS"])
    assert go_back(direct).current_node_id == "AIRWAY_CHECK"
    assert go_back(via_breathing).current_node_id == "BREATHING_LOOK"


def test_lenient_advance_accepts_off_menu_id():
    s = advance(TraversalState(), "TOURNIQUET_APPLY")
    assert s.current_node_id == "TOURNIQUET_APPLY"


def test_strict_advance_rejects_off_menu_id():
    with pytest.raises(InvalidChoiceError):
        advance(TraversalState(), "TOURNIQUET_APPLY", strict=True)


def test_walk_is_strict_by_default():
    with pytest.raises(InvalidChoiceError):
        walk(["TOURNIQUET_APPLY"])


def test_session_choose_back_restart():
    session = DiagnosticSession()
    assert not session.can_go_back
    node = session.choose(1)
    assert node.id == "BLEEDING_CHECK"
    node = session.choose("TOURNIQUET_APPLY")
    assert session.is_finished
    assert session.path == ["ROOT", "BLEEDING_CHECK", "TOURNIQUET_APPLY"]
    assert session.back().id == "BLEEDING_CHECK"
    assert session.restart().id == "ROOT"
    assert session.state == reset()


def test_session_rejects_bad_index():
    session = DiagnosticSession()
    with pytest.raises(InvalidChoiceError):
        session.choose(99)
    session.choose("PRIMARY_SURVEY")
    with pytest.raises(InvalidChoiceError):
        session.choose(0)


@pytest.mark.parametrize("flag", [True, False])
def test_session_rejects_bool_choice(flag):
    session = DiagnosticSession()
    with pytest.raises(InvalidChoiceError):
        session.choose(flag)
    assert session.state == reset()
