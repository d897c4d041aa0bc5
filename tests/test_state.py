from ejectwheel.core.selector import SpinOutcome
from ejectwheel.core.state import SequenceState, SessionState, StateMachine


def test_starts_closed_with_initial_bundle():
    machine = StateMachine()
    assert machine.state == SequenceState.CLOSED
    assert machine.context == SessionState()


def test_valid_path_through_a_session():
    machine = StateMachine()
    assert machine.transition(SequenceState.IDLE)
    assert machine.transition(SequenceState.SPINNING, rotation=720.0)
    assert machine.transition(SequenceState.REVEALING, result="Red")
    assert machine.transition(SequenceState.CLOSED)
    assert machine.context.rotation == 720.0


def test_invalid_transitions_are_refused():
    machine = StateMachine()
    assert not machine.transition(SequenceState.SPINNING)
    assert machine.state == SequenceState.CLOSED

    machine.transition(SequenceState.IDLE)
    machine.transition(SequenceState.SPINNING)
    assert not machine.can_transition(SequenceState.CLOSED)
    assert not machine.transition(SequenceState.IDLE)
    assert machine.state == SequenceState.SPINNING


def test_reset_replaces_the_bundle():
    machine = StateMachine()
    machine.transition(SequenceState.IDLE)
    machine.transition(
        SequenceState.SPINNING,
        outcome=SpinOutcome(1, 900.0),
        rotation=900.0,
        participants=("a", "b"),
    )
    before = machine.context

    machine.reset()

    assert machine.context is not before
    assert machine.context == SessionState()
    assert machine.state == SequenceState.CLOSED


def test_listeners_notified_and_errors_contained():
    machine = StateMachine()
    seen = []

    def broken(old, new, ctx):
        raise RuntimeError("listener bug")

    machine.add_listener(broken)
    machine.add_listener(lambda old, new, ctx: seen.append((old, new)))

    assert machine.transition(SequenceState.IDLE)
    machine.reset()
    machine.reset()  # already closed: no notification

    assert seen == [
        (SequenceState.CLOSED, SequenceState.IDLE),
        (SequenceState.IDLE, SequenceState.CLOSED),
    ]


def test_reveal_text_is_upper_cased_result():
    assert SessionState(result="Pink").reveal_text == "PINK"
    assert SessionState().reveal_text == ""
