from domscreen.core.events import Event, KEY_PRESS, is_printable


def test_letters_and_digits_are_printable():
    assert is_printable(KEY_PRESS["F"])
    assert is_printable(KEY_PRESS["f"])
    assert is_printable(KEY_PRESS["7"])
    assert is_printable(KEY_PRESS["@"])


def test_control_keys_are_not_printable():
    for key in ["Enter", "Tab", "Escape", "Backspace", "ArrowLeft", "ArrowUp", "PageUp", " "]:
        assert not is_printable(KEY_PRESS[key]), key


def test_key_event_fields():
    ev = KEY_PRESS["Enter"].to_event("keydown")
    assert ev.type == "keydown"
    assert ev.key == "Enter"
    assert ev.code == "Enter"
    assert ev.key_code == 13
    assert ev.bubbles is True


def test_stop_propagation():
    ev = Event("click")
    assert not ev.propagation_stopped
    ev.stop_propagation()
    assert ev.propagation_stopped
