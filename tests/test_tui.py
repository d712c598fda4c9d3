import curses

import pytest

from rpncalc.tui import (App, BACKSPACE, CLEAR_TEXT_BOX, HISTORY_DOWN,
                         HISTORY_UP, INPUT, QUIT, RESET, SUBMIT, TICK,
                         StatusDisplay, ctrl, key_to_event)


@pytest.mark.parametrize("key, event", [
    ("7", (INPUT, "7")),
    ("+", (INPUT, "+")),
    ("\n", (SUBMIT, None)),
    ("\r", (SUBMIT, None)),
    (ctrl("d"), (QUIT, None)),
    (ctrl("w"), (CLEAR_TEXT_BOX, None)),
    (ctrl("l"), (RESET, None)),
    ("\x7f", (INPUT, BACKSPACE)),
    (curses.KEY_BACKSPACE, (INPUT, BACKSPACE)),
    (curses.KEY_ENTER, (SUBMIT, None)),
    (curses.KEY_UP, (HISTORY_UP, None)),
    (curses.KEY_DOWN, (HISTORY_DOWN, None)),
    (curses.KEY_RESIZE, (TICK, None)),
    (curses.KEY_LEFT, (INPUT, curses.KEY_LEFT)),
])
def test_key_to_event(key, event):
    assert key_to_event(key) == event


@pytest.fixture
def app(make_calc):
    return App(make_calc(display=StatusDisplay()))


def type_line(app, text):
    for c in text:
        assert app.handle(key_to_event(c))
    return app.handle((SUBMIT, None))


def test_typing_and_submitting(app):
    type_line(app, "3 4")
    assert app.calc.text_box == ""
    type_line(app, "+")
    assert app.stack_lines(10) == ["7"]
    assert app.status() == ""


def test_backspace(app):
    for c in "123":
        app.handle((INPUT, c))
    app.handle((INPUT, BACKSPACE))
    assert app.calc.text_box == "12"


def test_special_keys_are_ignored(app):
    app.handle((INPUT, "1"))
    assert app.handle((INPUT, curses.KEY_LEFT))
    app.handle((INPUT, "\t"))
    assert app.calc.text_box == "1"


def test_error_is_shown_in_status(app):
    type_line(app, "1 swap")
    assert app.status() == "'swap' needs 2 values (stack has 1)"
    assert app.display.is_error
    assert app.calc.text_box == "swap"
    # The next key clears the message
    app.handle((INPUT, "x"))
    assert app.status() == ""
    assert app.calc.text_box == "swapx"


def test_clear_text_box(app):
    app.handle((INPUT, "9"))
    app.handle((CLEAR_TEXT_BOX, None))
    assert app.calc.text_box == ""


def test_reset(app):
    type_line(app, "1 2 3")
    app.handle((INPUT, "4"))
    app.handle((RESET, None))
    assert app.stack_lines(10) == []
    assert app.calc.text_box == ""


def test_enter_repeats(app):
    type_line(app, "1 1 1 +")
    app.handle((SUBMIT, None))
    assert app.calc.stack.values() == [3]


def test_quit(app):
    assert not app.handle((QUIT, None))
    assert not type_line(app, "quit")


def test_tick_changes_nothing(app):
    app.handle((INPUT, "5"))
    assert app.handle((TICK, None))
    assert app.calc.text_box == "5"


def test_stack_lines_show_top(app):
    type_line(app, "1 2 3 4 5")
    assert app.stack_lines(3) == ["3", "4", "5"]
    assert app.stack_lines(0) == []


def test_help_takes_over_stack_box(app):
    type_line(app, "1 help +")
    lines = app.stack_lines(20)
    assert lines[0] == "+ (takes 2, builtin)"
    assert app.status() == ""
    app.handle((INPUT, "2"))
    assert app.stack_lines(20) == ["1"]


def test_history(app):
    type_line(app, "1")
    type_line(app, "2 +")
    app.handle((INPUT, "7"))
    app.handle((HISTORY_UP, None))
    assert app.calc.text_box == "2 +"
    app.handle((HISTORY_UP, None))
    assert app.calc.text_box == "1"
    app.handle((HISTORY_UP, None))
    assert app.calc.text_box == "1"
    app.handle((HISTORY_DOWN, None))
    assert app.calc.text_box == "2 +"
    app.handle((HISTORY_DOWN, None))
    assert app.calc.text_box == "7"


def test_status_display_log(tmp_path):
    display = StatusDisplay()
    with open(tmp_path / "log", "w") as log:
        display.logon(log)
        display.msg("hello")
        display.err("oops")
        display.logoff()
    assert display.lines == ["hello", "oops"]
    assert display.is_error
    text = (tmp_path / "log").read_text()
    assert "hello\noops\n" in text
