import pytest
from mpmath import almosteq, inf, isnan, mp, pi

from rpncalc.calculator import (Calculator, ConfigError, status_error,
                                status_ok, status_quit,
                                status_unknown_command)


def values(calc):
    return calc.stack.values()


@pytest.mark.parametrize("line, expected", [
    ("3 4 +", [7]),
    ("10 4 -", [6]),
    ("6 7 *", [42]),
    ("2 10 ^", [1024]),
    ("9 sqrt", [3]),
    ("5 inv", [-5]),
    ("5 neg", [-5]),
    ("5 pred", [4]),
    ("5 succ", [6]),
    ("1 2 swap", [2, 1]),
    ("1 2 dup", [1, 2, 2]),
    ("1 2 over", [1, 2, 1]),
    ("1 2 drop", [1]),
    ("1 2 depth", [1, 2, 2]),
    ("1 2 3 roll", [3, 1, 2]),
    ("1 2 3 clr", []),
])
def test_builtins(calc, line, expected):
    assert calc.submit(line) == status_ok
    assert values(calc) == expected


def test_one_token_per_submit(calc):
    for token in ("3", "4", "+"):
        calc.text_box = token
        assert calc.submit() == status_ok
        assert calc.text_box == ""
    assert values(calc) == [7]


def test_names_are_case_insensitive(calc):
    calc.submit("9 SQRT 2 Swap")
    assert values(calc) == [2, 3]
    calc.submit("clr PI")
    assert calc.stack[0] == +pi


def test_not_enough_values(calc, err):
    assert calc.submit("1 swap") == status_error
    assert values(calc) == [1]
    assert calc.text_box == "swap"
    assert "'swap' needs 2 values (stack has 1)" in err.getvalue()


def test_unknown_operation_keeps_rest_of_line(calc):
    assert calc.submit("3 4 frob 5 +") == status_unknown_command
    assert values(calc) == [3, 4]
    assert calc.text_box == "frob 5 +"
    assert calc.errors == ["Unknown operation 'frob'"]


def test_empty_submit_repeats_previous_operation(calc):
    calc.submit("1 2 3 +")
    assert values(calc) == [1, 5]
    assert calc.submit("") == status_ok
    assert values(calc) == [6]
    assert calc.previous == "+"


def test_empty_submit_after_number_does_nothing(calc):
    calc.submit("5")
    calc.submit("   ")
    assert values(calc) == [5]


def test_empty_submit_with_nothing_before(calc):
    assert calc.submit("") == status_ok
    assert values(calc) == []


def test_failed_token_is_not_previous(calc):
    calc.submit("1 2 3 +")
    assert calc.submit("frob") == status_unknown_command
    calc.clear_text_box()
    calc.submit("")
    assert values(calc) == [6]


def test_divide_by_zero(calc):
    calc.submit("1 0 /")
    assert values(calc) == [inf]
    calc.submit("clr -1 0 /")
    assert values(calc) == [-inf]
    assert calc.submit("clr 0 0 /") == status_error
    assert values(calc) == [0, 0]


def test_divide_by_zero_not_allowed(make_calc):
    calc = make_calc(allow_divide_by_zero=False)
    assert calc.submit("1 0 /") == status_error
    assert "Can't divide by zero" in calc.errors[-1]


def test_square_root_of_negative_is_complex(calc):
    calc.submit("-4 sqrt")
    assert calc.Format(calc.stack[0]) == "(0 + 2j)"


def test_angle_modes(calc):
    calc.submit("deg 90 sin")
    assert almosteq(calc.stack[0], 1)
    calc.submit("clr 1 asin")
    assert almosteq(calc.stack[0], 90)
    calc.submit("clr rad 180 d2r")
    assert almosteq(calc.stack[0], pi)


def test_base_lua_operations(calc):
    calc.submit("27 3 root")
    assert almosteq(calc.stack[0], 3, rel_eps=1e-12)
    calc.submit("clr pi r2d")
    assert almosteq(calc.stack[0], 180, rel_eps=1e-12)
    assert calc.operations.lookup("root").source == "lua"


def test_base_lua_can_be_skipped(make_calc):
    calc = make_calc(load_base=False)
    assert "root" not in calc.operations
    assert calc.submit("8 3 root") == status_unknown_command


def test_precision_and_digits(calc):
    calc.submit("40 prec")
    assert mp.dps == 40
    assert calc.cfg["prec"] == 40
    calc.submit("5 digits 1 3 /")
    assert calc.Format(calc.stack[0]) == "0.33333"
    assert calc.submit("0 prec") == status_error


def test_reset(calc):
    calc.submit("1 2 deg")
    calc.text_box = "3 +"
    calc.reset()
    assert values(calc) == []
    assert calc.text_box == ""
    assert calc.previous == ""
    assert calc.cfg["angle_mode"] == "rad"


def test_clear_text_box(calc):
    calc.text_box = "12"
    calc.clear_text_box()
    assert calc.text_box == ""


def test_quit(calc):
    assert calc.submit("1 quit 2") == status_quit
    assert calc.finished
    assert values(calc) == [1]


def test_help_for_one_operation(calc, out):
    calc.submit("help +")
    text = out.getvalue()
    assert "+ (takes 2, builtin)" in text
    assert "Usage: y x +" in text


def test_help_lists_operations(calc, out):
    calc.submit("?")
    text = out.getvalue()
    for name in ("sqrt", "swap", "root", "r2d"):
        assert name in text.split()


def test_help_unknown(calc, out):
    calc.submit("help frob")
    assert "unknown function: frob" in out.getvalue()


def test_show_config(calc, out):
    calc.submit("cfg")
    assert "angle_mode" in out.getvalue()


def test_display_stack(calc, out):
    calc.submit("1 2.5")
    calc.DisplayStack()
    assert out.getvalue() == " 1: 1\n 0: 2.5\n"


def test_environment_line_runs_at_start(make_calc):
    calc = make_calc(environ={"RPNCALCINIT": "2 3 deg"})
    assert values(calc) == [2, 3]
    assert calc.cfg["angle_mode"] == "deg"


def test_bad_settings(make_calc):
    with pytest.raises(ConfigError):
        make_calc(prec=0)
    with pytest.raises(ConfigError):
        make_calc(angle_mode="grad")


def test_history(calc):
    calc.cfg["history_size"] = 3
    for line in ("1", "2", "2", "3", "+"):
        calc.submit(line)
    assert calc.history == ["2", "3", "+"]


def test_history_file(make_calc, tmp_path):
    calc = make_calc()
    calc.submit("1 2")
    calc.submit("+")
    calc.SaveHistory()
    assert (tmp_path / "history").read_text() == "1 2\n+\n"
    other = make_calc()
    other.LoadHistory()
    assert other.history == ["1 2", "+"]


def test_history_not_persisted(make_calc, tmp_path):
    calc = make_calc(persist_history=False)
    calc.submit("1")
    calc.SaveHistory()
    assert not (tmp_path / "history").exists()


def test_user_config_is_read_from_config_dir(tmp_path, display):
    (tmp_path / "config.py").write_text(
        "register('sp', 2, lambda a, b: (a + b, a*b))\n")
    calc = Calculator(display, environ={"RPNCALC_CONFIG_DIR": str(tmp_path)})
    calc.submit("3 4 sp")
    assert calc.stack.values() == [7, 12]


def test_default_config_only_skips_user_files(tmp_path, display):
    (tmp_path / "config.py").write_text("register('one', 0, lambda: 1)\n")
    calc = Calculator(display, use_default_config_only=True, environ={},
                      settings={"config_dir": str(tmp_path)})
    assert "one" not in calc.operations
    assert "root" in calc.operations


def test_nan_divided_by_zero(calc):
    assert calc.submit("nan 0 /") == status_ok
    assert isnan(calc.stack[0])
    assert calc.errors == []


def test_help_on_help(calc, out):
    calc.submit("help help")
    text = out.getvalue()
    assert "help (takes a name, builtin)" in text
    assert "Usage: help [function]" in text
    assert "unknown function" not in text


def test_help_lists_itself(calc, out):
    calc.submit("help")
    assert "help" in out.getvalue().split()
