from rpncalc.operations import (BUILTIN, LUA, PYTHON, Operation,
                                OperationTable)


def test_names_are_case_insensitive():
    table = OperationTable()
    table.add("NeG2", 1, lambda x: -x)
    assert table.lookup("neg2").name == "neg2"
    assert table.lookup("NEG2") is table.lookup("neg2")
    assert "Neg2" in table
    assert table.lookup("neg3") is None


def test_python_beats_lua_in_either_order():
    table = OperationTable()
    assert table.register(Operation("twice", 1, lambda x: 2*x, LUA))
    assert table.register(Operation("twice", 1, lambda x: 3*x, PYTHON))
    assert table.lookup("twice").source == PYTHON

    table = OperationTable()
    assert table.register(Operation("twice", 1, lambda x: 3*x, PYTHON))
    assert not table.register(Operation("TWICE", 1, lambda x: 2*x, LUA))
    assert table.lookup("twice")(5) == 15


def test_extensions_replace_builtins():
    table = OperationTable()
    table.add("neg", 1, lambda x: -x)
    assert table.add("neg", 1, lambda x: 0, LUA)
    assert table.lookup("neg").source == LUA
    assert not table.add("neg", 1, lambda x: -x, BUILTIN)


def test_same_source_redefines():
    table = OperationTable()
    table.add("f", 1, lambda x: 1, LUA)
    table.add("f", 2, lambda x, y: 2, LUA)
    assert table.lookup("f").arity == 2


def test_remove_source():
    table = OperationTable()
    table.add("a", 0, lambda: 1)
    table.add("b", 0, lambda: 2, LUA)
    table.add("c", 0, lambda: 3, PYTHON)
    table.remove_source(LUA)
    assert table.names() == ["a", "c"]
    assert len(table) == 2


def test_doc_defaults_to_docstring():
    def f(x):
        "Double x"
        return 2*x
    assert Operation("f", 1, f).doc == "Double x"
    assert Operation("f", 1, f, doc="other").doc == "other"


def test_removing_a_source_uncovers_hidden_definition():
    table = OperationTable()
    table.add("succ", 1, lambda x: x + 1)
    table.add("succ", 1, lambda x: x + 2, LUA)
    table.add("succ", 1, lambda x: x + 3, PYTHON)
    assert table.lookup("succ")(0) == 3
    table.remove_source(PYTHON)
    assert table.lookup("succ")(0) == 2
    table.remove_source(LUA)
    assert table.lookup("succ").source == BUILTIN
    assert table.names() == ["succ"]
