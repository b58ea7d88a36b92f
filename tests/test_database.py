"""
Tests for the assertion database and its JSON persistence.
"""

import json

import pytest

from prooftrans.core.tree import node, make_assrt, var, const
from prooftrans.catalogs import TransformationCatalogs
from prooftrans.closure import find_closure_rule
from prooftrans.database import AssertionDatabase
from prooftrans.domains.arithmetic import A, B, CC, PLUS, in_cc, make_assertions


class TestAssertionDatabase:
    def test_registration_order_is_kept(self, database):
        labels = [a.label for a in database]
        assert labels == [a.label for a in make_assertions()]
        assert labels[:3] == ["ax-mp", "pm3.2i", "3pm3.2i"]

    def test_lookup(self, database):
        assert "addcl" in database
        assert database.get("addcl").label == "addcl"
        assert database.get("nope") is None

    def test_symbols_from_assertions_and_declarations(self, database):
        symbols = database.symbols
        assert symbols["+"] == PLUS
        assert symbols["CC"] == CC
        assert symbols["X"].is_var

    def test_symbols_are_a_copy(self, database):
        database.symbols.pop("+")
        assert "+" in database.symbols

    def test_duplicate_label_rejected(self, database):
        with pytest.raises(ValueError, match="Duplicate"):
            database.add(make_assrt("addcl", [in_cc(A)], in_cc(A)))

    def test_redeclared_symbol_rejected(self, database):
        with pytest.raises(ValueError, match="redeclared"):
            database.add_symbol(var("+"))

    def test_same_symbol_twice_is_fine(self, database):
        database.add_symbol(const("+"))
        assert database.symbols["+"] == PLUS

    def test_add(self):
        db = AssertionDatabase()
        db.add(make_assrt("addcl", [in_cc(A), in_cc(B)], in_cc(node(PLUS, A, B))))
        assert len(db) == 1
        assert set(db.symbols) == {"e.", "A", "B", "CC", "+"}


class TestPersistence:
    def test_dict_layout(self, database):
        data = database.to_dict()
        assert data["symbols"]["+"] == ["const", "class"]
        assert data["symbols"]["A"] == ["var", "class"]
        addcl = next(a for a in data["assertions"] if a["label"] == "addcl")
        assert addcl["hyps"] == [["e.", ["A"], ["CC"]], ["e.", ["B"], ["CC"]]]
        assert addcl["conclusion"] == ["e.", ["+", ["A"], ["B"]], ["CC"]]

    def test_round_trip(self, database):
        restored = AssertionDatabase.from_dict(database.to_dict())
        assert restored.assertions == database.assertions
        assert restored.symbols == database.symbols

    def test_file_round_trip(self, database, tmp_path):
        path = tmp_path / "db.json"
        database.to_file(path)
        restored = AssertionDatabase.from_file(path)
        assert [a.label for a in restored] == [a.label for a in database]

    def test_restored_database_mines_the_same_rules(self, database, tmp_path):
        path = tmp_path / "db.json"
        database.to_file(path)
        original = TransformationCatalogs.build(database)
        restored = TransformationCatalogs.build(AssertionDatabase.from_file(path))
        assert (
            list(original.closure_info.closure_rules.rules)
            == list(restored.closure_info.closure_rules.rules)
        )
        assert original.eq_info.eq_map == restored.eq_info.eq_map

    def test_explicit_variable_list_survives(self, tmp_path):
        db = AssertionDatabase()
        db.add(make_assrt("t", [in_cc(A)], in_cc(node(PLUS, A, B)), mand_var_hyps=[A]))
        path = tmp_path / "db.json"
        db.to_file(path)
        restored = AssertionDatabase.from_file(path).get("t")
        assert restored.mand_var_hyps == (A,)
        assert (
            find_closure_rule(restored).reason
            == find_closure_rule(db.get("t")).reason
            == "argument B is not bound by a hypothesis"
        )

    def test_variable_list_is_written(self, database):
        eqtr = next(a for a in database.to_dict()["assertions"] if a["label"] == "eqtr")
        assert eqtr["mand_var_hyps"] == ["A", "B", "C"]

    def test_bare_string_leaves(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text(json.dumps({
            "symbols": {"e.": ["const", "wff"], "A": ["var", "class"], "CC": ["const", "class"]},
            "assertions": [{"label": "t", "hyps": [], "conclusion": ["e.", "A", "CC"]}],
        }))
        db = AssertionDatabase.from_file(path)
        assert db.get("t").conclusion == in_cc(A)
        assert db.get("t").log_hyps == ()

    def test_unknown_symbol_rejected(self):
        data = {
            "symbols": {"A": ["var", "class"]},
            "assertions": [{"label": "t", "hyps": [], "conclusion": ["e.", "A", "CC"]}],
        }
        with pytest.raises(ValueError, match="Unknown symbol"):
            AssertionDatabase.from_dict(data)

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError, match="unknown kind"):
            AssertionDatabase.from_dict({"symbols": {"A": ["wild", "class"]}})
