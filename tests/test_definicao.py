"""Tests for the automaton definition model and its JSON persistence."""

from __future__ import annotations

import json
import logging

import pytest

from simulador_pilha.core.definicao import (
    AutomatoPilha,
    DefinicaoInvalida,
    DefinicaoPDA,
    Estado,
    Operacao,
    restore_from_pda_snapshot,
    snapshot_of_pda,
)
from simulador_pilha.core.pilha import EPSILON

from .pda_helpers import anbn_automato


def test_operation_label_parsing():
    op = Operacao.parse("a, Z / XY")
    assert (op.input_symbol, op.pop_symbol, op.push_symbols) == ("a", "Z", "XY")
    assert str(op) == "a, Z / XY"


@pytest.mark.parametrize("alias", ["", "&", "ε", "epsilon"])
def test_epsilon_aliases_normalise(alias):
    op = Operacao(alias, alias, alias)
    assert op.input_symbol == op.pop_symbol == op.push_symbols == EPSILON


def test_malformed_label_raises():
    with pytest.raises(DefinicaoInvalida):
        Operacao.parse("a Z XY")


def test_add_state_rejects_duplicates_and_keeps_single_start():
    pda = AutomatoPilha()
    pda.add_state("q0", is_start=True)
    pda.add_state("q1", is_start=True)
    assert pda.start_state == "q1"
    with pytest.raises(DefinicaoInvalida):
        pda.add_state("q0")


def test_add_transition_requires_known_states():
    pda = AutomatoPilha()
    pda.add_state("q0")
    with pytest.raises(DefinicaoInvalida):
        pda.add_transition("q0", "qx", ["a, ε / ε"])


def test_transition_ids_are_unique_and_ordered():
    pda = anbn_automato()
    ids = [t.id for t in pda.transitions]
    assert ids == ["t0", "t1", "t2", "t3", "t4"]
    pda.remove_transition("t1")
    new = pda.add_transition("q0", "q1", ["b, A / ε"])
    assert new.id not in {"t0", "t2", "t3", "t4"}


def test_rename_state_updates_transitions():
    pda = anbn_automato()
    pda.rename_state("q1", "meio")
    assert pda.has_state("meio")
    assert not pda.has_state("q1")
    assert all("q1" not in (t.source, t.target) for t in pda.transitions)
    assert len(pda.transitions_between("meio", "meio")) == 1


def test_rename_to_existing_name_fails():
    pda = anbn_automato()
    with pytest.raises(DefinicaoInvalida):
        pda.rename_state("q0", "q2")


def test_remove_state_drops_its_transitions():
    pda = anbn_automato()
    pda.remove_state("q1")
    assert [t.id for t in pda.transitions] == ["t0", "t4"]


def test_set_start_and_toggle_accepting():
    pda = anbn_automato()
    pda.set_start("q1")
    assert pda.start_state == "q1"
    assert pda.toggle_accepting("q1") is True
    assert set(pda.final_states) == {"q1", "q2"}


def test_set_operations_with_empty_list_removes_transition():
    pda = anbn_automato()
    pda.set_operations("t0", ["a, ε / AA", "c, ε / ε"])
    assert len(pda.transition("t0").operations) == 2
    pda.set_operations("t0", [])
    with pytest.raises(DefinicaoInvalida):
        pda.transition("t0")


def test_snapshot_is_immutable_copy():
    pda = anbn_automato()
    snap = pda.snapshot("ab")
    pda.add_state("q9")
    assert snap.word == "ab"
    assert all(st.name != "q9" for st in snap.states)
    assert [t.id for t in snap.transitions_from("q0")] == ["t0", "t1", "t4"]


def test_start_state_fallback_logs_warning(caplog):
    definicao = DefinicaoPDA((Estado("a"), Estado("b")), ())
    with caplog.at_level(logging.WARNING, logger="simulador_pilha.core.definicao"):
        assert definicao.start_state().name == "a"
    assert "Nenhum estado inicial" in caplog.text


def test_first_flagged_start_state_wins():
    definicao = DefinicaoPDA((Estado("a"), Estado("b", is_start=True), Estado("c", is_start=True)), ())
    assert definicao.start_state().name == "b"


def test_empty_definition_has_no_start_state():
    with pytest.raises(DefinicaoInvalida):
        DefinicaoPDA((), ()).start_state()


def test_json_round_trip_preserves_order_and_word():
    pda = anbn_automato()
    pda.word = "aabb"
    restored = AutomatoPilha.from_json(pda.to_json())
    assert restored == pda


def test_from_json_rejects_garbage():
    with pytest.raises(DefinicaoInvalida):
        AutomatoPilha.from_json("{not json")
    with pytest.raises(DefinicaoInvalida):
        AutomatoPilha.from_json(json.dumps({"states": [{"nome": "q0"}]}))


def test_editor_snapshot_carries_positions():
    pda = anbn_automato()
    text = snapshot_of_pda(pda, {"q0": (10, 20), "q1": (30.5, 40)})
    restored, positions = restore_from_pda_snapshot(text)
    assert restored == pda
    assert positions == {"q0": (10, 20), "q1": (30.5, 40)}


def test_restore_accepts_plain_automaton_document():
    pda = anbn_automato()
    restored, positions = restore_from_pda_snapshot(pda.to_json())
    assert restored == pda
    assert positions == {}


def test_multi_character_input_symbol_is_rejected():
    with pytest.raises(DefinicaoInvalida, match="único caractere"):
        Operacao("ab", "ε", "ε")
    with pytest.raises(DefinicaoInvalida):
        Operacao.parse("aa, Z / XY")


def test_malformed_positions_raise():
    text = json.dumps({"automato": anbn_automato().to_dict(), "positions": {"q0": 5}})
    with pytest.raises(DefinicaoInvalida, match="Posições"):
        restore_from_pda_snapshot(text)


def test_non_text_word_raises():
    with pytest.raises(DefinicaoInvalida, match="palavra"):
        AutomatoPilha.from_dict({"states": [{"name": "q0"}], "word": 5})
