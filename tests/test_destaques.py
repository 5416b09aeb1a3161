"""Tests for the observer-side highlight map."""

from __future__ import annotations

from simulador_pilha.core.eventos import Observadores
from simulador_pilha.core.execucao import Driver
from simulador_pilha.gui.destaques import (
    ACEITA,
    COR_ATIVO,
    COR_DISPARADA,
    COR_NORMAL,
    COR_VISITADO,
    INTERROMPIDA,
    REJEITADA,
    MapaDestaques,
)

from .pda_helpers import anbn, epsilon_loop


def _watched(definicao):
    observadores = Observadores()
    destaques = MapaDestaques()
    observadores.subscribe(destaques)
    return Driver(definicao, observadores), destaques


def test_highlights_follow_an_accepted_run():
    driver, destaques = _watched(anbn("ab"))
    driver.executar()
    assert destaques.verdict == ACEITA
    assert destaques.active_state == "q2"
    assert destaques.visited_states == {"q0", "q1", "q2"}
    assert destaques.fired_transitions == {"t0", "t1", "t3"}
    assert ("t1", 0) in destaques.correct_operations
    assert destaques.state_colors("q2") == COR_ATIVO
    assert destaques.state_colors("q0") == COR_VISITADO
    assert destaques.transition_color("t3") == COR_DISPARADA
    assert destaques.transition_color("t0") == "black"


def test_rejection_and_reset_clear():
    driver, destaques = _watched(anbn("ba"))
    driver.executar()
    assert destaques.verdict == REJEITADA
    driver.reset()
    assert destaques.summary() == {
        "active_state": None,
        "visited_states": [],
        "fired_transitions": [],
        "verdict": None,
    }
    assert destaques.state_colors("q0") == COR_NORMAL


def test_stop_marks_interrupted():
    driver, destaques = _watched(epsilon_loop())
    driver.max_passos = 3
    driver.executar()
    assert destaques.verdict == INTERROMPIDA
    assert destaques.active_state is None


def test_definition_carries_no_presentation_state():
    definicao = anbn("ab")
    driver, _ = _watched(definicao)
    driver.executar()
    assert definicao == anbn("ab")
