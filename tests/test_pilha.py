"""Tests for the symbol stack."""

from __future__ import annotations

from simulador_pilha.core.pilha import MARCADOR_FUNDO, Pilha


def test_new_stack_is_empty():
    stack = Pilha()
    assert stack.is_empty
    assert stack.size == 0
    assert stack.peek() is None
    assert stack.contents() == ()


def test_push_pop_is_lifo():
    stack = Pilha()
    for sym in "XYZ":
        stack.push(sym)
    assert stack.peek() == "Z"
    assert stack.pop() == "Z"
    assert stack.pop() == "Y"
    assert stack.contents() == ("X",)


def test_pop_on_empty_stack_returns_none():
    stack = Pilha()
    assert stack.pop() is None
    assert stack.is_empty


def test_contents_are_bottom_to_top_snapshot():
    stack = Pilha()
    stack.push(MARCADOR_FUNDO)
    stack.push("A")
    snapshot = stack.contents()
    stack.push("B")
    assert snapshot == ("$", "A")
    assert stack.contents() == ("$", "A", "B")


def test_reset_clears_everything():
    stack = Pilha()
    stack.push("A")
    stack.push("B")
    stack.reset()
    assert stack.is_empty
    assert len(stack) == 0


def test_only_marker_and_membership():
    stack = Pilha()
    assert not stack.only_marker()
    stack.push(MARCADOR_FUNDO)
    assert stack.only_marker()
    assert MARCADOR_FUNDO in stack
    stack.push("A")
    assert not stack.only_marker()
