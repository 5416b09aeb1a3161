"""Tests for the headless launcher and logging setup."""

from __future__ import annotations

import json
import logging

import pytest

from simulador_pilha import main as launcher
from simulador_pilha.config import ConfiguracaoSimulacao
from simulador_pilha.core.definicao import AutomatoPilha, snapshot_of_pda

from .pda_helpers import anbn_automato, epsilon_loop


@pytest.fixture
def quiet_logging(monkeypatch):
    monkeypatch.setattr(launcher, "configure_logging", lambda settings: launcher.logger)


@pytest.fixture
def restore_package_logger():
    package_logger = logging.getLogger("simulador_pilha")
    handlers, level, propagate = list(package_logger.handlers), package_logger.level, package_logger.propagate
    yield package_logger
    for handler in package_logger.handlers:
        if handler not in handlers:
            handler.close()
    package_logger.handlers = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate


def _write_snapshot(tmp_path, automato, word=""):
    automato.word = word
    path = tmp_path / "pda.json"
    path.write_text(snapshot_of_pda(automato, {"q0": (100, 100)}), encoding="utf-8")
    return path


def test_headless_accepts(tmp_path, capsys, quiet_logging):
    path = _write_snapshot(tmp_path, anbn_automato(), "aabb")
    assert launcher.main(["--executar", str(path)]) == launcher.EXIT_ACEITA
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "(q0, aabb, $)"
    assert "ACEITA: final state" in out


def test_headless_word_override_rejects(tmp_path, capsys, quiet_logging):
    path = _write_snapshot(tmp_path, anbn_automato(), "aabb")
    assert launcher.main(["--executar", str(path), "--palavra", "aab"]) == launcher.EXIT_REJEITADA
    assert "REJEITADA" in capsys.readouterr().out


def test_headless_step_limit(tmp_path, capsys, quiet_logging):
    path = tmp_path / "loop.json"
    definicao = epsilon_loop()
    automato = AutomatoPilha(list(definicao.states), list(definicao.transitions))
    path.write_text(automato.to_json(), encoding="utf-8")
    assert launcher.main(["--executar", str(path), "--max-steps", "5"]) == launcher.EXIT_INTERROMPIDA
    assert "INTERROMPIDA: step limit reached" in capsys.readouterr().out


def test_headless_missing_file(tmp_path, quiet_logging):
    assert launcher.main(["--executar", str(tmp_path / "nada.json")]) == launcher.EXIT_ERRO


def test_invalid_configuration(capsys, quiet_logging):
    assert launcher.main(["--theme", "neon", "--executar", "x.json"]) == launcher.EXIT_ERRO
    assert "Configuração inválida" in capsys.readouterr().err


def test_configure_logging_to_file(tmp_path, restore_package_logger):
    restore_package_logger.handlers = []
    log_file = tmp_path / "logs" / "sim.log"
    settings = ConfiguracaoSimulacao(LOG_LEVEL="DEBUG", LOG_FILE=log_file)
    configured = launcher.configure_logging(settings)
    logging.getLogger("simulador_pilha.core.simulador").debug("passo de teste")
    for handler in configured.handlers:
        handler.flush()
    assert configured.level == logging.DEBUG
    assert "passo de teste" in log_file.read_text(encoding="utf-8")


@pytest.mark.parametrize(
    "document",
    [
        {"automato": {"states": [{"name": "q0", "is_start": True}]}, "positions": {"q0": 5}},
        {"automato": {"states": [{"name": "q0", "is_start": True}], "word": 5}},
    ],
)
def test_headless_malformed_snapshot_is_an_error(tmp_path, quiet_logging, document):
    path = tmp_path / "ruim.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    assert launcher.main(["--executar", str(path)]) == launcher.EXIT_ERRO
