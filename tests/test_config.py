"""Tests for the runtime configuration loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from simulador_pilha import config


def test_defaults():
    conf = config.load_runtime_settings(args=[], env={})
    assert conf.ANIM_MS == 500
    assert conf.HIGHLIGHT_MS == 300
    assert conf.MAX_STEPS == 10000
    assert conf.max_passos == 10000
    assert conf.LOG_LEVEL == "INFO"
    assert conf.LOG_FILE is None
    assert conf.THEME == "light"


def test_env_overrides_take_effect():
    conf = config.load_runtime_settings(args=[], env={"PDA_ANIM_MS": "50", "PDA_THEME": "dark", "PDA_LOG_LEVEL": "debug"})
    assert conf.ANIM_MS == 50
    assert conf.THEME == "dark"
    assert conf.LOG_LEVEL == "DEBUG"


def test_cli_overrides_take_precedence():
    conf = config.load_runtime_settings(args=["--anim-ms", "10"], env={"PDA_ANIM_MS": "50"})
    assert conf.ANIM_MS == 10


def test_zero_max_steps_means_unlimited():
    conf = config.load_runtime_settings(args=["--max-steps", "0"], env={})
    assert conf.max_passos is None


def test_log_file_becomes_path(tmp_path):
    target = tmp_path / "sim.log"
    conf = config.load_runtime_settings(args=[], env={"PDA_LOG_FILE": str(target)})
    assert conf.LOG_FILE == Path(target)


def test_invalid_values_raise():
    with pytest.raises(ValueError, match="non-negative"):
        config.load_runtime_settings(args=["--highlight-ms", "-1"], env={})
    with pytest.raises(ValueError, match="Unknown theme"):
        config.load_runtime_settings(args=[], env={"PDA_THEME": "neon"})
    with pytest.raises(ValueError, match="Invalid integer"):
        config.load_runtime_settings(args=[], env={"PDA_MAX_STEPS": "muitos"})


def test_with_updates_validates():
    with pytest.raises(ValueError):
        config.ConfiguracaoSimulacao().with_updates({"LOG_LEVEL": "LOUD"})
