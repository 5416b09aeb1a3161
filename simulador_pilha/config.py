"""Configuração de execução do simulador."""

from __future__ import annotations

import argparse
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

ANIM_MS = 500
HIGHLIGHT_MS = 300
MAX_STEPS = 10000
LOG_LEVEL = "INFO"
LOG_FILE: Optional[Path] = None
THEME = "light"

_THEMES = {"light", "dark"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_INT_FIELDS = {"ANIM_MS", "HIGHLIGHT_MS", "MAX_STEPS"}

_ENV_VARS: Dict[str, str] = {
    "ANIM_MS": "PDA_ANIM_MS",
    "HIGHLIGHT_MS": "PDA_HIGHLIGHT_MS",
    "MAX_STEPS": "PDA_MAX_STEPS",
    "LOG_LEVEL": "PDA_LOG_LEVEL",
    "LOG_FILE": "PDA_LOG_FILE",
    "THEME": "PDA_THEME",
}


@dataclass(frozen=True)
class ConfiguracaoSimulacao:
    ANIM_MS: int = ANIM_MS
    HIGHLIGHT_MS: int = HIGHLIGHT_MS
    MAX_STEPS: int = MAX_STEPS
    LOG_LEVEL: str = LOG_LEVEL
    LOG_FILE: Optional[Path] = LOG_FILE
    THEME: str = THEME

    def with_updates(self, overrides: Dict[str, Any]) -> "ConfiguracaoSimulacao":
        merged = asdict(self)
        merged.update(overrides)
        _validate_settings_dict(merged)
        return ConfiguracaoSimulacao(**merged)

    @property
    def max_passos(self) -> Optional[int]:
        return self.MAX_STEPS or None


def _coerce(name: str, value: Any) -> Any:
    if value is None:
        return None
    if name in _INT_FIELDS:
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid integer for {name}: {value!r}") from e
    if name == "LOG_FILE":
        return Path(value) if value else None
    if name == "LOG_LEVEL":
        return str(value).upper()
    return str(value)


def _validate_settings_dict(values: Dict[str, Any]) -> None:
    for name in _INT_FIELDS:
        if values[name] < 0:
            raise ValueError(f"{name} must be non-negative, got {values[name]}")
    if values["THEME"] not in _THEMES:
        raise ValueError(f"Unknown theme {values['THEME']!r}; expected one of {sorted(_THEMES)}")
    if values["LOG_LEVEL"] not in _LOG_LEVELS:
        raise ValueError(f"Unknown log level {values['LOG_LEVEL']!r}")


def _env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    overrides = {}
    for name, var in _ENV_VARS.items():
        if var in env and env[var] != "":
            overrides[name] = _coerce(name, env[var])
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="simulador_pilha", description="Simulador de Autômatos de Pilha")
    parser.add_argument("--anim-ms", dest="ANIM_MS", type=int, help="Atraso entre passos (ms)")
    parser.add_argument("--highlight-ms", dest="HIGHLIGHT_MS", type=int, help="Atraso entre fases de um passo (ms)")
    parser.add_argument("--max-steps", dest="MAX_STEPS", type=int, help="Limite de passos por execução (0 = sem limite)")
    parser.add_argument("--log-level", dest="LOG_LEVEL", help="Nível de log (DEBUG, INFO, ...)")
    parser.add_argument("--log-file", dest="LOG_FILE", help="Arquivo de log (padrão: stderr)")
    parser.add_argument("--theme", dest="THEME", help="Tema da interface (light ou dark)")
    parser.add_argument("--executar", dest="ARQUIVO", help="Executa sem interface o autômato salvo neste arquivo JSON")
    parser.add_argument("--palavra", dest="PALAVRA", help="Palavra de entrada (substitui a salva no arquivo)")
    return parser


def parse_args(args: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(args)


def load_runtime_settings(args: Optional[Sequence[str]] = None,
                          env: Optional[Mapping[str, str]] = None) -> ConfiguracaoSimulacao:
    """Carrega a configuração: padrões < variáveis de ambiente < argumentos de linha de comando."""
    env = os.environ if env is None else env
    namespace = parse_args(args)
    overrides = _env_overrides(env)
    for name in _ENV_VARS:
        value = getattr(namespace, name, None)
        if value is not None:
            overrides[name] = _coerce(name, value)
    return ConfiguracaoSimulacao().with_updates(overrides)
