"""
Eventos de observação emitidos pelo simulador.

O núcleo nunca guarda flags de apresentação; quem desenha o autômato
assina estes eventos e deriva seus próprios destaques.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecucaoIniciada:
    word: str


@dataclass(frozen=True)
class EstadoAtivado:
    state: str


@dataclass(frozen=True)
class TransicaoDisparada:
    transition_id: str
    operation_index: int


@dataclass(frozen=True)
class PassoConcluido:
    outcome: Any


@dataclass(frozen=True)
class ExecucaoAceita:
    reason: str


@dataclass(frozen=True)
class ExecucaoRejeitada:
    reason: str


@dataclass(frozen=True)
class ExecucaoParada:
    reason: str


@dataclass(frozen=True)
class SimulacaoReiniciada:
    pass


Ouvinte = Callable[[object], None]


class Observadores:
    """Registro de ouvintes; cada evento é entregue na ordem de inscrição."""

    def __init__(self):
        self._listeners: List[Ouvinte] = []

    def subscribe(self, listener: Ouvinte) -> Callable[[], None]:
        """Inscreve `listener` e devolve uma função que cancela a inscrição."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def emit(self, event):
        logger.debug("Evento: %s", event)
        for listener in list(self._listeners):
            listener(event)

    def __len__(self):
        return len(self._listeners)
