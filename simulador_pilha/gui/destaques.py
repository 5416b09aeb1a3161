"""
Destaques visuais derivados dos eventos da simulação.

Mantém, fora do modelo do autômato, as cores que o editor usa para mostrar
o estado ativo, os estados já visitados, as transições disparadas e as
operações corretas.
"""
from typing import Dict, Optional, Set, Tuple

from ..core.eventos import (
    EstadoAtivado,
    ExecucaoAceita,
    ExecucaoIniciada,
    ExecucaoParada,
    ExecucaoRejeitada,
    SimulacaoReiniciada,
    TransicaoDisparada,
)

ACEITA = "ACEITA"
REJEITADA = "REJEITADA"
INTERROMPIDA = "INTERROMPIDA"

COR_ATIVO = ("#e0f2fe", "#0284c7")
COR_VISITADO = ("#f0fdf4", "#16a34a")
COR_NORMAL = ("white", "black")
COR_DISPARADA = "#16a34a"
COR_RESULTADO = {ACEITA: "#16a34a", REJEITADA: "#dc2626", INTERROMPIDA: "#d97706"}


class MapaDestaques:
    def __init__(self):
        self.clear()

    def clear(self):
        self.active_state: Optional[str] = None
        self.visited_states: Set[str] = set()
        self.fired_transitions: Set[str] = set()
        self.correct_operations: Set[Tuple[str, int]] = set()
        self.last_transition: Optional[str] = None
        self.verdict: Optional[str] = None
        self.reason: Optional[str] = None

    def __call__(self, event):
        if isinstance(event, (ExecucaoIniciada, SimulacaoReiniciada, ExecucaoParada)):
            self.clear()
            if isinstance(event, ExecucaoParada):
                self.verdict, self.reason = INTERROMPIDA, event.reason
        elif isinstance(event, EstadoAtivado):
            self.active_state = event.state
            self.visited_states.add(event.state)
        elif isinstance(event, TransicaoDisparada):
            self.fired_transitions.add(event.transition_id)
            self.correct_operations.add((event.transition_id, event.operation_index))
            self.last_transition = event.transition_id
        elif isinstance(event, ExecucaoAceita):
            self.verdict, self.reason = ACEITA, event.reason
        elif isinstance(event, ExecucaoRejeitada):
            self.verdict, self.reason = REJEITADA, event.reason

    def state_colors(self, name: str) -> Tuple[str, str]:
        """(preenchimento, contorno) para o estado."""
        if name == self.active_state:
            return COR_ATIVO
        if name in self.visited_states:
            return COR_VISITADO
        return COR_NORMAL

    def transition_color(self, transition_id: str) -> str:
        return COR_DISPARADA if transition_id == self.last_transition else "black"

    def summary(self) -> Dict[str, object]:
        return {
            "active_state": self.active_state,
            "visited_states": sorted(self.visited_states),
            "fired_transitions": sorted(self.fired_transitions),
            "verdict": self.verdict,
        }
