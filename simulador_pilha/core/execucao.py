"""
Controle de uma execução completa: fases, ritmo entre passos e cancelamento.

O ritmo (atrasos) serve apenas para que um observador externo acompanhe a
simulação; com atrasos zero o resultado é o mesmo.
"""
import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .definicao import DefinicaoPDA
from .eventos import ExecucaoIniciada, ExecucaoParada, Observadores, SimulacaoReiniciada
from .simulador import Aceita, Configuracao, ExecutorPasso, Moveu, StepOutcome

logger = logging.getLogger(__name__)

MOTIVO_PARADA = "stopped"
MOTIVO_LIMITE = "step limit reached"


class Fase(enum.Enum):
    NAO_INICIADA = "not started"
    EXECUTANDO = "running"
    FINALIZADA = "finished"
    PARADA = "stopped"


class FaseInvalida(RuntimeError):
    """Operação do driver chamada em uma fase que não a permite."""


class Driver:
    """
    Máquina de estados da simulação: NAO_INICIADA -> EXECUTANDO -> FINALIZADA,
    com PARADA alcançável por `stop()` durante a execução.
    """

    def __init__(self, definicao: DefinicaoPDA, observadores: Optional[Observadores] = None,
                 max_passos: Optional[int] = None):
        self.observadores = observadores if observadores is not None else Observadores()
        self.executor = ExecutorPasso(definicao, self.observadores)
        self.max_passos = max_passos or None
        self.fase = Fase.NAO_INICIADA
        self.passos = 0
        self.stop_reason: Optional[str] = None
        self.outcomes: List[StepOutcome] = []
        self.historico: List[Configuracao] = [self.executor.configuration()]

    @property
    def definicao(self) -> DefinicaoPDA:
        return self.executor.definicao

    @property
    def sim(self):
        return self.executor.sim

    @property
    def stack(self):
        return self.executor.stack

    @property
    def running(self) -> bool:
        return self.fase is Fase.EXECUTANDO

    @property
    def verdict(self) -> Optional[StepOutcome]:
        """Último resultado se a execução terminou com veredito, senão None."""
        if self.fase is Fase.FINALIZADA and self.outcomes:
            return self.outcomes[-1]
        return None

    def _initialize(self):
        self.executor.initialize()
        self.passos = 0
        self.stop_reason = None
        self.outcomes = []
        self.historico = [self.executor.configuration()]

    def reset(self):
        """Reinicializa estado e pilha a partir de qualquer fase."""
        self._initialize()
        self.fase = Fase.NAO_INICIADA
        self.observadores.emit(SimulacaoReiniciada())

    def start(self):
        """Prepara uma nova execução. Reentrante a partir de qualquer fase exceto EXECUTANDO."""
        if self.fase is Fase.EXECUTANDO:
            raise FaseInvalida("A simulação já está em execução.")
        self._initialize()
        self.sim.started = True
        self.fase = Fase.EXECUTANDO
        logger.info("Simulação iniciada para %r a partir de '%s'.",
                    self.definicao.word, self.sim.current_state.name)
        self.observadores.emit(ExecucaoIniciada(self.definicao.word))

    def stop(self, reason: str = MOTIVO_PARADA):
        if self.fase is not Fase.EXECUTANDO:
            logger.debug("stop() ignorado na fase %s", self.fase.value)
            return
        self.sim.started = False
        self.sim.finished = True
        self.stack.reset()
        self.stop_reason = reason
        self.fase = Fase.PARADA
        logger.info("Simulação interrompida: %s", reason)
        self.observadores.emit(ExecucaoParada(reason))

    def passo(self, pausa: Optional[Callable[[], None]] = None) -> Optional[StepOutcome]:
        """Executa exatamente um passo enquanto a fase for EXECUTANDO."""
        if self.fase is not Fase.EXECUTANDO:
            return None
        if self.max_passos is not None and self.passos >= self.max_passos:
            logger.warning("Limite de %d passos atingido; interrompendo.", self.max_passos)
            self.stop(MOTIVO_LIMITE)
            return None

        outcome = self.executor.step(pausa)
        if outcome is None:
            return None
        self.passos += 1
        self.outcomes.append(outcome)
        self.historico.append(self.executor.configuration())
        if not isinstance(outcome, Moveu):
            self.fase = Fase.FINALIZADA
        return outcome

    def executar(self, atraso_passo: float = 0.0, atraso_destaque: float = 0.0,
                 dormir: Callable[[float], None] = time.sleep) -> Optional[StepOutcome]:
        """
        Inicia (se necessário) e executa passos até a fase deixar EXECUTANDO.
        `stop()` chamado por um observador é atendido no próximo ponto de suspensão.
        Devolve o veredito, ou None se a execução foi interrompida.
        """
        if self.fase is not Fase.EXECUTANDO:
            self.start()

        pausa = (lambda: dormir(atraso_destaque)) if atraso_destaque > 0 else None
        while self.fase is Fase.EXECUTANDO:
            self.passo(pausa)
            if self.fase is Fase.EXECUTANDO and atraso_passo > 0:
                dormir(atraso_passo)
        return self.verdict


@dataclass
class ResultadoExecucao:
    accepted: Optional[bool]
    reason: str
    outcomes: List[StepOutcome] = field(default_factory=list)
    historico: List[Configuracao] = field(default_factory=list)


def executar_palavra(definicao: DefinicaoPDA, word: Optional[str] = None,
                     max_passos: Optional[int] = None,
                     observadores: Optional[Observadores] = None) -> ResultadoExecucao:
    """Executa o autômato sem atrasos e devolve o veredito e o histórico."""
    if word is not None:
        definicao = definicao.with_word(word)
    driver = Driver(definicao, observadores, max_passos=max_passos)
    verdict = driver.executar()
    if verdict is None:
        return ResultadoExecucao(None, driver.stop_reason or MOTIVO_PARADA,
                                 driver.outcomes, driver.historico)
    return ResultadoExecucao(isinstance(verdict, Aceita), verdict.reason,
                             driver.outcomes, driver.historico)
