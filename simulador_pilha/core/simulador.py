"""
Execução passo a passo de um Autômato de Pilha.

A escolha de transição é determinística: percorre as transições que saem do
estado atual na ordem em que foram declaradas e, dentro de cada uma, as
operações na ordem da lista; a primeira cuja guarda casa é disparada.
Não há exploração de ramos nem retrocesso.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Tuple, Union

from .definicao import DefinicaoPDA, Estado, Operacao, Transicao
from .eventos import (
    EstadoAtivado,
    ExecucaoAceita,
    ExecucaoRejeitada,
    Observadores,
    PassoConcluido,
    TransicaoDisparada,
)
from .pilha import EPSILON, MARCADOR_FUNDO, Pilha

logger = logging.getLogger(__name__)

MOTIVO_ESTADO_FINAL = "final state"
MOTIVO_PILHA_VAZIA = "empty stack"
MOTIVO_REJEICAO = "no applicable transition, or end conditions unmet"


@dataclass(frozen=True)
class Moveu:
    transition: Transicao
    operation: Operacao
    operation_index: int


@dataclass(frozen=True)
class Aceita:
    reason: str


@dataclass(frozen=True)
class Rejeitada:
    reason: str


StepOutcome = Union[Moveu, Aceita, Rejeitada]
Configuracao = Tuple[str, int, Tuple[str, ...]]


@dataclass
class EstadoSimulacao:
    """Cursor mutável sobre a definição durante uma execução."""
    definicao: DefinicaoPDA
    current_state: Optional[Estado] = None
    input_index: int = 0
    started: bool = False
    finished: bool = False

    @property
    def word(self) -> str:
        return self.definicao.word

    @property
    def current_symbol(self) -> str:
        if self.input_index < len(self.word):
            return self.word[self.input_index]
        return EPSILON

    @property
    def at_end(self) -> bool:
        return self.input_index == len(self.word)

    @property
    def remaining_input(self) -> str:
        return self.word[self.input_index:]

    def advance(self):
        if self.input_index < len(self.word):
            self.input_index += 1


def matches(operation: Operacao, input_symbol: str, stack: Pilha) -> bool:
    """Verifica a guarda (símbolo de entrada + topo da pilha) de uma operação."""
    input_match = operation.input_symbol == input_symbol or operation.input_symbol == EPSILON
    stack_match = operation.pop_symbol == EPSILON or (
        not stack.is_empty and operation.pop_symbol == stack.peek()
    )
    return input_match and stack_match


def candidates(definicao: DefinicaoPDA, state: str, input_symbol: str,
               stack: Pilha) -> Iterator[Tuple[Transicao, int, Operacao]]:
    """Gera, em ordem de declaração, todos os pares (transição, operação) cuja guarda casa."""
    for transition in definicao.transitions_from(state):
        for idx, operation in enumerate(transition.operations):
            if matches(operation, input_symbol, stack):
                yield transition, idx, operation


def select_transition(definicao: DefinicaoPDA, state: str, input_symbol: str,
                      stack: Pilha) -> Optional[Tuple[Transicao, int, Operacao]]:
    """Primeira transição/operação aplicável, ou None."""
    return next(candidates(definicao, state, input_symbol, stack), None)


def apply_operation(operation: Operacao, stack: Pilha) -> bool:
    """
    Aplica o efeito de pilha de uma operação.

    Retorna False, sem alterar a pilha, se a guarda de desempilhamento
    não for satisfeita.
    """
    logger.debug("Aplicando operação: %s", operation)
    logger.debug("Pilha antes: %s", list(stack.contents()))

    if operation.pop_symbol != EPSILON:
        top = stack.peek()
        if stack.is_empty or not (top == operation.pop_symbol or operation.pop_symbol == MARCADOR_FUNDO):
            logger.warning("Não é possível desempilhar %s, topo da pilha é %s",
                           operation.pop_symbol, top if top is not None else "vazio")
            return False
        popped = stack.pop()
        logger.debug("Desempilhado: %s", popped)

    if operation.push_symbols != EPSILON:
        for symbol in operation.push_symbols:
            if symbol == MARCADOR_FUNDO:
                # o marcador nunca é duplicado
                if MARCADOR_FUNDO not in stack:
                    stack.push(MARCADOR_FUNDO)
                    logger.debug("Marcador %s reinserido na pilha", MARCADOR_FUNDO)
            else:
                stack.push(symbol)
                logger.debug("Empilhado: %s", symbol)

    logger.debug("Pilha depois: %s", list(stack.contents()))
    return True


def termination_outcome(sim: EstadoSimulacao, stack: Pilha) -> Union[Aceita, Rejeitada]:
    """Decide aceitação quando nenhuma transição pode ser disparada."""
    if sim.current_state is not None and sim.current_state.is_accepting and sim.at_end:
        return Aceita(MOTIVO_ESTADO_FINAL)
    if sim.at_end and (stack.is_empty or stack.only_marker()):
        return Aceita(MOTIVO_PILHA_VAZIA)
    return Rejeitada(MOTIVO_REJEICAO)


class ExecutorPasso:
    """
    Executa um passo por vez sobre uma definição imutável, emitindo eventos
    de observação para quem estiver inscrito.
    """

    def __init__(self, definicao: DefinicaoPDA, observadores: Optional[Observadores] = None):
        self.definicao = definicao
        self.stack = Pilha()
        self.observadores = observadores if observadores is not None else Observadores()
        self.sim = EstadoSimulacao(definicao)
        self.initialize()

    def initialize(self):
        self.stack.reset()
        self.stack.push(MARCADOR_FUNDO)
        self.sim = EstadoSimulacao(self.definicao, current_state=self.definicao.start_state())
        logger.debug("Simulação inicializada. Estado inicial: %s, Palavra: %r",
                     self.sim.current_state.name, self.definicao.word)

    def configuration(self) -> Configuracao:
        name = self.sim.current_state.name if self.sim.current_state else "-"
        return name, self.sim.input_index, self.stack.contents()

    def _halted(self) -> bool:
        return self.sim.finished or not self.sim.started

    def step(self, pausa: Optional[Callable[[], None]] = None) -> Optional[StepOutcome]:
        """
        Executa um passo. `pausa` é chamada nos pontos de suspensão entre as
        fases do passo; se a execução for interrompida durante uma pausa o
        passo é abandonado e None é devolvido.
        """
        if self._halted():
            return None

        sim = self.sim
        logger.debug("Estado atual: %s", sim.current_state.name)
        logger.debug("Símbolo de entrada atual: %s", sim.current_symbol)
        logger.debug("Pilha atual: %s", list(self.stack.contents()))

        self.observadores.emit(EstadoAtivado(sim.current_state.name))
        if pausa:
            pausa()
        if self._halted():
            return None

        for transition, idx, operation in candidates(self.definicao, sim.current_state.name,
                                                     sim.current_symbol, self.stack):
            logger.debug("Transição encontrada: %s com operação: %s", transition, operation)
            if not apply_operation(operation, self.stack):
                continue

            if operation.input_symbol != EPSILON:
                sim.advance()

            sim.current_state = self.definicao.state(transition.target)
            outcome = Moveu(transition, operation, idx)
            self.observadores.emit(TransicaoDisparada(transition.id, idx))
            if pausa:
                pausa()
            if self._halted():
                return None
            self.observadores.emit(EstadoAtivado(sim.current_state.name))
            self.observadores.emit(PassoConcluido(outcome))
            return outcome

        outcome = termination_outcome(sim, self.stack)
        sim.finished = True
        if isinstance(outcome, Aceita):
            logger.info("Aceita: %s", outcome.reason)
        else:
            logger.info("Rejeitada: %s", outcome.reason)
        self.observadores.emit(PassoConcluido(outcome))
        if isinstance(outcome, Aceita):
            self.observadores.emit(ExecucaoAceita(outcome.reason))
        else:
            self.observadores.emit(ExecucaoRejeitada(outcome.reason))
        return outcome
