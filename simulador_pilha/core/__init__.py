from .definicao import AutomatoPilha, DefinicaoInvalida, DefinicaoPDA, Estado, Operacao, Transicao
from .eventos import Observadores
from .execucao import Driver, Fase, FaseInvalida, ResultadoExecucao, executar_palavra
from .pilha import EPSILON, MARCADOR_FUNDO, Pilha
from .simulador import Aceita, ExecutorPasso, Moveu, Rejeitada

__all__ = [
    "AutomatoPilha",
    "DefinicaoInvalida",
    "DefinicaoPDA",
    "Estado",
    "Operacao",
    "Transicao",
    "Observadores",
    "Driver",
    "Fase",
    "FaseInvalida",
    "ResultadoExecucao",
    "executar_palavra",
    "EPSILON",
    "MARCADOR_FUNDO",
    "Pilha",
    "Aceita",
    "ExecutorPasso",
    "Moveu",
    "Rejeitada",
]
