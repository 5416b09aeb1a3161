import json
import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional, Tuple

from .pilha import EPSILON

logger = logging.getLogger(__name__)

# Aliases aceitos para a palavra vazia ao ler rótulos e arquivos antigos
_EPSILON_ALIASES = {"", "&", "ε", "epsilon"}


class DefinicaoInvalida(ValueError):
    """Erro estrutural na definição do autômato (estado inexistente, JSON malformado...)."""


def _normalize(symbol: Optional[str]) -> str:
    if symbol is None:
        return EPSILON
    symbol = symbol.strip()
    return EPSILON if symbol.lower() in _EPSILON_ALIASES else symbol


@dataclass(frozen=True)
class Operacao:
    """
    Guarda e ação de uma transição: lê `input_symbol`, desempilha `pop_symbol`
    e empilha `push_symbols` (da esquerda para a direita, o último fica no topo).
    """
    input_symbol: str = EPSILON
    pop_symbol: str = EPSILON
    push_symbols: str = EPSILON

    def __post_init__(self):
        object.__setattr__(self, "input_symbol", _normalize(self.input_symbol))
        object.__setattr__(self, "pop_symbol", _normalize(self.pop_symbol))
        object.__setattr__(self, "push_symbols", _normalize(self.push_symbols))
        # a palavra é lida um caractere por vez
        if self.input_symbol != EPSILON and len(self.input_symbol) != 1:
            raise DefinicaoInvalida(f"Símbolo de entrada '{self.input_symbol}' deve ter um único caractere.")

    @classmethod
    def parse(cls, label: str) -> "Operacao":
        """Converte um rótulo no formato 'a, Z / XY' em uma operação."""
        if "/" not in label or "," not in label.split("/", 1)[0]:
            raise DefinicaoInvalida(f"Rótulo de operação malformado: '{label}'. Use 'entrada, desempilha / empilha'.")
        guard, push = label.split("/", 1)
        inp, pop = guard.split(",", 1)
        return cls(inp, pop, push)

    def to_dict(self) -> Dict[str, str]:
        return {"input": self.input_symbol, "pop": self.pop_symbol, "push": self.push_symbols}

    def __str__(self):
        return f"{self.input_symbol}, {self.pop_symbol} / {self.push_symbols}"


@dataclass(frozen=True)
class Estado:
    name: str
    is_start: bool = False
    is_accepting: bool = False


@dataclass(frozen=True)
class Transicao:
    id: str
    source: str
    target: str
    operations: Tuple[Operacao, ...] = ()

    def __str__(self):
        return f"{self.id}: {self.source} -> {self.target}"


@dataclass(frozen=True)
class DefinicaoPDA:
    """Retrato imutável do autômato e da palavra de entrada, lido pelo simulador."""
    states: Tuple[Estado, ...]
    transitions: Tuple[Transicao, ...]
    word: str = ""

    def state(self, name: str) -> Estado:
        for st in self.states:
            if st.name == name:
                return st
        raise DefinicaoInvalida(f"Estado '{name}' não existe.")

    def start_state(self) -> Estado:
        """
        Devolve o primeiro estado marcado como inicial. Se nenhum estiver
        marcado, usa o primeiro estado declarado e registra um aviso.
        """
        if not self.states:
            raise DefinicaoInvalida("O autômato não possui estados.")
        for st in self.states:
            if st.is_start:
                return st
        fallback = self.states[0]
        logger.warning("Nenhum estado inicial definido; usando '%s' como inicial.", fallback.name)
        return fallback

    def transitions_from(self, name: str) -> Iterator[Transicao]:
        return (t for t in self.transitions if t.source == name)

    def with_word(self, word: str) -> "DefinicaoPDA":
        return replace(self, word=word)


@dataclass
class AutomatoPilha:
    """
    Modelo editável de um Autômato de Pilha. O editor altera esta estrutura;
    o simulador recebe apenas `snapshot()`.
    """
    states: List[Estado] = field(default_factory=list)
    transitions: List[Transicao] = field(default_factory=list)
    word: str = ""

    def _index_of(self, name: str) -> int:
        for i, st in enumerate(self.states):
            if st.name == name:
                return i
        raise DefinicaoInvalida(f"Estado '{name}' não existe.")

    def has_state(self, name: str) -> bool:
        return any(st.name == name for st in self.states)

    @property
    def start_state(self) -> Optional[str]:
        return next((st.name for st in self.states if st.is_start), None)

    @property
    def final_states(self) -> List[str]:
        return [st.name for st in self.states if st.is_accepting]

    def add_state(self, name: str, is_start: bool = False, is_accepting: bool = False) -> Estado:
        name = name.strip()
        if not name:
            raise DefinicaoInvalida("O nome do estado não pode ser vazio.")
        if self.has_state(name):
            raise DefinicaoInvalida(f"O nome '{name}' já está em uso.")
        if is_start:
            self._clear_start()
        st = Estado(name, is_start, is_accepting)
        self.states.append(st)
        return st

    def _clear_start(self):
        self.states = [replace(st, is_start=False) for st in self.states]

    def set_start(self, name: str):
        idx = self._index_of(name)
        self._clear_start()
        self.states[idx] = replace(self.states[idx], is_start=True)

    def toggle_accepting(self, name: str) -> bool:
        idx = self._index_of(name)
        st = self.states[idx]
        self.states[idx] = replace(st, is_accepting=not st.is_accepting)
        return self.states[idx].is_accepting

    def remove_state(self, name: str):
        """Remove um estado e todas as transições que saem dele ou chegam nele."""
        if not self.has_state(name):
            return
        self.states = [st for st in self.states if st.name != name]
        self.transitions = [t for t in self.transitions if name not in (t.source, t.target)]

    def rename_state(self, old_name: str, new_name: str):
        idx = self._index_of(old_name)
        new_name = new_name.strip()
        if not new_name:
            raise DefinicaoInvalida("O nome do estado não pode ser vazio.")
        if new_name != old_name and self.has_state(new_name):
            raise DefinicaoInvalida(f"O nome '{new_name}' já está em uso.")
        self.states[idx] = replace(self.states[idx], name=new_name)
        renamed = []
        for t in self.transitions:
            renamed.append(replace(
                t,
                source=new_name if t.source == old_name else t.source,
                target=new_name if t.target == old_name else t.target,
            ))
        self.transitions = renamed

    def _next_transition_id(self) -> str:
        used = {t.id for t in self.transitions}
        n = len(self.transitions)
        while f"t{n}" in used:
            n += 1
        return f"t{n}"

    def add_transition(self, src: str, dst: str, operations=(), transition_id: Optional[str] = None) -> Transicao:
        """
        Adiciona uma transição de `src` para `dst`. `operations` aceita objetos
        Operacao ou rótulos no formato 'a, Z / XY'.
        """
        if not self.has_state(src) or not self.has_state(dst):
            raise DefinicaoInvalida("Estado de origem ou destino inválido.")
        tid = transition_id or self._next_transition_id()
        if any(t.id == tid for t in self.transitions):
            raise DefinicaoInvalida(f"Transição '{tid}' já existe.")
        ops = tuple(op if isinstance(op, Operacao) else Operacao.parse(op) for op in operations)
        t = Transicao(tid, src, dst, ops)
        self.transitions.append(t)
        return t

    def transition(self, transition_id: str) -> Transicao:
        for t in self.transitions:
            if t.id == transition_id:
                return t
        raise DefinicaoInvalida(f"Transição '{transition_id}' não existe.")

    def set_operations(self, transition_id: str, operations):
        """Substitui a lista de operações; uma lista vazia remove a transição."""
        ops = tuple(op if isinstance(op, Operacao) else Operacao.parse(op) for op in operations)
        t = self.transition(transition_id)
        if not ops:
            self.remove_transition(transition_id)
            return
        self.transitions[self.transitions.index(t)] = replace(t, operations=ops)

    def remove_transition(self, transition_id: str):
        self.transitions = [t for t in self.transitions if t.id != transition_id]

    def transitions_between(self, src: str, dst: str) -> List[Transicao]:
        return [t for t in self.transitions if t.source == src and t.target == dst]

    def snapshot(self, word: Optional[str] = None) -> DefinicaoPDA:
        return DefinicaoPDA(tuple(self.states), tuple(self.transitions), self.word if word is None else word)

    def to_dict(self) -> Dict:
        return {
            "states": [
                {"name": st.name, "is_start": st.is_start, "is_accepting": st.is_accepting}
                for st in self.states
            ],
            "transitions": [
                {
                    "id": t.id,
                    "from": t.source,
                    "to": t.target,
                    "operations": [op.to_dict() for op in t.operations],
                }
                for t in self.transitions
            ],
            "word": self.word,
        }

    def to_json(self) -> str:
        """Serializa o autômato para uma string JSON."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict) -> "AutomatoPilha":
        if not isinstance(data, dict):
            raise DefinicaoInvalida("Documento de autômato deve ser um objeto JSON.")
        word = data.get("word", "") or ""
        if not isinstance(word, str):
            raise DefinicaoInvalida(f"A palavra de entrada deve ser texto, não {type(word).__name__}.")
        pda = cls(word=word)
        try:
            for st in data.get("states", []):
                pda.add_state(st["name"], bool(st.get("is_start", False)), bool(st.get("is_accepting", False)))
            for t in data.get("transitions", []):
                ops = [Operacao(op.get("input"), op.get("pop"), op.get("push")) for op in t.get("operations", [])]
                pda.add_transition(t["from"], t["to"], ops, transition_id=t.get("id"))
        except (KeyError, TypeError, AttributeError) as e:
            raise DefinicaoInvalida(f"Documento de autômato malformado: {e}") from e
        return pda

    @classmethod
    def from_json(cls, json_str: str) -> "AutomatoPilha":
        """Cria um Autômato de Pilha a partir de uma string JSON."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise DefinicaoInvalida(f"JSON inválido: {e}") from e
        return cls.from_dict(data)


def snapshot_of_pda(automato: AutomatoPilha, positions: Dict[str, Tuple[float, float]]) -> str:
    """Retorna JSON representando o estado completo do editor (autômato + posições)."""
    data = {
        "automato": automato.to_dict(),
        "positions": {name: list(pos) for name, pos in positions.items()},
    }
    return json.dumps(data, ensure_ascii=False)


def restore_from_pda_snapshot(s: str) -> Tuple[AutomatoPilha, Dict[str, Tuple[float, float]]]:
    """Restaura um autômato de pilha e suas posições a partir de um snapshot JSON."""
    try:
        data = json.loads(s)
    except json.JSONDecodeError as e:
        raise DefinicaoInvalida(f"JSON inválido: {e}") from e
    if not isinstance(data, dict):
        raise DefinicaoInvalida("Snapshot deve ser um objeto JSON.")
    # Aceita tanto o snapshot do editor quanto um autômato "puro"
    automato_data = data.get("automato", data)
    automato = AutomatoPilha.from_dict(automato_data)
    try:
        positions = {name: (float(pos[0]), float(pos[1])) for name, pos in data.get("positions", {}).items()}
    except (TypeError, ValueError, IndexError, KeyError, AttributeError) as e:
        raise DefinicaoInvalida(f"Posições malformadas no snapshot: {e}") from e
    return automato, positions
