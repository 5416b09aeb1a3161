from typing import List, Optional, Tuple

EPSILON = "ε"
MARCADOR_FUNDO = "$"


class Pilha:
    """
    Pilha de símbolos usada pelo simulador (LIFO).

    A base da pilha é o índice 0 e o topo é o último elemento, de modo que
    `contents()` devolve os símbolos da base para o topo.
    """
    def __init__(self):
        self._items: List[str] = []

    def reset(self):
        self._items.clear()

    def push(self, symbol: str):
        self._items.append(symbol)

    def pop(self) -> Optional[str]:
        """Remove e devolve o topo, ou None se a pilha estiver vazia."""
        if not self._items:
            return None
        return self._items.pop()

    def peek(self) -> Optional[str]:
        return self._items[-1] if self._items else None

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def size(self) -> int:
        return len(self._items)

    def contents(self) -> Tuple[str, ...]:
        return tuple(self._items)

    def only_marker(self) -> bool:
        """Verdadeiro se a pilha contém apenas o marcador de fundo."""
        return self._items == [MARCADOR_FUNDO]

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self):
        return f"Pilha({self._items!r})"
