"""Simulador de Autômatos de Pilha (editor Tk + motor de execução)."""

__version__ = "1.0.0"
