import ctypes
import logging
import sys
from typing import Optional, Sequence

from .config import ConfiguracaoSimulacao, load_runtime_settings, parse_args
from .core.definicao import DefinicaoInvalida, restore_from_pda_snapshot
from .core.execucao import executar_palavra

logger = logging.getLogger("simulador_pilha")

EXIT_ACEITA = 0
EXIT_REJEITADA = 1
EXIT_INTERROMPIDA = 2
EXIT_ERRO = 3


def configure_logging(settings: ConfiguracaoSimulacao) -> logging.Logger:
    """Configura o logger do pacote uma única vez (stderr ou arquivo)."""
    level = getattr(logging, settings.LOG_LEVEL, logging.INFO)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    if settings.LOG_FILE:
        settings.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(settings.LOG_FILE, mode="w", encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def run_headless(path: str, word: Optional[str], settings: ConfiguracaoSimulacao) -> int:
    """Executa o autômato salvo em `path` e imprime o veredito."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            automato, _ = restore_from_pda_snapshot(f.read())
        definicao = automato.snapshot(word)
        resultado = executar_palavra(definicao, max_passos=settings.max_passos)
    except (OSError, DefinicaoInvalida) as e:
        logger.error("Não foi possível executar '%s': %s", path, e)
        return EXIT_ERRO

    for state, idx, stack in resultado.historico:
        print(f"({state}, {definicao.word[idx:] or 'ε'}, {''.join(reversed(stack)) or 'ε'})")
    if resultado.accepted is None:
        print(f"INTERROMPIDA: {resultado.reason}")
        return EXIT_INTERROMPIDA
    print(f"{'ACEITA' if resultado.accepted else 'REJEITADA'}: {resultado.reason}")
    return EXIT_ACEITA if resultado.accepted else EXIT_REJEITADA


def run_gui(settings: ConfiguracaoSimulacao):
    import tkinter as tk

    import sv_ttk

    from .gui.gui_pilha import PilhaGUI

    root = tk.Tk()
    try:
        # Melhora a resolução em telas HiDPI no Windows
        ctypes.windll.shcore.SetProcessDpiAwareness(1)
    except (AttributeError, OSError):
        pass

    sv_ttk.set_theme(settings.THEME)
    PilhaGUI(root, settings)
    root.mainloop()


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    namespace = parse_args(argv)
    try:
        settings = load_runtime_settings(argv)
    except ValueError as e:
        print(f"Configuração inválida: {e}", file=sys.stderr)
        return EXIT_ERRO
    configure_logging(settings)

    if namespace.ARQUIVO:
        return run_headless(namespace.ARQUIVO, namespace.PALAVRA, settings)
    run_gui(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
