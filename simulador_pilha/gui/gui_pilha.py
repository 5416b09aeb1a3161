"""
gui_pilha.py - Editor e visualizador de Autômatos de Pilha (PDA).
"""
import logging
import math
import os
import tkinter as tk
from tkinter import simpledialog, filedialog, messagebox, ttk
from typing import List, Optional

from PIL import Image, ImageTk, ImageEnhance

from ..config import ConfiguracaoSimulacao
from ..core.definicao import (
    AutomatoPilha,
    DefinicaoInvalida,
    Operacao,
    restore_from_pda_snapshot,
    snapshot_of_pda,
)
from ..core.eventos import Observadores
from ..core.execucao import Driver, Fase
from ..core.pilha import EPSILON
from .destaques import COR_RESULTADO, MapaDestaques

logger = logging.getLogger(__name__)

ICONS_DIR = os.path.join(os.path.dirname(__file__), "icons")
RAIO = 24


class Tooltip:
    def __init__(self, widget, text):
        self.widget = widget
        self.text = text
        self.tooltip_window = None
        self.widget.bind("<Enter>", self.show_tooltip, add="+")
        self.widget.bind("<Leave>", self.hide_tooltip, add="+")

    def show_tooltip(self, event):
        x = self.widget.winfo_pointerx() + 15
        y = self.widget.winfo_pointery() + 10

        self.tooltip_window = tw = tk.Toplevel(self.widget)
        tw.wm_overrideredirect(True)
        tw.wm_geometry(f"+{x}+{y}")

        label = tk.Label(tw, text=self.text, justify='left',
                         background="#ffffe0", relief='solid', borderwidth=1,
                         font=("tahoma", "8", "normal"))
        label.pack(ipadx=1)

    def hide_tooltip(self, event):
        if self.tooltip_window:
            self.tooltip_window.destroy()
        self.tooltip_window = None


def load_icon(icon_name: str, size: int = 32) -> Optional[ImageTk.PhotoImage]:
    """
    Carrega um ícone da barra de ferramentas, realçando cor e contraste.

    Os ícones são opcionais e não acompanham o pacote: basta colocar
    `<nome>.png` em `ICONS_DIR`. Sem o arquivo devolve None e o botão usa texto.
    """
    icon_path = os.path.join(ICONS_DIR, f"{icon_name}.png")
    try:
        img = Image.open(icon_path)
    except FileNotFoundError:
        logger.warning("Ícone não encontrado em '%s'. Usando texto.", icon_path)
        return None
    img = ImageEnhance.Color(img).enhance(1.5)
    img = ImageEnhance.Contrast(img).enhance(1.1)
    img = img.resize((size, size), Image.Resampling.LANCZOS)
    return ImageTk.PhotoImage(img)


class PilhaGUI:
    def __init__(self, root, settings: Optional[ConfiguracaoSimulacao] = None):
        self.root = root
        self.settings = settings or ConfiguracaoSimulacao()
        root.title("Editor de Autômatos de Pilha")
        root.geometry("1200x800")

        style = ttk.Style()
        style.configure("TButton", padding=(8, 6))
        style.configure("Accent.TButton", padding=(8, 6))
        style.configure("TMenubutton", padding=(8, 6))

        self.automato = AutomatoPilha()
        self.positions = {}
        self.mode = "select"
        self.dragging = None
        self.mode_buttons = {}
        self.transition_src = None
        self.icons = {}

        self.undo_stack: List[str] = []
        self.redo_stack: List[str] = []

        # Simulação
        self.observadores = Observadores()
        self.destaques = MapaDestaques()
        self.observadores.subscribe(self.destaques)
        self.driver: Optional[Driver] = None
        self.sim_job = None

        # Transformação (zoom/pan)
        self.scale = 1.0
        self.offset_x = 0
        self.offset_y = 0
        self.pan_last = None
        self.current_filepath = None

        self._build_toolbar()
        self._build_canvas()
        self._build_bottom_bar()
        self._build_statusbar()
        self._bind_events()
        self._push_undo_snapshot()
        self.draw_all()

    # --- Construção da interface ---
    def _build_toolbar(self):
        toolbar = tk.Frame(self.root)
        toolbar.pack(side=tk.TOP, fill=tk.X, padx=10, pady=(5, 10))

        file_menu = tk.Menu(toolbar, tearoff=0)
        file_menu.add_command(label="Abrir...", command=self.cmd_open)
        file_menu.add_command(label="Salvar", command=self.cmd_save)
        file_menu.add_command(label="Salvar Como...", command=self.cmd_save_as)
        self._create_toolbar_menubutton(toolbar, "arquivo", "Arquivo", file_menu)
        ttk.Separator(toolbar, orient='vertical').pack(side=tk.LEFT, padx=8, fill='y')

        self._create_toolbar_button(toolbar, "novo_estado", "Novo Estado", "add_state")
        self._create_toolbar_button(toolbar, "nova_transicao", "Nova Transição", "add_transition_src")
        self._create_toolbar_button(toolbar, "definir_inicio", "Definir Início", "set_start")
        self._create_toolbar_button(toolbar, "alternar_final", "Alternar Final", "toggle_final")
        self._create_toolbar_button(toolbar, "excluir_estado", "Excluir Estado", "delete_state")

        self.mode_label = ttk.Label(toolbar, text="Modo: Selecionar", font=("Helvetica", 11, "bold"))
        self.mode_label.pack(side=tk.RIGHT, padx=10)

    def _create_toolbar_menubutton(self, parent, icon_name, tooltip_text, menu):
        icon = load_icon(icon_name)
        if icon:
            self.icons[icon_name] = icon
            button = ttk.Menubutton(parent, image=icon)
        else:
            button = ttk.Menubutton(parent, text=tooltip_text)
        button["menu"] = menu
        button.pack(side=tk.LEFT, padx=2)
        Tooltip(button, tooltip_text)

    def _create_toolbar_button(self, parent, icon_name, tooltip_text, mode):
        icon = load_icon(icon_name)
        command = lambda: self._set_mode(mode)
        if icon:
            self.icons[icon_name] = icon
            button = ttk.Button(parent, image=icon, command=command)
        else:
            button = ttk.Button(parent, text=tooltip_text, command=command)
        button.pack(side=tk.LEFT, padx=2)
        self.mode_buttons[mode] = button
        Tooltip(button, tooltip_text)

    def _build_canvas(self):
        self.canvas = tk.Canvas(self.root, bg="white")
        self.canvas.pack(fill=tk.BOTH, expand=True, padx=10, pady=0)

    def _build_bottom_bar(self):
        bottom = tk.Frame(self.root)
        bottom.pack(side=tk.BOTTOM, fill=tk.X, padx=10, pady=10)
        ttk.Label(bottom, text="Entrada:", font=("Helvetica", 10)).pack(side=tk.LEFT)
        self.input_entry = ttk.Entry(bottom, width=40)
        self.input_entry.pack(side=tk.LEFT, padx=5)
        ttk.Button(bottom, text="Simular", command=self.cmd_start_simulation, style="Accent.TButton").pack(side=tk.LEFT, padx=2)
        ttk.Button(bottom, text="Passo", command=self.cmd_step).pack(side=tk.LEFT, padx=2)
        ttk.Button(bottom, text="Parar", command=self.cmd_stop).pack(side=tk.LEFT, padx=2)
        ttk.Button(bottom, text="Reiniciar", command=self.cmd_reset_sim).pack(side=tk.LEFT, padx=2)

        # Pilha e fita de entrada
        self.sim_display_canvas = tk.Canvas(bottom, height=60, bg="white", highlightthickness=0)
        self.sim_display_canvas.pack(side=tk.LEFT, fill=tk.X, expand=True, padx=10)

    def _build_statusbar(self):
        self.status = tk.Label(self.root, text="Pronto", anchor="w", relief=tk.SUNKEN)
        self.status.pack(side=tk.BOTTOM, fill=tk.X)

    def _bind_events(self):
        self.canvas.bind("<Button-1>", self.on_canvas_click)
        self.canvas.bind("<B1-Motion>", self.on_canvas_drag)
        self.canvas.bind("<ButtonRelease-1>", self.on_canvas_release)
        self.canvas.bind("<Button-3>", self.on_right_click)
        self.canvas.bind("<MouseWheel>", self.on_mousewheel)
        self.canvas.bind("<Button-4>", self.on_mousewheel)
        self.canvas.bind("<Button-5>", self.on_mousewheel)
        self.canvas.bind("<Button-2>", self.on_middle_press)
        self.canvas.bind("<B2-Motion>", self.on_middle_drag)
        self.canvas.bind("<ButtonRelease-2>", self.on_middle_release)
        self.root.bind("<Control-z>", lambda e: self.undo())
        self.root.bind("<Control-y>", lambda e: self.redo())

    def _set_mode(self, new_mode):
        self.mode = new_mode
        cursor_map = {
            "add_state": "crosshair",
            "add_transition_src": "hand2",
            "add_transition_dst": "hand2",
            "set_start": "hand2",
            "toggle_final": "hand2",
            "delete_state": "X_cursor",
        }
        self.canvas.config(cursor=cursor_map.get(new_mode, "arrow"))
        mode_text_map = {
            "select": "Modo: Selecionar",
            "add_state": "Modo: Adicionar Estado",
            "add_transition_src": "Modo: Adicionar Transição (Origem)",
            "add_transition_dst": "Modo: Adicionar Transição (Destino)",
            "set_start": "Modo: Definir Início",
            "toggle_final": "Modo: Alternar Final",
            "delete_state": "Modo: Excluir Estado",
        }
        self.mode_label.config(text=mode_text_map.get(new_mode, "Modo: Selecionar"))
        for name, btn in self.mode_buttons.items():
            pinned = name == new_mode.replace("_dst", "_src")
            btn.config(style="Accent.TButton" if pinned else "TButton")

    # --- Arquivo ---
    def cmd_open(self):
        """Abre um arquivo de Autômato de Pilha (.json)."""
        path = filedialog.askopenfilename(
            defaultextension=".json",
            filetypes=[("PDA Files", "*.json"), ("All files", "*.*")]
        )
        if not path:
            return
        try:
            with open(path, "r", encoding="utf-8") as f:
                snapshot = f.read()
            self.automato, self.positions = restore_from_pda_snapshot(snapshot)
        except (OSError, DefinicaoInvalida) as e:
            messagebox.showerror("Erro ao Abrir", f"Não foi possível carregar o arquivo:\n{e}", parent=self.root)
            return
        self.current_filepath = path
        self.undo_stack = [snapshot]
        self.redo_stack.clear()
        self.input_entry.delete(0, tk.END)
        self.input_entry.insert(0, self.automato.word)
        self._discard_simulation()
        self.root.title(f"Editor de Autômatos de Pilha — {self.current_filepath}")
        self.draw_all()
        self.status.config(text=f"Arquivo '{path}' carregado com sucesso.")

    def cmd_save(self):
        """Salva o autômato no arquivo atual. Se não houver, chama 'Salvar Como'."""
        if not self.current_filepath:
            self.cmd_save_as()
            return
        self.automato.word = self.input_entry.get()
        try:
            with open(self.current_filepath, "w", encoding="utf-8") as f:
                f.write(snapshot_of_pda(self.automato, self.positions))
        except OSError as e:
            messagebox.showerror("Erro ao Salvar", f"Não foi possível salvar o arquivo:\n{e}", parent=self.root)
            return
        self.status.config(text=f"Arquivo salvo em '{self.current_filepath}'.")

    def cmd_save_as(self):
        path = filedialog.asksaveasfilename(
            defaultextension=".json",
            filetypes=[("PDA Files", "*.json"), ("All files", "*.*")]
        )
        if not path:
            return
        self.current_filepath = path
        self.root.title(f"Editor de Autômatos de Pilha — {self.current_filepath}")
        self.cmd_save()

    # --- Simulação ---
    def _discard_simulation(self):
        self._cancel_job()
        self.driver = None
        self.destaques.clear()

    def _cancel_job(self):
        if self.sim_job is not None:
            self.root.after_cancel(self.sim_job)
            self.sim_job = None

    def _prepare_driver(self) -> bool:
        try:
            definicao = self.automato.snapshot(self.input_entry.get().strip())
            self.driver = Driver(definicao, self.observadores, max_passos=self.settings.max_passos)
        except DefinicaoInvalida as e:
            messagebox.showwarning("Simulação", str(e), parent=self.root)
            return False
        self.driver.start()
        return True

    def cmd_start_simulation(self):
        self._cancel_job()
        if not self._prepare_driver():
            return
        self.status.config(text=f"Simulação iniciada para '{self.driver.definicao.word}'.")
        self.draw_all()
        self.sim_job = self.root.after(self.settings.HIGHLIGHT_MS, self._playback_step)

    def _playback_step(self):
        self.sim_job = None
        self.cmd_step()
        if self.driver and self.driver.running:
            self.sim_job = self.root.after(self.settings.ANIM_MS, self._playback_step)

    def cmd_step(self):
        if self.driver is None or self.driver.fase in (Fase.NAO_INICIADA, Fase.PARADA):
            if not self._prepare_driver():
                return
        elif not self.driver.running:
            self.status.config(text="Fim da simulação.")
            return
        outcome = self.driver.passo()
        self._update_status(outcome)
        self.draw_all()

    def _update_status(self, outcome):
        if self.destaques.verdict:
            self.status.config(text=f"{self.destaques.verdict}: {self.destaques.reason}")
        elif outcome is not None:
            self.status.config(text=f"Passo {self.driver.passos}: {outcome.transition} [{outcome.operation}]")

    def cmd_stop(self):
        self._cancel_job()
        if self.driver:
            self.driver.stop()
            self.status.config(text="Simulação interrompida.")
        self.draw_all()

    def cmd_reset_sim(self):
        self._cancel_job()
        if self.driver:
            self.driver.reset()
        self.destaques.clear()
        self.draw_all()
        self.status.config(text="Simulação reiniciada.")

    # --- Edição no canvas ---
    def on_canvas_click(self, event):
        cx, cy = self._to_canvas(event.x, event.y)
        clicked_state = self._find_state_at(cx, cy)

        if self.mode == "delete_state":
            if clicked_state and messagebox.askyesno("Excluir", f"Excluir estado {clicked_state}?", parent=self.root):
                self._edit(lambda: self._remove_state(clicked_state))
            self._set_mode("select")
            return

        if self.mode == "add_state":
            n = len(self.automato.states)
            while self.automato.has_state(f"q{n}"):
                n += 1
            state_name = f"q{n}"

            def add():
                self.automato.add_state(state_name, is_start=not self.automato.states)
                self.positions[state_name] = (cx, cy)
            self._edit(add)
        elif self.mode == "set_start" and clicked_state:
            self._edit(lambda: self.automato.set_start(clicked_state))
            self._set_mode("select")
        elif self.mode == "toggle_final" and clicked_state:
            self._edit(lambda: self.automato.toggle_accepting(clicked_state))
            self._set_mode("select")
        elif self.mode == "add_transition_src" and clicked_state:
            self.transition_src = clicked_state
            self._set_mode("add_transition_dst")
            self.status.config(text=f"Origem {clicked_state}. Clique no destino.")
        elif self.mode == "add_transition_dst" and clicked_state:
            src, dst = self.transition_src, clicked_state
            label = simpledialog.askstring(
                "Transição de Pilha",
                f"Formato: 'entrada, desempilha / empilha'\n(Use {EPSILON} ou & para vazio)",
                parent=self.root)
            if label:
                self._edit(lambda: self.automato.add_transition(src, dst, [Operacao.parse(label)]))
            self._set_mode("select")
        elif clicked_state:
            self.dragging = (clicked_state, cx, cy)

    def _edit(self, change):
        """Aplica uma alteração no autômato com suporte a desfazer."""
        try:
            change()
        except DefinicaoInvalida as e:
            messagebox.showerror("Erro", str(e), parent=self.root)
            return
        self._discard_simulation()
        self._push_undo_snapshot()
        self.draw_all()

    def _remove_state(self, state):
        self.automato.remove_state(state)
        self.positions.pop(state, None)

    def on_canvas_drag(self, event):
        if self.dragging:
            sid, ox, oy = self.dragging
            cx, cy = self._to_canvas(event.x, event.y)
            x0, y0 = self.positions.get(sid, (0, 0))
            self.positions[sid] = (x0 + cx - ox, y0 + cy - oy)
            self.dragging = (sid, cx, cy)
            self.draw_all()

    def on_canvas_release(self, event):
        if self.dragging:
            self._push_undo_snapshot()
        self.dragging = None

    def on_right_click(self, event):
        state = self._find_state_at(*self._to_canvas(event.x, event.y))
        if state:
            menu = tk.Menu(self.root, tearoff=0)
            menu.add_command(label="Definir como inicial", command=lambda: self._edit(lambda: self.automato.set_start(state)))
            menu.add_command(label="Alternar final", command=lambda: self._edit(lambda: self.automato.toggle_accepting(state)))
            menu.add_command(label="Renomear", command=lambda: self._rename_state_from_menu(state))
            menu.add_separator()
            menu.add_command(label="Excluir", command=lambda: self._edit(lambda: self._remove_state(state)))
            menu.tk_popup(event.x_root, event.y_root)

    def _rename_state_from_menu(self, old_name: str):
        new_name = simpledialog.askstring("Renomear Estado", f"Digite o novo nome para '{old_name}':",
                                          initialvalue=old_name, parent=self.root)
        if not new_name or new_name == old_name:
            return

        def rename():
            self.automato.rename_state(old_name, new_name)
            self.positions[new_name.strip()] = self.positions.pop(old_name)
        self._edit(rename)

    def _edit_edge(self, src: str, dst: str):
        """Edita as operações de todas as transições entre dois estados."""
        existing = self.automato.transitions_between(src, dst)
        initial_value = "\n".join(str(op) for t in existing for op in t.operations)
        new_labels_str = simpledialog.askstring("Editar Transições",
            "Operações (uma por linha, formato: entrada, desempilha / empilha):",
            initialvalue=initial_value, parent=self.root)
        if new_labels_str is None:
            return
        labels = [line.strip() for line in new_labels_str.split('\n') if line.strip()]

        def replace_ops():
            ops = [Operacao.parse(label) for label in labels]
            for t in existing[1:]:
                self.automato.remove_transition(t.id)
            if existing:
                self.automato.set_operations(existing[0].id, ops)
            elif ops:
                self.automato.add_transition(src, dst, ops)
        self._edit(replace_ops)

    # --- Zoom/Pan ---
    def _to_canvas(self, x, y):
        return (x - self.offset_x) / self.scale, (y - self.offset_y) / self.scale

    def _from_canvas(self, x, y):
        return x * self.scale + self.offset_x, y * self.scale + self.offset_y

    def on_mousewheel(self, event):
        delta = event.delta if getattr(event, "delta", 0) else (120 if event.num == 4 else -120)
        factor = 1.0 + (delta / 1200.0)
        old_scale, self.scale = self.scale, max(0.2, min(3.0, self.scale * factor))
        mx, my = event.x, event.y
        cx_before, cy_before = (mx - self.offset_x) / old_scale, (my - self.offset_y) / old_scale
        self.offset_x, self.offset_y = mx - cx_before * self.scale, my - cy_before * self.scale
        self.draw_all()

    def on_middle_press(self, event): self.pan_last = (event.x, event.y)
    def on_middle_release(self, event): self.pan_last = None
    def on_middle_drag(self, event):
        if self.pan_last:
            dx, dy = event.x - self.pan_last[0], event.y - self.pan_last[1]
            self.offset_x += dx; self.offset_y += dy
            self.pan_last = (event.x, event.y)
            self.draw_all()

    def _find_state_at(self, cx, cy):
        for sid, (sx, sy) in self.positions.items():
            if math.hypot(cx - sx, cy - sy) <= RAIO:
                return sid
        return None

    # --- Desenho ---
    def draw_all(self):
        self.canvas.delete("all")
        self._draw_simulation_display()
        self._draw_edges_and_states()

    def _draw_simulation_display(self):
        """Desenha a pilha e a fita de entrada restante no canvas inferior."""
        canvas = self.sim_display_canvas
        canvas.delete("all")
        if self.driver is None:
            return

        stack = self.driver.stack.contents()
        rem_input = self.driver.sim.remaining_input

        canvas.create_text(10, 25, text="Pilha:", anchor="w", font=("Helvetica", 10, "bold"))
        x_pos = 60
        cell_width, cell_height = 30, 30
        base_y = 50
        canvas.create_line(x_pos - 5, base_y, x_pos + 10 * cell_width, base_y, width=2)
        for symbol in stack:
            canvas.create_rectangle(x_pos, base_y - cell_height, x_pos + cell_width, base_y, fill="#e0f2fe", outline="#7dd3fc")
            canvas.create_text(x_pos + cell_width/2, base_y - cell_height/2, text=symbol, font=("Courier", 12, "bold"))
            x_pos += cell_width

        tape_start_x = max(x_pos, 60 + 10 * cell_width) + 50
        canvas.create_text(tape_start_x, 25, text="Entrada Restante:", anchor="w", font=("Helvetica", 10, "bold"))
        x_pos = tape_start_x + 130
        canvas.create_polygon(x_pos + cell_width/2, base_y - cell_height - 5, x_pos + cell_width/2 - 5, base_y - cell_height - 15,
                              x_pos + cell_width/2 + 5, base_y - cell_height - 15, fill="black")
        for symbol in rem_input or EPSILON:
            canvas.create_rectangle(x_pos, base_y - cell_height, x_pos + cell_width, base_y, fill="#f1f5f9", outline="#cbd5e1")
            canvas.create_text(x_pos + cell_width/2, base_y - cell_height/2, text=symbol, font=("Courier", 12, "bold"))
            x_pos += cell_width

    def _draw_edges_and_states(self):
        """Desenha os estados e as transições no canvas principal."""
        pairs = {}
        for t in self.automato.transitions:
            pairs.setdefault((t.source, t.target), []).append(t)

        r = RAIO * self.scale
        for (src, dst), transitions in pairs.items():
            if src not in self.positions or dst not in self.positions:
                continue
            x1, y1 = self._from_canvas(*self.positions[src])
            x2, y2 = self._from_canvas(*self.positions[dst])

            fired = any(t.id == self.destaques.last_transition for t in transitions)
            color = self.destaques.transition_color(self.destaques.last_transition) if fired else "black"
            width = 3 if fired else 1.5
            labels = []
            for t in transitions:
                for idx, op in enumerate(t.operations):
                    mark = " ✓" if (t.id, idx) in self.destaques.correct_operations else ""
                    labels.append(f"{op}{mark}")

            if src == dst:
                self.canvas.create_line(x1 - r*0.5, y1 - r*0.8, x1 - r*1.2, y1 - r*1.6, x1 + r*1.2, y1 - r*1.6,
                                        x1 + r*0.5, y1 - r*0.8, smooth=True, arrow=tk.LAST, width=width, fill=color)
                text_id = self.canvas.create_text(x1, y1 - r*1.8, text="\n".join(labels), fill=color,
                                                  justify=tk.CENTER, anchor="s")
            else:
                dx, dy = x2 - x1, y2 - y1
                dist = math.hypot(dx, dy) or 1.0
                ux, uy = dx/dist, dy/dist
                bend = 0.25 if (dst, src) in pairs else 0
                start_x, start_y = x1 + ux * r, y1 + uy * r
                end_x, end_y = x2 - ux * r, y2 - uy * r
                mid_x, mid_y = (start_x + end_x) / 2, (start_y + end_y) / 2
                ctrl_x, ctrl_y = mid_x - uy*dist*bend, mid_y + ux*dist*bend
                text_offset = 15
                txt_x, txt_y = mid_x - uy*(dist*bend + text_offset), mid_y + ux*(dist*bend + text_offset)
                self.canvas.create_line(start_x, start_y, ctrl_x, ctrl_y, end_x, end_y, smooth=True,
                                        arrow=tk.LAST, width=width, fill=color)
                text_id = self.canvas.create_text(txt_x, txt_y, text="\n".join(labels), fill=color, justify=tk.CENTER)
            self.canvas.tag_bind(text_id, "<Double-Button-1>", lambda e, s=src, d=dst: self._edit_edge(s, d))

        for st in self.automato.states:
            if st.name not in self.positions:
                continue
            x, y = self._from_canvas(*self.positions[st.name])
            fill, outline = self.destaques.state_colors(st.name)
            width = 3 if st.name == self.destaques.active_state else 2
            self.canvas.create_oval(x - r, y - r, x + r, y + r, fill=fill, outline=outline, width=width)
            if st.is_accepting:
                inner = (RAIO - 4) * self.scale
                self.canvas.create_oval(x - inner, y - inner, x + inner, y + inner, outline="black", width=1)
            self.canvas.create_text(x, y, text=st.name)
            if st.is_start:
                self.canvas.create_line(x - 2*r, y, x - r, y, arrow=tk.LAST)

        if self.destaques.verdict:
            self.canvas.create_text(self.canvas.winfo_width() - 10, 20, text=self.destaques.verdict,
                                    font=("Helvetica", 16, "bold"), fill=COR_RESULTADO[self.destaques.verdict], anchor="ne")

    # --- Desfazer/Refazer ---
    def _push_undo_snapshot(self):
        snap = snapshot_of_pda(self.automato, self.positions)
        if not self.undo_stack or self.undo_stack[-1] != snap:
            self.undo_stack.append(snap)
            if len(self.undo_stack) > 50:
                self.undo_stack.pop(0)
            self.redo_stack.clear()

    def undo(self, event=None):
        if len(self.undo_stack) > 1:
            self.redo_stack.append(self.undo_stack.pop())
            self.automato, self.positions = restore_from_pda_snapshot(self.undo_stack[-1])
            self._discard_simulation()
            self.draw_all()
            self.status.config(text="Desfeito.")
        else:
            self.status.config(text="Nada para desfazer.")

    def redo(self, event=None):
        if self.redo_stack:
            snap = self.redo_stack.pop()
            self.undo_stack.append(snap)
            self.automato, self.positions = restore_from_pda_snapshot(snap)
            self._discard_simulation()
            self.draw_all()
            self.status.config(text="Refeito.")
