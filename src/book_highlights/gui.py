"""Tkinter side panel that shows random book highlights from an Obsidian vault."""
from __future__ import annotations

import json
import sys
import threading
import webbrowser
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import quote

import tkinter as tk
from tkinter import filedialog, messagebox, ttk

from loguru import logger

from .config import HighlightsConfig, save_config
from .refresh import ChangeMonitor, RefreshCoordinator
from .render import NO_HIGHLIGHTS_MESSAGE, RenderedHighlight, render_highlight
from .scanner import HighlightScanner, ScanResult
from .settings import SETTING_FIELDS, SettingsUpdate, apply_settings, form_values, persist_settings
from .sources import SourceError, VaultDirectorySource

CONFIG_DIR = Path.home() / ".obsidian_book_highlights"
CONFIG_FILE = CONFIG_DIR / "config.json"

CHANGE_POLL_MS = 5000


class HighlightsPanel:
    """Tkinter application that displays a rotating selection of highlights."""

    def __init__(self, root: tk.Tk, vault_root: Optional[Path] = None) -> None:
        self.root = root
        self.root.title("Book Highlights")
        self.root.geometry("420x640")
        self.root.minsize(320, 360)

        raw = self._load_config()
        self.config = HighlightsConfig.from_mapping(raw)
        self.vault_root = vault_root or self._initial_vault(raw.get("vault_root"))

        self._source = VaultDirectorySource(self.vault_root)
        self._monitor = ChangeMonitor(self._source)
        self._coordinator = RefreshCoordinator(self._run_pass, self._publish)
        self._interval_job: Optional[str] = None
        self._poll_job: Optional[str] = None
        self._polling = threading.Event()

        self._build_ui()
        self._save_config()
        self.refresh()
        self._schedule_interval()
        self._schedule_poll()

    # ------------------------------------------------------------------
    # Configuration helpers
    # ------------------------------------------------------------------
    def _load_config(self) -> Dict[str, object]:
        if not CONFIG_FILE.exists():
            return {}
        try:
            with CONFIG_FILE.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            messagebox.showwarning(
                "Configuration error",
                f"Failed to load saved settings. Defaults will be used.\n\n{exc}",
            )
            return {}

    def _save_config(self) -> None:
        save_config(CONFIG_FILE, self.config, vault_root=str(self.vault_root))

    def _apply_update(self, update: SettingsUpdate) -> None:
        self.config = update.config
        if update.vault_changed:
            self.vault_root = update.vault_root
            self._source = VaultDirectorySource(self.vault_root)
            self._monitor = ChangeMonitor(self._source)
        persist_settings(CONFIG_FILE, update)
        self._schedule_interval()
        self._schedule_poll()
        self.refresh()

    def _initial_vault(self, saved: object) -> Path:
        if saved:
            candidate = Path(str(saved)).expanduser()
            if candidate.is_dir():
                return candidate
            messagebox.showwarning(
                "Vault not found",
                "The previously saved Obsidian vault could not be located. Please select a new location.",
            )
        return self._prompt_for_vault()

    def _prompt_for_vault(self) -> Path:
        while True:
            path_str = filedialog.askdirectory(title="Select your Obsidian vault", mustexist=True)
            if path_str and Path(path_str).is_dir():
                return Path(path_str)
            messagebox.showerror("Vault required", "A vault location is required to continue. Please choose a folder.")

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(1, weight=1)

        header = ttk.Frame(self.root, padding=(12, 12, 12, 6))
        header.grid(row=0, column=0, sticky="ew")
        header.columnconfigure(0, weight=1)
        ttk.Label(header, text="Book Highlights", font=("TkDefaultFont", 13, "bold")).grid(row=0, column=0, sticky="w")
        ttk.Button(header, text="Settings", command=self._open_settings).grid(row=0, column=1, padx=(0, 6))
        ttk.Button(header, text="Refresh", command=self.refresh).grid(row=0, column=2)

        self._canvas = tk.Canvas(self.root, highlightthickness=0)
        scrollbar = ttk.Scrollbar(self.root, orient="vertical", command=self._canvas.yview)
        self._canvas.configure(yscrollcommand=scrollbar.set)
        self._canvas.grid(row=1, column=0, sticky="nsew")
        scrollbar.grid(row=1, column=1, sticky="ns")

        self._cards = ttk.Frame(self._canvas, padding=12)
        self._cards.columnconfigure(0, weight=1)
        window = self._canvas.create_window((0, 0), window=self._cards, anchor="nw")
        self._cards.bind("<Configure>", lambda _e: self._canvas.configure(scrollregion=self._canvas.bbox("all")))
        self._canvas.bind("<Configure>", lambda e: self._canvas.itemconfigure(window, width=e.width))

        self._status = tk.StringVar(value="Loading highlights…")
        ttk.Label(self.root, textvariable=self._status, padding=(12, 4)).grid(row=2, column=0, columnspan=2, sticky="ew")

    def _clear_cards(self) -> None:
        for child in self._cards.winfo_children():
            child.destroy()

    def _add_message(self, text: str) -> None:
        ttk.Label(self._cards, text=text, wraplength=360, justify="left").grid(sticky="ew")

    def _add_card(self, row: int, rendered: RenderedHighlight) -> None:
        card = ttk.Frame(self._cards, padding=10, relief="ridge")
        card.grid(row=row, column=0, sticky="ew", pady=(0, 10))
        card.columnconfigure(0, weight=1)
        wrap = max(self._canvas.winfo_width() - 60, 240)

        if rendered.title:
            heading = ttk.Frame(card)
            heading.grid(sticky="w")
            link = ttk.Label(heading, text=rendered.title, foreground="#4a6ee0", cursor="hand2",
                             font=("TkDefaultFont", 11, "bold"))
            link.grid(row=0, column=0, sticky="w")
            link.bind("<Button-1>", lambda _e, path=rendered.source_file: self._open_note(path))
            if rendered.author:
                ttk.Label(heading, text=f" by {rendered.author}").grid(row=0, column=1, sticky="w")

        ttk.Label(card, text=rendered.text, wraplength=wrap, justify="left").grid(sticky="ew", pady=(6, 0))
        if rendered.comment:
            ttk.Label(card, text=rendered.comment, wraplength=wrap, justify="left",
                      font=("TkDefaultFont", 9, "italic")).grid(sticky="ew", pady=(6, 0))
        if rendered.metadata:
            ttk.Label(card, text=rendered.metadata, foreground="#777777").grid(sticky="w", pady=(6, 0))

    # ------------------------------------------------------------------
    # Refresh handling
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        self._status.set("Refreshing…")
        thread = threading.Thread(target=self._coordinator.request, daemon=True)
        thread.start()

    def _run_pass(self) -> ScanResult:
        return HighlightScanner(self._source, self.config).refresh()

    def _publish(self, result: ScanResult) -> None:
        # Called on the worker thread; hand the result to the Tk loop.
        self.root.after(0, lambda: self._display(result))

    def _display(self, result: ScanResult) -> None:
        self._clear_cards()
        if not result.ok:
            self._add_message(result.error or "")
            self._status.set("Refresh failed")
            return
        if not result.selection:
            self._add_message(NO_HIGHLIGHTS_MESSAGE)
        cards = [render_highlight(highlight, self.config) for highlight in result.selection]
        for row, card in enumerate(cards):
            self._add_card(row, card)
        self._status.set(f"Showing {len(cards)} of {len(result.highlights)} highlights")

    def _schedule_interval(self) -> None:
        if self._interval_job is not None:
            self.root.after_cancel(self._interval_job)
            self._interval_job = None
        if self.config.auto_refresh and self.config.refresh_interval > 0:
            self._interval_job = self.root.after(self.config.refresh_interval * 1000, self._on_interval)

    def _on_interval(self) -> None:
        self._interval_job = None
        self.refresh()
        self._schedule_interval()

    def _schedule_poll(self) -> None:
        if self._poll_job is not None:
            self.root.after_cancel(self._poll_job)
            self._poll_job = None
        if self.config.auto_refresh:
            self._poll_job = self.root.after(CHANGE_POLL_MS, self._on_poll)

    def _on_poll(self) -> None:
        self._poll_job = None
        # A slow vault scan must not stack up polls.
        if not self._polling.is_set():
            self._polling.set()
            threading.Thread(target=self._poll_changes, args=(self._monitor,), daemon=True).start()
        self._schedule_poll()

    def _poll_changes(self, monitor: ChangeMonitor) -> None:
        try:
            if monitor.poll():
                self.root.after(0, self.refresh)
        except SourceError as exc:
            logger.warning(f"Could not check vault for changes: {exc}")
        finally:
            self._polling.clear()

    # ------------------------------------------------------------------
    # Utility methods
    # ------------------------------------------------------------------
    def _open_settings(self) -> None:
        SettingsDialog(self.root, self.config, self.vault_root, self._apply_update)

    def _open_note(self, path: str) -> None:
        vault = quote(self.vault_root.name)
        webbrowser.open(f"obsidian://open?vault={vault}&file={quote(path)}")


class SettingsDialog:
    """Modal window for editing the panel's settings."""

    def __init__(self, parent: tk.Misc, config: HighlightsConfig, vault_root: Path, on_save) -> None:
        self.config = config
        self.vault_root = vault_root
        self._on_save = on_save
        self._new_vault: Optional[Path] = None

        self.window = tk.Toplevel(parent)
        self.window.title("Book Highlights Settings")
        self.window.transient(parent)
        self.window.resizable(False, False)

        self._vault_var = tk.StringVar(value=str(vault_root))
        self._vars: Dict[str, tk.Variable] = {}
        self._build_ui(form_values(config))
        self.window.grab_set()

    def _build_ui(self, values: Dict[str, Any]) -> None:
        frame = ttk.Frame(self.window, padding=20)
        frame.grid(row=0, column=0, sticky="nsew")
        frame.columnconfigure(1, weight=1)

        ttk.Label(frame, text="Obsidian vault:").grid(row=0, column=0, sticky="w", pady=(0, 6))
        vault_frame = ttk.Frame(frame)
        vault_frame.grid(row=0, column=1, sticky="ew", pady=(0, 6))
        vault_frame.columnconfigure(0, weight=1)
        ttk.Label(vault_frame, textvariable=self._vault_var).grid(row=0, column=0, sticky="ew", padx=(0, 8))
        ttk.Button(vault_frame, text="Change", command=self._change_vault).grid(row=0, column=1)

        for row, field in enumerate(SETTING_FIELDS, start=1):
            if field.kind == "bool":
                var: tk.Variable = tk.BooleanVar(value=bool(values[field.key]))
                ttk.Checkbutton(frame, text=field.label, variable=var).grid(
                    row=row, column=0, columnspan=2, sticky="w", pady=(0, 4)
                )
            else:
                var = tk.StringVar(value=str(values[field.key]))
                ttk.Label(frame, text=f"{field.label}:").grid(row=row, column=0, sticky="w", pady=(0, 4))
                entry = ttk.Entry(frame, textvariable=var, width=32)
                entry.grid(row=row, column=1, sticky="ew", pady=(0, 4))
            self._vars[field.key] = var

        button_frame = ttk.Frame(frame)
        button_frame.grid(row=len(SETTING_FIELDS) + 1, column=0, columnspan=2, sticky="e", pady=(12, 0))
        ttk.Button(button_frame, text="Cancel", command=self.window.destroy).grid(row=0, column=0)
        ttk.Button(button_frame, text="Save", command=self._save).grid(row=0, column=1, padx=(8, 0))

    def _change_vault(self) -> None:
        selected = filedialog.askdirectory(title="Select your Obsidian vault", mustexist=True, parent=self.window)
        if selected:
            self._new_vault = Path(selected)
            self._vault_var.set(selected)

    def _save(self) -> None:
        values = {key: var.get() for key, var in self._vars.items()}
        update = apply_settings(self.config, self.vault_root, values, self._new_vault)
        self.window.destroy()
        self._on_save(update)


def main() -> None:
    logger.remove()
    logger.add(sys.stderr, level="WARNING")

    root = tk.Tk()
    HighlightsPanel(root)
    root.mainloop()


if __name__ == "__main__":
    main()
