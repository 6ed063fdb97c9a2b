"""
HackerOS GUI - CLI Tools Wrapper
Pure UI layer - ZERO business logic, no process handling
All data operations delegated to HackerGuiLogic
"""
import logging
import queue
from typing import Optional

import customtkinter as ctk

from hacker_gui_logic import ExecutionResult, HackerGuiLogic

logger = logging.getLogger("hacker_gui.ui")

POLL_INTERVAL_MS = 100


class HackerGUI:
    """Main GUI class - handles ONLY user interface and events"""

    def __init__(self, logic: Optional[HackerGuiLogic] = None):
        """Initialize the GUI with settings and create the main window"""
        self.logic = logic or HackerGuiLogic()

        # Results arrive on the worker thread and are applied on the Tk thread
        self.results: "queue.Queue[ExecutionResult]" = queue.Queue()

        self.saved_settings = self.logic.get_settings()
        ctk.set_appearance_mode(self.saved_settings["appearance_mode"])
        ctk.set_default_color_theme(self.saved_settings["color_theme"])

        self.root = ctk.CTk()
        self.root.title("HackerOS GUI - CLI Tools Wrapper")
        self.root.minsize(720, 400)

        pos = self.saved_settings.get("window_pos")
        if pos and len(pos) == 4:
            self.root.geometry(f"{pos[2]}x{pos[3]}+{pos[0]}+{pos[1]}")
        else:
            self.root.geometry("1000x640")

        self._build_ui()
        self._load_commands()

        self.root.protocol("WM_DELETE_WINDOW", self.on_close)

    def on_close(self):
        """Save window position before closing"""
        self.logic.save_window_position(
            self.root.winfo_x(),
            self.root.winfo_y(),
            self.root.winfo_width(),
            self.root.winfo_height(),
        )
        self.root.destroy()

    def _build_ui(self):
        """Build all UI components"""
        # ===== CONTROL ROW: tool, command, arguments, run =====
        row = ctk.CTkFrame(self.root)
        row.pack(fill="x", padx=20, pady=(20, 10))

        self.tool_combo = ctk.CTkComboBox(
            row,
            width=200,
            values=self.logic.tool_names(),
            command=self.on_tool_change,
            state="readonly",
        )
        self.tool_combo.set(str(self.logic.selection.tool))
        self.tool_combo.pack(side="left", padx=(0, 10))

        self.command_combo = ctk.CTkComboBox(
            row,
            width=200,
            values=[],
            command=self.on_command_change,
            state="readonly",
        )
        self.command_combo.pack(side="left", padx=(0, 10))

        self.args_entry = ctk.CTkEntry(
            row,
            placeholder_text="Enter additional arguments",
            height=35,
        )
        self.args_entry.pack(side="left", fill="x", expand=True, padx=(0, 10))
        self.args_entry.bind("<KeyRelease>", lambda e: self.on_args_change())
        self.args_entry.bind("<Return>", lambda e: self.on_run())

        self.run_btn = ctk.CTkButton(
            row,
            text=self.logic.run_button_label(),
            width=140,
            height=35,
            command=self.on_run,
        )
        self.run_btn.pack(side="left")

        # ===== OUTPUT AREA (scrollable, read-only) =====
        self.output = ctk.CTkTextbox(
            self.root,
            font=("Consolas", 14),
            wrap="word",
        )
        self.output.pack(fill="both", expand=True, padx=20, pady=(10, 20))
        self.output.configure(state="disabled")

    def _load_commands(self):
        """Fill the command selector for the current tool and clear its value"""
        self.command_combo.configure(values=self.logic.current_commands())
        self.command_combo.set("")

    def on_tool_change(self, selection: str):
        """Handle tool selection change"""
        self.logic.select_tool(selection)
        self._load_commands()

    def on_command_change(self, selection: str):
        """Handle subcommand selection change"""
        self.logic.select_command(selection)

    def on_args_change(self):
        """Handle argument text change"""
        self.logic.update_args(self.args_entry.get())

    def on_run(self):
        """Handle run button - delegates to logic layer"""
        # Pick up text that was pasted without a key release
        self.on_args_change()

        if self.logic.run_command(self.results.put) is None:
            return

        self.refresh_display()
        self.root.after(POLL_INTERVAL_MS, self._poll_results)

    def _poll_results(self):
        """Apply a finished run on the Tk thread, or check again later"""
        try:
            result = self.results.get_nowait()
        except queue.Empty:
            self.root.after(POLL_INTERVAL_MS, self._poll_results)
            return

        self.logic.command_finished(result)
        self.refresh_display()

    def refresh_display(self):
        """Render the run button label and output text from logic state"""
        self.run_btn.configure(text=self.logic.run_button_label())

        self.output.configure(state="normal")
        self.output.delete("1.0", "end")
        self.output.insert("1.0", self.logic.selection.output)
        self.output.configure(state="disabled")

    def run(self):
        """Start the application main loop"""
        logger.info("Starting main loop")
        self.root.mainloop()
