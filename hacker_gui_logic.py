"""
HackerOS GUI - Business Logic
Tool catalog, selection state, process execution and settings
ZERO UI code - completely independent of GUI
"""
import json
import logging
import os
import signal
import subprocess
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger("hacker_gui.logic")

RUNNING_PLACEHOLDER = "Running command..."

DEFAULT_SETTINGS: Dict[str, Any] = {
    "appearance_mode": "Dark",
    "color_theme": "blue",
    "window_pos": None,
}


def default_data_dir() -> str:
    """Data folder: HACKER_GUI_DATA_DIR if set, else data/ beside this script"""
    override = os.environ.get("HACKER_GUI_DATA_DIR")
    if override:
        return override
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")


# ==================== TOOLS & CATALOG ====================

class Tool(Enum):
    """CLI tools the GUI can invoke - the value is the executable name"""
    HACKER = "hacker"
    HLI = "hli"
    HACKERC = "hackerc"

    def __str__(self) -> str:
        return self.value


DEFAULT_TOOL = Tool.HACKER

COMMAND_CATALOG: Dict[Tool, Tuple[str, ...]] = {
    Tool.HACKER: (
        "unpack",
        "help-ui",
        "docs",
        "install",
        "remove",
        "flatpak-install",
        "flatpak-remove",
        "system",
        "run",
        "update",
        "game",
        "hacker-lang",
        "ascii",
        "shell",
        "enter",
        "remove-container",
        "restart",
        "plugin",
        "enable",
        "disable",
        "help",
    ),
    Tool.HLI: (
        "run",
        "compile",
        "check",
        "init",
        "clean",
        "repl",
        "editor",
        "unpack",
        "docs",
        "tutorials",
        "version",
        "help",
        "syntax",
        "help-ui",
    ),
    Tool.HACKERC: (
        "run",
        "compile",
        "help",
    ),
}


def get_commands(tool: Tool) -> List[str]:
    """Get the ordered subcommand list for a tool"""
    return list(COMMAND_CATALOG[tool])


def parse_tool(name: str) -> Tool:
    """
    Resolve a tool name from the selector

    Unknown names fall back to the first tool instead of raising.

    Args:
        name: Tool name as shown in the selector

    Returns:
        Matching Tool, or DEFAULT_TOOL
    """
    try:
        return Tool(name)
    except ValueError:
        logger.warning("Unknown tool %r, falling back to %s", name, DEFAULT_TOOL)
        return DEFAULT_TOOL


def split_args(text: str) -> List[str]:
    """Split free-form argument text on runs of whitespace"""
    return text.split()


def build_arguments(command: Optional[str], args: str) -> List[str]:
    """
    Build the argument list passed to the tool

    Args:
        command: Selected subcommand, or None if nothing is selected
        args: Free-form argument text

    Returns:
        Subcommand (empty string if none) followed by the split arguments
    """
    return [command or ""] + split_args(args)


# ==================== EXECUTION ====================

@dataclass(frozen=True)
class RunRequest:
    """Executable and arguments captured when a run starts"""
    executable: str
    arguments: List[str] = field(default_factory=list)


@dataclass
class ExecutionResult:
    """Outcome of one process invocation"""
    returncode: Optional[int] = None
    stdout: bytes = b""
    stderr: bytes = b""
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def execute(executable: str, arguments: List[str]) -> ExecutionResult:
    """
    Run a process to completion and capture its output

    Environment and working directory are inherited. A non-zero exit
    status is a normal result; only a failure to spawn is an error.

    Args:
        executable: Program name looked up on PATH
        arguments: Arguments passed after the program name

    Returns:
        ExecutionResult with status and captured output, or the spawn error
    """
    try:
        proc = subprocess.run(
            [executable, *arguments],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except (OSError, ValueError) as e:
        logger.error("Could not execute %s: %s", executable, e)
        return ExecutionResult(error=str(e))

    logger.info("%s exited with %s", executable, proc.returncode)
    return ExecutionResult(
        returncode=proc.returncode,
        stdout=proc.stdout or b"",
        stderr=proc.stderr or b"",
    )


class ProcessExecutor:
    """Runs one request at a time on a background thread"""

    def __init__(self, runner: Callable[[str, List[str]], ExecutionResult] = execute):
        self.runner = runner
        self.task: Optional[threading.Thread] = None

    @property
    def busy(self) -> bool:
        return self.task is not None and self.task.is_alive()

    def submit(self, request: RunRequest,
               on_finished: Callable[[ExecutionResult], None]) -> threading.Thread:
        """
        Start the request in a daemon thread

        on_finished is called from the worker thread; the caller is
        responsible for handing the result back to the UI thread.

        Args:
            request: What to run
            on_finished: Callback receiving the ExecutionResult
        """
        def work():
            try:
                result = self.runner(request.executable, request.arguments)
            except Exception as e:
                logger.exception("Run of %s failed", request.executable)
                result = ExecutionResult(error=str(e))
            on_finished(result)

        self.task = threading.Thread(target=work, name="hacker-gui-run", daemon=True)
        self.task.start()
        return self.task


def format_status(returncode: Optional[int]) -> str:
    """Render an exit status; negative codes mean the process was killed by a signal"""
    if returncode is None:
        return "unknown"
    if returncode < 0:
        signum = -returncode
        try:
            return f"signal: {signum} ({signal.Signals(signum).name})"
        except ValueError:
            return f"signal: {signum}"
    return f"exit status: {returncode}"


def decode_output(data: bytes) -> str:
    """Decode captured output, replacing invalid UTF-8"""
    return data.decode("utf-8", errors="replace")


def format_report(result: ExecutionResult) -> str:
    """Flatten an execution result into the text shown in the output panel"""
    if result.failed:
        return f"Error: {result.error}"

    return (
        f"Status: {format_status(result.returncode)}\n\n"
        f"Stdout:\n{decode_output(result.stdout)}\n\n"
        f"Stderr:\n{decode_output(result.stderr)}"
    )


# ==================== SELECTION STATE ====================

@dataclass
class Selection:
    """Current user choices and the last run's output"""
    tool: Tool = DEFAULT_TOOL
    command: Optional[str] = None
    args: str = ""
    output: str = ""
    running: bool = False


class HackerGuiLogic:
    """Business logic for HackerOS GUI - selection, execution and settings"""

    def __init__(self, data_dir: Optional[str] = None,
                 executor: Optional[ProcessExecutor] = None):
        """
        Initialize the logic layer

        Args:
            data_dir: Folder for app_config.json (default: HACKER_GUI_DATA_DIR
                or a data folder beside this script)
            executor: Process executor (default: background thread executor)
        """
        self.data_dir = data_dir or default_data_dir()
        os.makedirs(self.data_dir, exist_ok=True)
        self.app_config_file = os.path.join(self.data_dir, "app_config.json")

        self.selection = Selection()
        self.executor = executor or ProcessExecutor()

    # ==================== SELECTION ====================

    def tool_names(self) -> List[str]:
        """Get tool names for the tool selector"""
        return [str(t) for t in Tool]

    def current_commands(self) -> List[str]:
        """Get the subcommands of the selected tool"""
        return get_commands(self.selection.tool)

    def select_tool(self, name: str) -> List[str]:
        """
        Change the selected tool and clear the selected subcommand

        Args:
            name: Tool name from the selector

        Returns:
            Subcommand list for the new tool
        """
        self.selection.tool = parse_tool(name)
        self.selection.command = None
        return self.current_commands()

    def select_command(self, name: str):
        """Set the selected subcommand"""
        self.selection.command = name

    def update_args(self, text: str):
        """Replace the free-form argument text"""
        self.selection.args = text

    def run_button_label(self) -> str:
        return "Running..." if self.selection.running else "Run Command"

    # ==================== RUN ====================

    def run_command(self, on_finished: Callable[[ExecutionResult], None]) -> Optional[RunRequest]:
        """
        Start the selected tool unless a run is already in flight

        Args:
            on_finished: Called with the ExecutionResult when the process exits

        Returns:
            The submitted RunRequest, or None if a run was already in flight
        """
        if self.selection.running:
            logger.debug("Run ignored, a command is already running")
            return None

        self.selection.running = True
        self.selection.output = RUNNING_PLACEHOLDER

        request = RunRequest(
            executable=str(self.selection.tool),
            arguments=build_arguments(self.selection.command, self.selection.args),
        )
        logger.info("Running %s %s", request.executable, request.arguments)
        self.executor.submit(request, on_finished)
        return request

    def command_finished(self, result: ExecutionResult) -> str:
        """
        Record a finished run

        Args:
            result: Outcome delivered by the executor

        Returns:
            The new output text
        """
        self.selection.running = False
        self.selection.output = format_report(result)
        return self.selection.output

    # ==================== SETTINGS MANAGEMENT ====================

    def get_settings(self) -> Dict[str, Any]:
        """
        Get application settings

        Returns:
            Settings dictionary with defaults for missing keys
        """
        default = dict(DEFAULT_SETTINGS)

        if not os.path.exists(self.app_config_file):
            self._save_settings(default)
            return default

        try:
            with open(self.app_config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
            settings = data.get("settings", {})
            return {key: settings.get(key, value) for key, value in default.items()}
        except (OSError, ValueError, AttributeError) as e:
            logger.warning("Resetting unreadable settings file: %s", e)
            self._save_settings(default)
            return default

    def update_settings(self, new_settings: Dict[str, Any]):
        """Update application settings (partial update)"""
        current = self.get_settings()
        current.update(new_settings)
        self._save_settings(current)

    def save_window_position(self, x: int, y: int, w: int, h: int):
        """Save window position and size"""
        self.update_settings({"window_pos": [x, y, w, h]})

    def _save_settings(self, settings: Dict[str, Any]):
        try:
            with open(self.app_config_file, "w", encoding="utf-8") as f:
                json.dump({"settings": settings}, f, indent=2)
        except OSError as e:
            logger.error("Error saving settings: %s", e)
