import threading

import pytest

from hacker_gui_logic import (
    RUNNING_PLACEHOLDER,
    ExecutionResult,
    HackerGuiLogic,
    ProcessExecutor,
    Tool,
)


class RecordingExecutor:
    """Stands in for ProcessExecutor and keeps submitted requests"""

    def __init__(self):
        self.requests = []
        self.callbacks = []

    def submit(self, request, on_finished):
        self.requests.append(request)
        self.callbacks.append(on_finished)


@pytest.fixture
def executor():
    return RecordingExecutor()


@pytest.fixture
def logic(tmp_path, executor):
    return HackerGuiLogic(data_dir=str(tmp_path), executor=executor)


def test_initial_state(logic):
    sel = logic.selection
    assert sel.tool is Tool.HACKER
    assert sel.command is None
    assert sel.args == ""
    assert sel.output == ""
    assert sel.running is False
    assert logic.tool_names() == ["hacker", "hli", "hackerc"]
    assert logic.current_commands()[0] == "unpack"
    assert logic.run_button_label() == "Run Command"


def test_select_tool_clears_command(logic):
    logic.select_command("install")
    commands = logic.select_tool("hackerc")
    assert commands == ["run", "compile", "help"]
    assert logic.selection.tool is Tool.HACKERC
    assert logic.selection.command is None


def test_reselecting_same_tool_still_clears_command(logic):
    logic.select_tool("hli")
    logic.select_command("repl")
    logic.select_tool("hli")
    assert logic.selection.command is None


def test_unknown_tool_falls_back_to_first(logic):
    logic.select_tool("hli")
    logic.select_tool("unknown")
    assert logic.selection.tool is Tool.HACKER


def test_select_command_and_args_are_verbatim(logic):
    logic.select_command("not-in-catalog")
    logic.update_args("  spaced   out ")
    assert logic.selection.command == "not-in-catalog"
    assert logic.selection.args == "  spaced   out "


def test_run_builds_request(logic, executor):
    logic.select_tool("hli")
    logic.select_command("compile")
    logic.update_args("a b  c")

    request = logic.run_command(lambda result: None)

    assert request.executable == "hli"
    assert request.arguments == ["compile", "a", "b", "c"]
    assert executor.requests == [request]
    assert logic.selection.running is True
    assert logic.selection.output == RUNNING_PLACEHOLDER
    assert logic.run_button_label() == "Running..."


def test_run_with_command_and_no_args(logic, executor):
    logic.select_command("install")
    logic.run_command(lambda result: None)
    assert executor.requests[0].arguments == ["install"]


def test_run_without_command_passes_empty_argument(logic, executor):
    logic.run_command(lambda result: None)
    assert executor.requests[0].executable == "hacker"
    assert executor.requests[0].arguments == [""]


def test_run_while_running_is_ignored(logic, executor):
    logic.run_command(lambda result: None)
    before = (logic.selection.output, logic.selection.running)

    assert logic.run_command(lambda result: None) is None
    assert len(executor.requests) == 1
    assert (logic.selection.output, logic.selection.running) == before


def test_request_captures_selection_by_value(logic, executor):
    logic.select_command("run")
    logic.update_args("one")
    request = logic.run_command(lambda result: None)

    logic.update_args("two")
    logic.select_tool("hackerc")
    assert request.executable == "hacker"
    assert request.arguments == ["run", "one"]


def test_finished_success(logic):
    logic.run_command(lambda result: None)
    output = logic.command_finished(ExecutionResult(returncode=0, stdout=b"ok\n"))

    assert output == "Status: exit status: 0\n\nStdout:\nok\n\n\nStderr:\n"
    assert logic.selection.output == output
    assert logic.selection.running is False
    assert logic.run_button_label() == "Run Command"


def test_finished_failure_allows_next_run(logic, executor):
    logic.run_command(lambda result: None)
    logic.command_finished(ExecutionResult(error="[Errno 2] No such file or directory: 'hacker'"))

    assert logic.selection.output == "Error: [Errno 2] No such file or directory: 'hacker'"
    assert logic.selection.running is False

    assert logic.run_command(lambda result: None) is not None
    assert len(executor.requests) == 2


def test_null_byte_argument_does_not_leave_run_stuck(tmp_path):
    logic = HackerGuiLogic(data_dir=str(tmp_path), executor=ProcessExecutor())
    done = threading.Event()
    received = []

    def on_finished(result):
        received.append(result)
        done.set()

    logic.select_command("run")
    logic.update_args("a\x00b")
    assert logic.run_command(on_finished) is not None
    assert done.wait(5)

    logic.command_finished(received[0])
    assert logic.selection.running is False
    assert logic.selection.output.startswith("Error: ")
