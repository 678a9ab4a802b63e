from types import SimpleNamespace

import pytest
from prompt_toolkit.application import Application
from prompt_toolkit.application.current import set_app
from prompt_toolkit.buffer import Buffer, CompletionState
from prompt_toolkit.completion import Completion
from prompt_toolkit.input import DummyInput
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Layout, Window
from prompt_toolkit.layout.controls import BufferControl
from prompt_toolkit.output import DummyOutput

from vfsh.cli import build_parser, run_commands
from vfsh.history import HistoryNavigator
from vfsh.repl import history_key_bindings
from vfsh.shell import RenderResult


def test_parser_collects_command_lines():
    args = build_parser().parse_args(["--url", "http://vfs.test", "-c", "ls", "-c", "cat /a", "--unordered"])

    assert args.url == "http://vfs.test"
    assert args.command == ["ls", "cat /a"]
    assert args.unordered is True


@pytest.mark.asyncio
async def test_run_commands_prints_results(shell, formatter, output):
    status = await run_commands(shell, formatter, ["cd docs", "ls"])

    text = output.getvalue()
    assert status == 0
    assert "> cd docs" in text
    assert "Listing /docs/" in text
    assert "/docs/readme.txt" in text
    assert len(shell.history) == 0


@pytest.mark.asyncio
async def test_run_commands_reports_failure(shell, formatter, output):
    status = await run_commands(shell, formatter, ["cat /missing.txt", "pwd"])

    assert status == 1
    assert "Error: Not found: /missing.txt" in output.getvalue()


def test_error_results_are_not_parsed_as_markup(formatter, output):
    formatter.print_result(RenderResult("bad [red]input", error=True))

    assert "Error: bad [red]input" in output.getvalue()


def test_success_results_are_rendered_as_markup(formatter, output):
    formatter.print_result(RenderResult("[bold]Wrote /a[/bold]"))

    assert output.getvalue() == "Wrote /a\n"


@pytest.mark.asyncio
async def test_file_content_is_shown_without_emoji_codes(shell, formatter, output, fake_fs):
    fake_fs.files["/smile.txt"] = "ok :thumbs_up: done"

    await run_commands(shell, formatter, ["cat /smile.txt"])

    assert "ok :thumbs_up: done" in output.getvalue()


def test_error_messages_are_shown_without_emoji_codes(formatter, output):
    formatter.print_result(RenderResult("Not found: /:smile:.txt", error=True))

    assert "Error: Not found: /:smile:.txt" in output.getvalue()


class TestHistoryKeyBindings:

    @pytest.fixture
    def history(self):
        history = HistoryNavigator()
        history.append("ls")
        history.append("pwd")
        return history

    @pytest.fixture
    def buffer(self):
        return Buffer()

    def press(self, history, buffer, *keys):
        [binding] = history_key_bindings(history).get_bindings_for_keys(keys)
        binding.handler(SimpleNamespace(current_buffer=buffer))

    def test_up_recalls_previous_lines(self, history, buffer):
        self.press(history, buffer, Keys.Up)
        assert buffer.text == "pwd"
        assert buffer.cursor_position == 3

        self.press(history, buffer, Keys.Up)
        assert buffer.text == "ls"

    def test_down_at_live_input_keeps_buffer(self, history, buffer):
        buffer.text = "half typed"

        self.press(history, buffer, Keys.Down)

        assert buffer.text == "half typed"

    def test_escape_enter_records_without_running(self, history, buffer):
        buffer.text = "rm /important"

        self.press(history, buffer, Keys.Escape, Keys.ControlM)

        assert buffer.text == ""
        assert history.entries == ["ls", "pwd", "rm /important"]

    def test_arrows_leave_open_completion_menu_alone(self, history, buffer):
        app = Application(
            layout=Layout(Window(BufferControl(buffer))),
            input=DummyInput(),
            output=DummyOutput(),
        )
        bindings = history_key_bindings(history)
        [up] = bindings.get_bindings_for_keys((Keys.Up,))
        [down] = bindings.get_bindings_for_keys((Keys.Down,))

        with set_app(app):
            assert up.filter()
            assert down.filter()

            buffer.complete_state = CompletionState(buffer.document, [Completion("pwd", 0)])

            assert not up.filter()
            assert not down.filter()
