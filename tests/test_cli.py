from click.testing import CliRunner

import metaai.cli as cli_module
from metaai.cli import cli
from metaai.cli import utils as cli_utils
from metaai.client import Reference, ResponseParseError, SessionStateError, SourceSet
from metaai.utils.config import Settings


class DummyClient:
    conversation_id = "conv-test"

    def __init__(self, replies=(), sources=None) -> None:
        self.replies = list(replies)
        self.sources = sources
        self.prompts = []
        self.closed = False

    def send_prompt(self, message):
        self.prompts.append(message)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def fetch_sources(self, fetch_id=None):
        if isinstance(self.sources, Exception):
            raise self.sources
        return self.sources

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True


def _install(monkeypatch, client: DummyClient) -> None:
    monkeypatch.setattr(cli_module, "load_settings", lambda path=None: Settings())
    monkeypatch.setattr(cli_utils, "build_client", lambda settings: client)


def _sources() -> SourceSet:
    return SourceSet(
        "BING",
        "tallest mountain",
        (
            Reference("https://example.com/everest", "Everest"),
            Reference("https://example.com/k2", "K2"),
        ),
    )


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "Chat with Meta AI from the terminal" in result.output


def test_chat_loop_prompts_and_lists_sources(monkeypatch):
    client = DummyClient(replies=["Mount Everest."], sources=_sources())
    _install(monkeypatch, client)

    runner = CliRunner()
    result = runner.invoke(cli, [], input="What is the tallest mountain?\nsources\nexit\n")

    assert result.exit_code == 0, result.output
    assert client.prompts == ["What is the tallest mountain?"]
    assert "Mount Everest." in result.output
    assert "Search Engine: BING | Query: tallest mountain" in result.output
    assert "Everest - https://example.com/everest" in result.output
    assert result.output.index("Everest - ") < result.output.index("K2 - ")
    assert "Goodbye!" in result.output
    assert client.closed is True


def test_chat_loop_reports_failures_and_keeps_going(monkeypatch):
    client = DummyClient(
        replies=[False, ResponseParseError("changed", context="chat response"), "finally"],
        sources=False,
    )
    _install(monkeypatch, client)

    runner = CliRunner()
    result = runner.invoke(cli, ["chat"], input="one\ntwo\nSOURCES\nthree\nexit\n")

    assert result.exit_code == 0, result.output
    assert result.output.count("There was an error sending your prompt.") == 2
    assert "There was an error grabbing sources." in result.output
    assert "finally" in result.output
    assert client.prompts == ["one", "two", "three"]


def test_chat_sources_before_prompt(monkeypatch):
    client = DummyClient(sources=SessionStateError("No fetch id available"))
    _install(monkeypatch, client)

    runner = CliRunner()
    result = runner.invoke(cli, ["chat"], input="Sources\n\nquit\n")

    assert result.exit_code == 0, result.output
    assert "No reply to show sources for yet." in result.output
    assert client.prompts == []


def test_ask_prints_reply_and_sources(monkeypatch):
    client = DummyClient(replies=["Paris."], sources=_sources())
    _install(monkeypatch, client)

    runner = CliRunner()
    result = runner.invoke(cli, ["ask", "capital", "of", "France?", "--sources"])

    assert result.exit_code == 0, result.output
    assert client.prompts == ["capital of France?"]
    assert result.output.startswith("Paris.\n")
    assert "K2 - https://example.com/k2" in result.output


def test_ask_fails_with_exit_code(monkeypatch):
    client = DummyClient(replies=[False])
    _install(monkeypatch, client)

    runner = CliRunner()
    result = runner.invoke(cli, ["ask", "hello"])

    assert result.exit_code == 1
    assert "There was an error sending your prompt." in result.output


def test_format_sources_lines():
    assert cli_utils.format_sources(_sources()) == [
        "Search Engine: BING | Query: tallest mountain",
        "Everest - https://example.com/everest",
        "K2 - https://example.com/k2",
    ]


def test_chat_loop_survives_session_state_errors(monkeypatch):
    client = DummyClient(replies=[SessionStateError("session is UNINITIALIZED"), "recovered"])
    _install(monkeypatch, client)
    runner = CliRunner()

    result = runner.invoke(cli, ["chat"], input="one\ntwo\nexit\n")

    assert result.exit_code == 0, result.output
    assert "There was an error sending your prompt." in result.output
    assert "recovered" in result.output
    assert client.prompts == ["one", "two"]
