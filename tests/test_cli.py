import io
import sys
from typing import Any

import pytest
from rich.console import Console

from neura_client.cli import ChatApp, parse_args
from neura_client.clipboard import ClipboardUnavailableError
from neura_client.input_collector import CommandDictation, DictationController
from neura_client.session import ChatSession
from neura_client.themes import DARK, LIGHT


class ScriptedAsker:
    def __init__(self, answer: str) -> None:
        self.answer = answer
        self.questions: list[str] = []

    async def __call__(self, question: str) -> dict[str, Any]:
        self.questions.append(question)
        return {"answer": self.answer}


def make_app(answer: str = "hi", copy=None) -> tuple[ChatApp, ScriptedAsker, Console]:
    asker = ScriptedAsker(answer)
    console = Console(file=io.StringIO(), record=True, width=80, color_system=None)
    copied: list[str] = []
    app = ChatApp(ChatSession(asker), console, LIGHT, copy=copy or copied.append)
    app.copied = copied
    return app, asker, console


async def feed(app: ChatApp, lines: list[str]) -> None:
    pending = list(lines)

    async def read_line(_: str) -> str:
        if not pending:
            raise EOFError
        return pending.pop(0)

    await app.run(read_line)


@pytest.mark.asyncio
async def test_question_and_answer_rendered() -> None:
    app, asker, console = make_app("Use `print`")

    await feed(app, ["hello"])

    output = console.export_text()
    assert asker.questions == ["hello"]
    assert "You asked:" in output
    assert "Use print" in output


@pytest.mark.asyncio
async def test_backslash_continues_question() -> None:
    app, asker, _ = make_app()

    await feed(app, ["first line\\", "second line"])

    assert asker.questions == ["first line\nsecond line"]


@pytest.mark.asyncio
async def test_blank_line_sends_nothing() -> None:
    app, asker, _ = make_app()

    await feed(app, ["", "   "])

    assert asker.questions == []
    assert len(app.session.conversation) == 0


@pytest.mark.asyncio
async def test_prompt_shows_character_count() -> None:
    app, _, _ = make_app()

    await app.handle_line("abc\\")

    assert app.prompt() == "(4 chars) > "


@pytest.mark.asyncio
async def test_new_command_resets_conversation() -> None:
    app, _, _ = make_app()

    await feed(app, ["hello", "/new"])

    assert len(app.session.conversation) == 0


@pytest.mark.asyncio
async def test_theme_command_toggles_palette() -> None:
    app, _, _ = make_app()

    await feed(app, ["/theme"])

    assert app.palette is DARK


@pytest.mark.asyncio
async def test_quit_stops_loop() -> None:
    app, asker, _ = make_app()

    await feed(app, ["/quit", "never sent"])

    assert asker.questions == []


@pytest.mark.asyncio
async def test_voice_without_capability_reports() -> None:
    app, _, console = make_app()

    await feed(app, ["/voice"])

    assert "not supported" in console.export_text()


@pytest.mark.asyncio
async def test_copy_command_copies_code_block() -> None:
    app, _, _ = make_app("```py\nx = 1\n```\n```sh\nls\n```")

    await feed(app, ["show me", "/copy 2"])

    assert app.copied == ["ls"]


@pytest.mark.asyncio
async def test_copy_command_out_of_range() -> None:
    app, _, console = make_app("no code here")

    await feed(app, ["hello", "/copy 1"])

    assert app.copied == []
    assert "No such code block" in console.export_text()


@pytest.mark.asyncio
async def test_copy_command_without_clipboard() -> None:
    def unavailable(_: str) -> None:
        raise ClipboardUnavailableError("No clipboard tool found")

    app, _, console = make_app("```\nx\n```", copy=unavailable)

    await feed(app, ["hello", "/copy"])

    assert "No clipboard tool found" in console.export_text()


def test_parse_args_defaults() -> None:
    args = parse_args([])

    assert args.url == "http://127.0.0.1:3001/ask"
    assert args.theme == "light"
    assert args.dictation_command is None


@pytest.mark.asyncio
async def test_voice_command_appends_transcript() -> None:
    app, asker, _ = make_app()
    source = CommandDictation([sys.executable, "-c", "print('spoken question')"])
    app.dictation = DictationController(app.session.collector, source)
    app._dictation_source = source

    await feed(app, ["/voice", ""])

    assert asker.questions == ["spoken question"]
