"""Interactive terminal chat against the Neura server."""

from __future__ import annotations

import argparse
import asyncio
import logging
import shlex
from typing import Awaitable, Callable

import httpx
from rich.console import Console
from rich.padding import Padding
from rich.text import Text

from .api import DEFAULT_URL, AskClient
from .clipboard import ClipboardUnavailableError, copy_to_clipboard
from .conversation import Message, MessageType
from .formatting import code_blocks, format_answer, render_answer
from .input_collector import CommandDictation, DictationController, DictationUnavailableError
from .session import ChatSession
from .themes import THEMES, Palette, toggle

HELP = "Enter sends, end a line with \\ for a newline. Commands: /new /theme /voice /copy N /quit"

LineReader = Callable[[str], Awaitable[str]]


class ChatApp:
    """Terminal front end: reads input, drives the session, renders messages."""

    def __init__(
        self,
        session: ChatSession,
        console: Console,
        palette: Palette,
        dictation: DictationController | None = None,
        dictation_source: CommandDictation | None = None,
        copy: Callable[[str], None] = copy_to_clipboard,
    ) -> None:
        self.session = session
        self.console = console
        self.palette = palette
        self.dictation = dictation or DictationController(session.collector)
        self._dictation_source = dictation_source
        self._copy = copy

    async def run(self, read_line: LineReader) -> None:
        self.show_greeting()
        while True:
            try:
                line = await read_line(self.prompt())
            except (EOFError, KeyboardInterrupt):
                break
            if not await self.handle_line(line):
                break

    def prompt(self) -> str:
        count = self.session.collector.char_count
        return f"({count} chars) > " if count else "> "

    async def handle_line(self, line: str) -> bool:
        """Process one input line; returns False when the user quits."""
        collector = self.session.collector
        if not collector.text and line.startswith("/"):
            return await self.handle_command(line)

        if line.endswith("\\"):
            collector.append(line[:-1])
            collector.handle_key("Enter", shift=True)
            return True

        collector.append(line)
        if collector.handle_key("Enter"):
            await self.send()
        return True

    async def send(self) -> None:
        pending = self.session.collector.text
        if not pending.strip():
            self.session.collector.clear()
            return

        self._render_question(pending)
        with self.console.status("Thinking...", spinner="dots"):
            answer = await self.session.submit()
        if answer is not None:
            self.render_message(answer)

    async def handle_command(self, line: str) -> bool:
        name, *args = line.split() or [""]
        if name == "/quit":
            return False
        if name == "/new":
            self.session.new_chat()
            self.console.clear()
            self.show_greeting()
        elif name == "/theme":
            self.palette = toggle(self.palette)
            self.console.print(f"Switched to {self.palette.name} mode.", style=self.palette.muted)
        elif name == "/voice":
            await self.toggle_dictation()
        elif name == "/copy":
            self.copy_code(args)
        else:
            self.console.print(HELP, style=self.palette.muted)
        return True

    async def toggle_dictation(self) -> None:
        try:
            self.dictation.toggle()
        except DictationUnavailableError as exc:
            self.console.print(str(exc), style="bold red")
            return

        if self._dictation_source is not None and self.dictation.listening:
            with self.console.status("Recording... speak now", spinner="point"):
                await asyncio.to_thread(self._dictation_source.wait)

        if self.dictation.last_error:
            self.console.print(f"Dictation failed: {self.dictation.last_error}", style="bold red")
        elif self.session.collector.text:
            self.console.print(self.session.collector.text, style=self.palette.muted)

    def copy_code(self, args: list[str]) -> None:
        last = self.session.conversation.last_answer()
        blocks = code_blocks(format_answer(last.content)) if last else []
        try:
            index = int(args[0]) if args else 1
        except ValueError:
            index = 0
        if not 1 <= index <= len(blocks):
            self.console.print("No such code block in the last answer.", style="bold red")
            return

        try:
            self._copy(blocks[index - 1])
        except ClipboardUnavailableError as exc:
            self.console.print(str(exc), style="bold red")
            return
        self.console.print("Copied to clipboard.", style=self.palette.muted)

    def show_greeting(self) -> None:
        self.console.rule(Text("Neura", style=self.palette.accent))
        if not len(self.session.conversation):
            self.console.print("Hello! How can I help you today?", style=self.palette.accent)
            hint = HELP if self.dictation.supported else HELP.replace(" /voice", "")
            self.console.print(hint, style=self.palette.muted)

    def render_message(self, message: Message) -> None:
        if message.type is MessageType.QUESTION:
            self._render_question(message.content)
        else:
            self._render_answer(message.content)

    def _render_question(self, content: str) -> None:
        self.console.print(Text("You asked:", style=self.palette.question), justify="right")
        self.console.print(Text(content), justify="right")

    def _render_answer(self, content: str) -> None:
        self.console.print(Text("Neura:", style=self.palette.accent))
        for renderable in render_answer(format_answer(content), self.palette):
            self.console.print(Padding(renderable, (0, 0, 0, 2)))
        self.console.print()


async def run_chat(args: argparse.Namespace, console: Console) -> None:
    """Open the HTTP client and run the interactive loop."""

    async with httpx.AsyncClient() as client:
        ask_client = AskClient(client, url=args.url, timeout=args.timeout)
        session = ChatSession(ask_client.ask)

        source = CommandDictation(shlex.split(args.dictation_command)) if args.dictation_command else None
        app = ChatApp(
            session,
            console,
            THEMES[args.theme],
            dictation=DictationController(session.collector, source),
            dictation_source=source,
        )

        async def read_line(prompt: str) -> str:
            return await asyncio.to_thread(console.input, prompt)

        await app.run(read_line)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Terminal chat client for the Neura ask proxy.")
    parser.add_argument("--url", default=DEFAULT_URL, help="Ask endpoint URL (default: %(default)s)")
    parser.add_argument(
        "--timeout", type=float, default=None, help="Seconds to wait for an answer (default: no limit)."
    )
    parser.add_argument(
        "--dictation-command",
        help="Speech-to-text command that prints one transcript on stdout; enables /voice.",
    )
    parser.add_argument("--theme", choices=sorted(THEMES), default="light", help="Colour theme.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))
    try:
        asyncio.run(run_chat(args, Console()))
    except KeyboardInterrupt:  # pragma: no cover - manual usage only
        pass


if __name__ == "__main__":  # pragma: no cover
    main()
