import asyncio
from dataclasses import dataclass

import pyperclip
import yaml
from pydantic_settings import CliApp
from rich.console import Console

from .audio.output import SoundDeviceAudioContext
from .audio.playback import PlaybackService
from .history import JsonFileHistoryStore
from .llm.lookup_base import WordLookupClient
from .llm.lookup_factory import create_gemini_client, create_lookup_client
from .logging import get_logger, setup_logging
from .render import render_session
from .session import LookupSession
from .settings import Settings
from .tts.gemini_tts import GeminiSpeechSynthesizer


PROMPT = "[bold]যেকোনো বাংলা শব্দ…[/bold] "

HELP_TEXT = """\
[bold]<word>[/bold]           look up a Bengali word
[bold]/play[/bold]            play the pronunciation of the current word
[bold]/copy notation[/bold]   copy the pronunciation notation
[bold]/copy ipa[/bold]        copy the IPA transcription
[bold]/h N[/bold]             search recent word N again
[bold]/s N[/bold]             search suggested word N
[bold]/help[/bold]            show this help
[bold]/quit[/bold]            leave"""


@dataclass
class Command:
    name: str
    argument: str = ""


def parse_command(line: str) -> Command:
    """Split a console line into a command; anything not starting with '/' is a search."""
    line = line.strip()
    if not line.startswith("/"):
        return Command("search", line)
    name, _, argument = line[1:].partition(" ")
    name = {"p": "play", "q": "quit", "exit": "quit", "c": "copy", "?": "help"}.get(name, name)
    return Command(name, argument.strip())


@dataclass
class Application:
    session: LookupSession
    lookup_client: WordLookupClient
    audio_context: SoundDeviceAudioContext


def build_application(settings: Settings) -> Application:
    client = create_gemini_client(settings.providers)
    lookup_client = create_lookup_client(settings.lookup, client)
    synthesizer = GeminiSpeechSynthesizer(client, settings.audio)
    audio_context = SoundDeviceAudioContext(sample_rate=settings.audio.sample_rate)
    playback = PlaybackService(synthesizer, lambda: audio_context, settings.audio)
    history_store = JsonFileHistoryStore(settings.history.file, capacity=settings.history.capacity)
    session = LookupSession(
        lookup_client=lookup_client,
        playback=playback,
        history_store=history_store,
        clipboard=pyperclip.copy,
    )
    return Application(session=session, lookup_client=lookup_client, audio_context=audio_context)


class ConsoleApp:
    def __init__(self, application: Application, console: Console, show_usage: bool = False) -> None:
        self.logger = get_logger("shuddho.cli.console")
        self.application = application
        self.session = application.session
        self.console = console
        self.show_usage = show_usage

    async def search(self, word_override: str | None = None) -> None:
        with self.console.status("সার্চ…"):
            await self.session.search(word_override)
        usage = self.application.lookup_client.last_usage
        if self.show_usage and usage is not None and self.session.error is None:
            usage.print(self.console)

    async def play(self) -> None:
        with self.console.status("অডিও…"):
            await self.session.play_pronunciation()

    async def handle(self, command: Command) -> bool:
        """Run one command; returns False when the console should stop."""
        session = self.session
        if command.name == "quit":
            return False
        if command.name == "help":
            self.console.print(HELP_TEXT)
            return True
        if command.name == "search":
            session.search_term = command.argument
            await self.search()
        elif command.name == "play":
            await self.play()
        elif command.name == "copy":
            self._copy(command.argument or "notation")
        elif command.name in ("h", "s"):
            words = [entry.word for entry in session.history] if command.name == "h" else list(session.suggestions)
            word = _pick(words, command.argument)
            if word is None:
                self.console.print(f"[red]No entry {command.argument!r}[/red]")
                return True
            await self.search(word)
        else:
            self.console.print(f"[red]Unknown command /{command.name}[/red], try /help")
            return True

        self.console.print(render_session(session))
        return True

    def _copy(self, kind: str) -> None:
        result = self.session.result
        if result is None:
            return
        if kind not in ("notation", "ipa"):
            self.console.print(f"[red]Can only copy 'notation' or 'ipa', not {kind!r}[/red]")
            return
        text = result.pronunciation_notation if kind == "notation" else result.ipa
        try:
            self.session.copy_to_clipboard(text, kind)
        except pyperclip.PyperclipException as e:
            self.logger.warning("Clipboard is not available: %s", e)
            self.console.print(f"[yellow]Clipboard is not available[/yellow], text: {text}")

    async def run(self) -> None:
        self.console.print(render_session(self.session))
        while True:
            try:
                line = await asyncio.to_thread(self.console.input, PROMPT)
            except EOFError:
                return
            if not await self.handle(parse_command(line)):
                return


def _pick(words: list[str], argument: str) -> str | None:
    try:
        index = int(argument)
    except ValueError:
        return None
    if 1 <= index <= len(words):
        return words[index - 1]
    return None


async def run_once(console_app: ConsoleApp, word: str, speak: bool) -> int:
    session = console_app.session
    await console_app.search(word.strip())
    console_app.console.print(render_session(session))
    if session.error is not None:
        return 1
    if speak:
        await console_app.play()
        if session.error is not None:
            console_app.console.print(render_session(session))
            return 1
        console_app.application.audio_context.wait()
    return 0


def app() -> None:
    """CLI entrypoint.
    Uses pydantic-settings CLI source
    to parse and merge arguments from CLI, env, dotenv, and YAML config.
    """
    settings = CliApp.run(Settings)

    setup_logging(settings.log_level)
    logger = get_logger("shuddho.cli")

    logger.info(
        "Settings loaded:\n%s",
        yaml.safe_dump(
            settings.model_dump(mode="json"),
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        ),
    )

    console_app = ConsoleApp(build_application(settings), Console(), show_usage=settings.show_usage)
    try:
        if settings.word:
            raise SystemExit(asyncio.run(run_once(console_app, settings.word, settings.speak)))
        asyncio.run(console_app.run())
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    app()
