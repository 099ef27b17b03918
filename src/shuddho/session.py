import asyncio
from typing import Callable

from .audio.playback import PlaybackService
from .errors import WordLookupError
from .history import HistoryStore, SearchHistoryEntry
from .llm.lookup_base import WordLookupClient
from .logging import get_logger
from .tasks import TaskHandle
from .word_details import WordDetails


LOOKUP_ERROR_MESSAGE = "দুঃখিত, তথ্যটি পাওয়া যায়নি। সঠিক বানান লিখুন।"
AUDIO_ERROR_MESSAGE = "অডিও প্লে করতে সমস্যা হয়েছে।"

SUGGESTED_WORDS = ("ঐতিহ্য", "অধ্যক্ষ", "বিস্ময়", "নৈসর্গিক")

COPIED_RESET_SECONDS = 2.0


class LookupSession:
    """State behind the lookup screen: query, flags, result, error and history.

    Failures never escape ``search`` or ``play_pronunciation``; they end up as
    one localized message per category in ``error``.
    """

    def __init__(
        self,
        lookup_client: WordLookupClient,
        playback: PlaybackService,
        history_store: HistoryStore,
        clipboard: Callable[[str], None] | None = None,
        copied_reset_seconds: float = COPIED_RESET_SECONDS,
    ) -> None:
        self.logger = get_logger("shuddho.session")
        self._lookup_client = lookup_client
        self._playback = playback
        self._history_store = history_store
        self._clipboard = clipboard
        self._copied_reset_seconds = copied_reset_seconds
        self._copied_reset: asyncio.TimerHandle | None = None

        self.search_term = ""
        self.loading = False
        self.audio_loading = False
        self.result: WordDetails | None = None
        self.error: str | None = None
        self.copied: str | None = None

    @property
    def history(self) -> list[SearchHistoryEntry]:
        return self._history_store.entries

    @property
    def suggestions(self) -> tuple[str, ...]:
        if self.result is not None or self.loading:
            return ()
        return SUGGESTED_WORDS

    async def search(self, word_override: str | None = None) -> None:
        word = word_override or self.search_term.strip()
        if not word or self.loading:
            return

        self.loading = True
        self.error = None
        self.copied = None
        try:
            details = await self._lookup_client.get_word_details(word)
            self.result = details
            self._history_store.append(word)
            if not word_override:
                self.search_term = ""
        except WordLookupError as e:
            self.logger.warning("Lookup of '%s' failed (%s): %s", word, type(e).__name__, e)
            self.error = LOOKUP_ERROR_MESSAGE
        except Exception:
            self.logger.exception("Unexpected error while looking up '%s'", word)
            self.error = LOOKUP_ERROR_MESSAGE
        finally:
            self.loading = False

    async def play_pronunciation(self) -> None:
        if self.result is None or self.audio_loading:
            return

        self.audio_loading = True
        try:
            await self._playback.play(self.result.word, self.result.pronunciation_notation)
        except Exception:
            self.logger.exception("Playback of '%s' failed", self.result.word)
            self.error = AUDIO_ERROR_MESSAGE
        finally:
            self.audio_loading = False

    def submit_search(self, word_override: str | None = None) -> TaskHandle[None]:
        return TaskHandle(self.search(word_override), name="search")

    def submit_play(self) -> TaskHandle[None]:
        return TaskHandle(self.play_pronunciation(), name="play")

    def copy_to_clipboard(self, text: str, kind: str) -> None:
        if self._clipboard is not None:
            self._clipboard(text)
        self.copied = kind

        if self._copied_reset is not None:
            self._copied_reset.cancel()
            self._copied_reset = None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._copied_reset = loop.call_later(self._copied_reset_seconds, self._clear_copied)

    def _clear_copied(self) -> None:
        self.copied = None
        self._copied_reset = None
