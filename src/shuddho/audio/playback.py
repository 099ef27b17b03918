from typing import Callable

from ..logging import get_logger
from ..settings import PronunciationAudioSettings
from ..tts.tts_base import SpeechSynthesizer
from .pcm import AudioBuffer, AudioContext, decode_audio_data


class PlaybackService:
    """Synthesize, decode and start playback of a word's pronunciation.

    The audio context is created on the first play and reused afterwards;
    nothing tears it down, it lives as long as the process.
    """

    def __init__(
        self,
        synthesizer: SpeechSynthesizer,
        context_factory: Callable[[], AudioContext],
        audio_settings: PronunciationAudioSettings,
    ) -> None:
        self.logger = get_logger("shuddho.audio.playback")
        self._synthesizer = synthesizer
        self._context_factory = context_factory
        self._audio_settings = audio_settings
        self._context: AudioContext | None = None

    @property
    def context(self) -> AudioContext:
        if self._context is None:
            self.logger.debug("Creating audio output context")
            self._context = self._context_factory()
        return self._context

    async def play(self, word: str, notation: str) -> AudioBuffer:
        context = self.context
        pcm = await self._synthesizer.synthesize(word, notation)
        buffer = decode_audio_data(
            pcm,
            context,
            sample_rate=self._audio_settings.sample_rate,
            num_channels=self._audio_settings.channels,
        )
        context.play(buffer)
        self.logger.info("Started playback of '%s' (%.2f s)", word, buffer.duration)
        return buffer
