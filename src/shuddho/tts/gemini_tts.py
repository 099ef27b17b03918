import base64

from google import genai
from google.genai import errors, types
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..errors import AudioGenerationError
from ..llm.jinja2_prompt_formatter import PromptRenderer
from ..logging import get_logger
from ..settings import PronunciationAudioSettings
from .tts_base import SpeechSynthesizer


def build_pronunciation_prompt(word: str, notation: str) -> str:
    return PromptRenderer.render_resource("pronunciation.j2", {"word": word, "notation": notation})


def extract_inline_audio(response: types.GenerateContentResponse) -> bytes:
    """Return the first inline data payload of the first candidate.

    The SDK hands out bytes; a raw REST payload carries base64 text.
    """
    candidates = response.candidates or []
    content = candidates[0].content if candidates else None
    for part in (content.parts if content and content.parts else []):
        if part.inline_data is not None and part.inline_data.data:
            data = part.inline_data.data
            if isinstance(data, str):
                return base64.b64decode(data)
            return bytes(data)
    raise AudioGenerationError("Audio generation failed")


class GeminiSpeechSynthesizer(SpeechSynthesizer):
    retry_wait = wait_exponential(min=1, max=10)

    def __init__(self, client: genai.Client, audio_settings: PronunciationAudioSettings) -> None:
        self.logger = get_logger("shuddho.tts.gemini")
        self.logger.debug(
            "Initializing Gemini TTS for model '%s' and voice '%s'",
            audio_settings.model, audio_settings.voice_name,
        )
        self._client = client
        self._audio_settings = audio_settings

    async def synthesize(self, word: str, notation: str) -> bytes:
        self.logger.info("Synthesizing pronunciation of '%s' as [%s]", word, notation)
        prompt = build_pronunciation_prompt(word, notation)
        audio = b""
        try:
            async for attempt in AsyncRetrying(
                reraise=True,
                stop=stop_after_attempt(self._audio_settings.max_attempts),
                wait=self.retry_wait,
                retry=retry_if_exception_type(errors.ServerError),
            ):
                with attempt:
                    audio = await self._synthesize_single(prompt)
        except errors.ServerError as e:
            self.logger.warning("Gemini TTS call failed with code %s: %s", e.code, e.message)
            raise AudioGenerationError(f"Audio generation failed: {e}") from e
        self.logger.info("Received %d bytes of PCM audio", len(audio))
        return audio

    async def _synthesize_single(self, prompt: str) -> bytes:
        try:
            response = await self._client.aio.models.generate_content(
                model=self._audio_settings.model,
                contents=[types.Content(role="user", parts=[types.Part.from_text(text=prompt)])],
                config=types.GenerateContentConfig(
                    response_modalities=["AUDIO"],
                    speech_config=types.SpeechConfig(
                        voice_config=types.VoiceConfig(
                            prebuilt_voice_config=types.PrebuiltVoiceConfig(
                                voice_name=self._audio_settings.voice_name,
                            ),
                        ),
                    ),
                ),
            )
        except errors.ServerError:
            raise
        except errors.APIError as e:
            self.logger.warning("Gemini TTS call failed with code %s: %s", e.code, e.message)
            raise AudioGenerationError(f"Audio generation failed: {e}") from e

        try:
            return extract_inline_audio(response)
        except AudioGenerationError:
            self.logger.error(
                "Gemini TTS returned no audio. model='%s' voice='%s'",
                self._audio_settings.model, self._audio_settings.voice_name,
            )
            raise
