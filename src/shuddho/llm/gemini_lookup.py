from google import genai
from google.genai import errors, types
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..errors import LookupTransportError
from ..settings import WordLookupSettings
from .jinja2_prompt_formatter import PromptRenderer
from .lookup_base import WordLookupClient
from .token_usage import GeminiTokenUsage


WORD_DETAILS_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "word": types.Schema(type=types.Type.STRING),
        "pronunciationNotation": types.Schema(
            type=types.Type.STRING,
            description="Bengali phonetic notation using strict Bangla Academy symbols.",
        ),
        "ipa": types.Schema(type=types.Type.STRING),
        "meaning": types.Schema(type=types.Type.STRING),
        "partsOfSpeech": types.Schema(type=types.Type.STRING),
        "examples": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.STRING),
        ),
        "rulesApplied": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.STRING),
            description="Cited rules from Bangla Academy grammar.",
        ),
    },
    required=["word", "pronunciationNotation", "ipa", "meaning", "partsOfSpeech", "examples"],
)


def build_lookup_prompt(word: str) -> str:
    return PromptRenderer.render_resource("word_lookup.j2", {"word": word})


class GeminiWordLookupClient(WordLookupClient):
    retry_wait = wait_exponential(min=1, max=10)

    def __init__(self, client: genai.Client, lookup_settings: WordLookupSettings) -> None:
        super().__init__()
        self._client = client
        self._model = lookup_settings.model
        self._max_attempts = lookup_settings.max_attempts
        self._logger.debug("Initialized Gemini lookup client for model '%s'", self._model)

    async def _call_llm(self, word: str) -> tuple[str | None, GeminiTokenUsage]:
        response = None
        async for attempt in AsyncRetrying(
            reraise=True,
            stop=stop_after_attempt(self._max_attempts),
            wait=self.retry_wait,
            retry=retry_if_exception_type(LookupTransportError),
        ):
            with attempt:
                response = await self._generate(word)

        return response.text, GeminiTokenUsage.from_metadata(self._model, response.usage_metadata)

    async def _generate(self, word: str) -> types.GenerateContentResponse:
        self._logger.info("Calling Gemini API for model '%s', this may take a while...", self._model)
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=build_lookup_prompt(word),
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=WORD_DETAILS_SCHEMA,
                ),
            )
        except errors.APIError as e:
            self._logger.warning("Gemini API call failed with code %s: %s", e.code, e.message)
            raise LookupTransportError(f"Gemini API call failed: {e}") from e
        self._logger.info("Gemini API call completed")
        return response
