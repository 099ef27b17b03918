"""Stand-ins for the Gemini client and its responses."""

from unittest.mock import AsyncMock, MagicMock

from google.genai import types


def make_text_response(
    text: str | None,
    usage: types.GenerateContentResponseUsageMetadata | None = None,
) -> types.GenerateContentResponse:
    parts = [types.Part(text=text)] if text is not None else []
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=parts))],
        usage_metadata=usage,
    )


def make_audio_response(*parts: types.Part) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=list(parts)))],
    )


def audio_part(data: bytes | str) -> types.Part:
    return types.Part(inline_data=types.Blob(data=data, mime_type="audio/L16;codec=pcm;rate=24000"))


def make_fake_client(*responses_or_errors) -> MagicMock:
    """``genai.Client`` whose async ``generate_content`` yields the given items in order."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(side_effect=list(responses_or_errors))
    return client
