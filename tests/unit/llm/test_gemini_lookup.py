"""Unit tests for the Gemini word lookup adapter."""

import pytest
from google import genai
from google.genai import errors, types
from tenacity import wait_none

from helpers.gemini_fakes import make_fake_client, make_text_response
from shuddho.errors import LookupParseError, LookupTransportError, WordLookupError
from shuddho.llm.gemini_lookup import WORD_DETAILS_SCHEMA, GeminiWordLookupClient
from shuddho.llm.lookup_factory import create_lookup_client
from shuddho.settings import WordLookupSettings


def server_error() -> errors.ServerError:
    return errors.ServerError(503, {"error": {"code": 503, "message": "overloaded", "status": "UNAVAILABLE"}})


@pytest.fixture(autouse=True)
def no_retry_wait(monkeypatch):
    monkeypatch.setattr(GeminiWordLookupClient, "retry_wait", wait_none())


class TestGetWordDetails:
    """Request shaping and response parsing."""

    @pytest.mark.asyncio
    async def test_single_request_with_word_and_schema(self, bismoy_json):
        """One outbound request carrying the word in the prompt and the fixed schema."""
        client = make_fake_client(make_text_response(bismoy_json))
        lookup = GeminiWordLookupClient(client, WordLookupSettings())

        await lookup.get_word_details("বিস্ময়")

        client.aio.models.generate_content.assert_awaited_once()
        kwargs = client.aio.models.generate_content.await_args.kwargs
        assert kwargs["model"] == "gemini-3-pro-preview"
        assert '"বিস্ময়"' in kwargs["contents"]
        config = kwargs["config"]
        assert config.response_mime_type == "application/json"
        assert config.response_schema == WORD_DETAILS_SCHEMA

    def test_schema_fields(self):
        """rulesApplied is the only optional field."""
        assert set(WORD_DETAILS_SCHEMA.properties) == {
            "word", "pronunciationNotation", "ipa", "meaning", "partsOfSpeech", "examples", "rulesApplied",
        }
        assert "rulesApplied" not in WORD_DETAILS_SCHEMA.required
        assert WORD_DETAILS_SCHEMA.properties["examples"].type == types.Type.ARRAY

    @pytest.mark.asyncio
    async def test_parses_all_fields(self, bismoy_json):
        client = make_fake_client(make_text_response(bismoy_json))
        details = await GeminiWordLookupClient(client, WordLookupSettings()).get_word_details("বিস্ময়")

        assert details.word == "বিস্ময়"
        assert details.pronunciation_notation == "বিশ্‌শয়্"
        assert details.ipa == "biʃːɔe̯"
        assert details.parts_of_speech == "বিশেষ্য"
        assert details.meaning.startswith("আশ্চর্য")
        assert len(details.examples) == 2
        assert len(details.rules_applied) == 2

    @pytest.mark.asyncio
    async def test_rules_applied_may_be_absent(self):
        answer = (
            '{"word": "ঐতিহ্য", "pronunciationNotation": "ওইতিজ্‌ঝো", "ipa": "oi̯tiɟːʰo",'
            ' "meaning": "পরম্পরাগত রীতি", "partsOfSpeech": "বিশেষ্য", "examples": []}'
        )
        client = make_fake_client(make_text_response(answer))
        details = await GeminiWordLookupClient(client, WordLookupSettings()).get_word_details("ঐতিহ্য")
        assert details.rules_applied is None
        assert details.examples == []

    @pytest.mark.asyncio
    async def test_surrounding_whitespace_is_ignored(self, bismoy_json):
        client = make_fake_client(make_text_response(f"\n\n  {bismoy_json}  \n"))
        details = await GeminiWordLookupClient(client, WordLookupSettings()).get_word_details("বিস্ময়")
        assert details.word == "বিস্ময়"

    @pytest.mark.asyncio
    async def test_records_token_usage(self, bismoy_json):
        usage = types.GenerateContentResponseUsageMetadata(
            prompt_token_count=100, candidates_token_count=50, total_token_count=150,
        )
        client = make_fake_client(make_text_response(bismoy_json, usage))
        lookup = GeminiWordLookupClient(client, WordLookupSettings())
        await lookup.get_word_details("বিস্ময়")
        assert lookup.last_usage.total == 150
        assert lookup.last_usage.model == "gemini-3-pro-preview"


class TestLookupFailures:
    """Failures surface as typed lookup errors."""

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        client = make_fake_client(make_text_response("not json at all"))
        with pytest.raises(LookupParseError):
            await GeminiWordLookupClient(client, WordLookupSettings()).get_word_details("ক")

    @pytest.mark.asyncio
    async def test_missing_required_field(self):
        client = make_fake_client(make_text_response('{"word": "ক", "ipa": "kɔ"}'))
        with pytest.raises(LookupParseError, match="schema"):
            await GeminiWordLookupClient(client, WordLookupSettings()).get_word_details("ক")

    @pytest.mark.asyncio
    async def test_empty_answer(self):
        client = make_fake_client(make_text_response(None))
        with pytest.raises(LookupParseError, match="empty"):
            await GeminiWordLookupClient(client, WordLookupSettings()).get_word_details("ক")

    @pytest.mark.asyncio
    async def test_service_error(self):
        client = make_fake_client(server_error())
        with pytest.raises(LookupTransportError) as exc_info:
            await GeminiWordLookupClient(client, WordLookupSettings()).get_word_details("ক")
        assert isinstance(exc_info.value, WordLookupError)
        assert isinstance(exc_info.value.__cause__, errors.ServerError)

    @pytest.mark.asyncio
    async def test_no_retry_by_default(self):
        client = make_fake_client(server_error(), server_error())
        with pytest.raises(LookupTransportError):
            await GeminiWordLookupClient(client, WordLookupSettings()).get_word_details("ক")
        assert client.aio.models.generate_content.await_count == 1

    @pytest.mark.asyncio
    async def test_retries_transport_errors_when_configured(self, bismoy_json):
        client = make_fake_client(server_error(), make_text_response(bismoy_json))
        lookup = GeminiWordLookupClient(client, WordLookupSettings(max_attempts=3))
        details = await lookup.get_word_details("বিস্ময়")
        assert details.word == "বিস্ময়"
        assert client.aio.models.generate_content.await_count == 2

    @pytest.mark.asyncio
    async def test_parse_errors_are_not_retried(self):
        client = make_fake_client(make_text_response("{}"), make_text_response("{}"))
        lookup = GeminiWordLookupClient(client, WordLookupSettings(max_attempts=3))
        with pytest.raises(LookupParseError):
            await lookup.get_word_details("ক")
        assert client.aio.models.generate_content.await_count == 1


class TestLookupFactory:
    def test_creates_gemini_client(self):
        lookup = create_lookup_client(WordLookupSettings(), make_fake_client())
        assert isinstance(lookup, GeminiWordLookupClient)

    def test_unsupported_provider(self):
        settings = WordLookupSettings.model_construct(provider="other", model="m", max_attempts=1)
        with pytest.raises(ValueError, match="Unsupported lookup provider"):
            create_lookup_client(settings, make_fake_client())


class TestGeminiLookupLive:
    """Calls the real API; skipped without a key."""

    @pytest.mark.asyncio
    async def test_lookup_real_word(self, gemini_access):
        client = genai.Client(api_key=gemini_access.api_key.get_secret_value())
        lookup = GeminiWordLookupClient(client, WordLookupSettings())
        details = await lookup.get_word_details("বিস্ময়")
        assert details.word
        assert details.pronunciation_notation
        assert details.examples
