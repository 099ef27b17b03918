from functools import cache
from pathlib import Path
import re
from uuid import uuid4
import wave

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from ..errors import AudioGenerationError, WordLookupError
from ..llm.lookup_base import WordLookupClient
from ..llm.lookup_factory import create_gemini_client, create_lookup_client
from ..logging import get_logger, setup_logging
from ..settings import Settings
from ..tts.gemini_tts import GeminiSpeechSynthesizer
from ..tts.tts_base import SpeechSynthesizer


logger = get_logger(__name__)

shuddho_mcp = FastMCP("Shuddho Uccharon")

audio_directory = Path("~/shuddho").expanduser().resolve()


@cache
def get_settings() -> Settings:
    load_dotenv()
    return Settings()


@cache
def get_lookup_client() -> WordLookupClient:
    settings = get_settings()
    return create_lookup_client(settings.lookup, _get_gemini_client())


@cache
def get_synthesizer() -> SpeechSynthesizer:
    return GeminiSpeechSynthesizer(_get_gemini_client(), get_settings().audio)


@cache
def _get_gemini_client():
    return create_gemini_client(get_settings().providers)


@shuddho_mcp.tool()
async def look_up_bengali_word(word: str) -> dict:
    """
    Looks up a Bengali word following the Bangla Academy (Bangladesh) standard.

    Args:
        word: the Bengali word, e.g. `বিস্ময়`

    Returns:
        JSON object with `word`, `pronunciationNotation`, `ipa`, `meaning`,
        `partsOfSpeech`, `examples` and, when the model cites them, `rulesApplied`
    """
    word = word.strip()
    if not word:
        raise ValueError("The word must not be empty")
    logger.info("Received lookup request for '%s'", word)
    try:
        details = await get_lookup_client().get_word_details(word)
    except WordLookupError as e:
        msg = f"Word lookup failed: {e}"
        logger.error(msg)
        raise RuntimeError(msg) from e
    return details.to_json_dict()


@shuddho_mcp.tool()
async def pronounce_bengali_word(word: str, notation: str | None = None) -> str:
    """
    Synthesizes the standard pronunciation of a Bengali word into a WAV file.

    Args:
        word: the Bengali word
        notation: Bangla Academy pronunciation notation to guide the speech;
            looked up first when omitted

    Returns:
        URI of the generated .wav file
    """
    word = word.strip()
    if not word:
        raise ValueError("The word must not be empty")
    if not notation:
        notation = (await look_up_bengali_word(word))["pronunciationNotation"]

    logger.info("Synthesizing '%s' as [%s]", word, notation)
    try:
        pcm = await get_synthesizer().synthesize(word, notation)
    except AudioGenerationError as e:
        msg = f"Speech synthesis failed: {e}"
        logger.error(msg)
        raise RuntimeError(msg) from e

    audio_settings = get_settings().audio
    output_file = audio_directory / f"{safe_file_stem(word)}-{uuid4()}.wav"
    write_wav(pcm, output_file, sample_rate=audio_settings.sample_rate, channels=audio_settings.channels)
    return output_file.resolve().as_uri()


def safe_file_stem(word: str) -> str:
    # drop only what file systems reject, Bengali vowel signs must survive
    stem = re.sub(r"\s+", "_", word.strip())
    stem = re.sub(r'[\\/:*?"<>|\x00-\x1f]', "", stem)
    return stem or "shuddho"


def write_wav(pcm: bytes, path: Path, sample_rate: int, channels: int = 1) -> Path:
    """Wrap raw little-endian 16-bit PCM into a WAV container."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(channels)
        wav.setsampwidth(2)
        wav.setframerate(sample_rate)
        wav.writeframes(pcm)
    logger.info("Wrote %d bytes of audio to %s", len(pcm), path)
    return path


def main() -> None:
    setup_logging(get_settings().log_level)
    shuddho_mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
