import os
import pytest

from dotenv import load_dotenv

from shuddho.settings import GeminiProviderAccess
from shuddho.word_details import WordDetails


load_dotenv()


@pytest.fixture
def gemini_access():
    """Gemini access settings from environment, for live tests."""
    access = GeminiProviderAccess(
        api_key=os.environ.get("SHUDDHO__PROVIDERS__GEMINI__API_KEY") or os.environ.get("GEMINI_API_KEY"),
    )
    if access.api_key is None:
        pytest.skip("Gemini key not available")
    return access


@pytest.fixture
def bismoy_json() -> str:
    """A model answer matching the word details schema."""
    return """
    {
        "word": "বিস্ময়",
        "pronunciationNotation": "বিশ্‌শয়্",
        "ipa": "biʃːɔe̯",
        "meaning": "আশ্চর্য হওয়ার ভাব; অবাক।",
        "partsOfSpeech": "বিশেষ্য",
        "examples": ["তার কথা শুনে আমি বিস্ময়ে হতবাক।", "এ এক বিস্ময়কর আবিষ্কার।"],
        "rulesApplied": ["স-এর পরে ম-ফলা থাকলে 'শ' উচ্চারিত হয়", "ম-ফলা দ্বিত্ব উচ্চারণ"]
    }
    """


@pytest.fixture
def bismoy(bismoy_json) -> WordDetails:
    return WordDetails.model_validate_json(bismoy_json)
