from google import genai

from ..logging import get_logger
from ..settings import ProviderAccessSettings, WordLookupSettings
from .gemini_lookup import GeminiWordLookupClient
from .lookup_base import WordLookupClient


def create_gemini_client(providers: ProviderAccessSettings) -> genai.Client:
    """One client per process, shared by the lookup and speech adapters."""
    api_key = providers.gemini.api_key
    return genai.Client(api_key=api_key.get_secret_value() if api_key else None)


def create_lookup_client(lookup_settings: WordLookupSettings, client: genai.Client) -> WordLookupClient:
    logger = get_logger("shuddho.llm.factory")
    provider = lookup_settings.provider
    if provider == "gemini":
        logger.debug("Creating lookup client for provider '%s' and model '%s'", provider, lookup_settings.model)
        return GeminiWordLookupClient(client=client, lookup_settings=lookup_settings)
    else:
        raise ValueError(f"Unsupported lookup provider: {provider}")
