from abc import ABC, abstractmethod
import time

from pydantic import ValidationError

from ..errors import LookupParseError
from ..logging import get_logger
from ..word_details import WordDetails
from .token_usage import GeminiTokenUsage


class WordLookupClient(ABC):
    def __init__(self) -> None:
        self._logger = get_logger(f"shuddho.llm.{self.__class__.__name__}")
        self.last_usage: GeminiTokenUsage | None = None

    async def get_word_details(self, word: str) -> WordDetails:
        self._logger.info("Looking up word details for '%s'", word)
        start_time = time.monotonic()
        answer, usage = await self._call_llm(word)
        self._logger.info("LLM call took %.2f seconds", time.monotonic() - start_time)
        usage.log()
        self.last_usage = usage
        details = self._parse_llm_answer(answer)
        self._logger.info("Got details for '%s': notation [%s]", details.word, details.pronunciation_notation)
        return details

    @abstractmethod
    async def _call_llm(self, word: str) -> tuple[str | None, GeminiTokenUsage]:
        raise NotImplementedError

    def _parse_llm_answer(self, answer: str | None) -> WordDetails:
        if answer is None or not answer.strip():
            raise LookupParseError("The model returned an empty answer")
        try:
            return WordDetails.model_validate_json(answer.strip())
        except ValidationError as e:
            self._logger.error("Could not parse LLM answer: %s", answer)
            raise LookupParseError(f"The model answer does not match the word details schema: {e}") from e
