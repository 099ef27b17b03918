from abc import ABC, abstractmethod


class SpeechSynthesizer(ABC):
    @abstractmethod
    async def synthesize(self, word: str, notation: str) -> bytes:
        """
        Speak ``word`` following the phonetic ``notation``.
        Returns raw little-endian 16-bit PCM bytes.
        """
        raise NotImplementedError
