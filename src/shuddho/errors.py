class ShuddhoError(Exception):
    """Base class for errors raised by the lookup and audio adapters."""


class WordLookupError(ShuddhoError):
    """The word details could not be obtained."""


class LookupTransportError(WordLookupError):
    """The text generation service call failed."""


class LookupParseError(WordLookupError):
    """The service answered, but not with a valid word details object."""


class AudioGenerationError(ShuddhoError):
    """The speech service failed or returned no audio payload."""
