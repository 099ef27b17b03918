from pydantic import BaseModel, ConfigDict, Field


class WordDetails(BaseModel):
    """Lookup result for a single Bengali word.

    Field names follow Python conventions; the JSON exchanged with the model
    API uses the camelCase aliases.
    """

    model_config = ConfigDict(populate_by_name=True)

    word: str
    pronunciation_notation: str = Field(
        alias="pronunciationNotation",
        description="Bengali phonetic notation using strict Bangla Academy symbols.",
    )
    ipa: str
    meaning: str
    parts_of_speech: str = Field(alias="partsOfSpeech")
    examples: list[str]
    rules_applied: list[str] | None = Field(
        default=None,
        alias="rulesApplied",
        description="Cited rules from Bangla Academy grammar.",
    )

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
