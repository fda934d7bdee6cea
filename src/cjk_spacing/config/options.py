"""
Rule options for CJK/English spacing.

The two option values are free-form character sets. Letters and digits are
always "English-like"; these sets add punctuation and symbols that should be
treated the same way when they sit directly after (or before) a CJK
character.
"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Defaults shipped with the rule: ASCII symbols that usually belong to the
# Latin token next to them (signs, quotes, brackets, currency, units).
DEFAULT_ENGLISH_LIKE_AFTER_CJK = "-+'\"([¥$"
DEFAULT_ENGLISH_LIKE_BEFORE_CJK = "-+;:'\"°%$)]"


def normalize_character_set(value: Optional[str]) -> str:
    """Strip every whitespace character from an option value."""
    if not value:
        return ""
    return "".join(char for char in value if not char.isspace())


class SpacingOptions(BaseModel):
    """
    Options for the CJK/English spacing rule.

    Both fields accept the camelCase option names used by editor
    integrations as well as the legacy ``englishNonLetterCharacters*`` names.
    Whitespace inside a value is stripped; an empty value disables the
    extension.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    english_like_after_cjk: str = Field(
        default=DEFAULT_ENGLISH_LIKE_AFTER_CJK,
        validation_alias=AliasChoices(
            "english_like_after_cjk",
            "englishLikeCharactersAfterCJK",
            "englishNonLetterCharactersAfterCJKCharacters",
        ),
        description="Extra characters treated as English-like right after a CJK character",
    )
    english_like_before_cjk: str = Field(
        default=DEFAULT_ENGLISH_LIKE_BEFORE_CJK,
        validation_alias=AliasChoices(
            "english_like_before_cjk",
            "englishLikeCharactersBeforeCJK",
            "englishNonLetterCharactersBeforeCJKCharacters",
        ),
        description="Extra characters treated as English-like right before a CJK character",
    )

    @field_validator("english_like_after_cjk", "english_like_before_cjk", mode="before")
    @classmethod
    def _strip_whitespace(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return normalize_character_set(value)
        return value
