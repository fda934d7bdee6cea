"""Unicode character-class constants for the CJK spacing rules.

CJK here means the four scripts that get Latin spacing: Han, Katakana,
Hiragana and Hangul (half-width Katakana included, since it is in the
Katakana script). Full-width Latin letters and digits are *not* CJK.
"""

# Regex character class body matching one CJK code point (regex module syntax)
CJK_SCRIPT_CLASS = (
    r"\p{Script=Han}\p{Script=Katakana}\p{Script=Hiragana}\p{Script=Hangul}"
)

# Sentence punctuation that never takes a space from an adjacent emphasis span
CJK_PUNCTUATION = "。！？；：、，"

# Brackets and quotes that make an emphasis span behave like Latin text
EMPHASIS_SPACING_TRIGGERS = "()（）\"“”「」【】"

# Characters that may separate a bold span from its neighbour (never newlines)
SPACING_CHARACTERS = " \t"
LINE_BREAK_CHARACTERS = "\n\r"

# Emphasis placeholder tokens: "{EMPHASISPLACEHOLDER<n>}"
EMPHASIS_PLACEHOLDER_PREFIX = "{EMPHASISPLACEHOLDER"
EMPHASIS_PLACEHOLDER_SUFFIX = "}"
