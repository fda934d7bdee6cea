"""
cjk-spacing - CJK/English spacing for Markdown text.

Puts exactly one space at every boundary between CJK text (Han, Katakana,
Hiragana, Hangul) and English letters, numbers or configured punctuation,
without touching code, math, links, tags, HTML or front matter, and without
breaking bold/italic markup.
"""

__version__ = "0.1.0"
