# services/text_format.py
"""
Normalization of model-generated text before it is shown in chat.

Steps, in order:
1. strip markup:   "**Save** <b>more</b>"          -> "Save more"
2. bullets:        "* cook\n- walk\n•   bus"        -> "• cook\n• walk\n• bus"
3. blank lines:    "a\n\n\n\nb"                      -> "a\n\nb"
4. paragraphs:     "a\nb"                             -> "a\n\nb"

A line-leading "*" followed by whitespace is a bullet, not emphasis, so it is
kept through step 1 and rewritten in step 2.
"""

import re

_BOLD_RE = re.compile(r"\*\*")
_TAG_RE = re.compile(r"</?[^>]+(?:>|$)")
_STAR_BULLET_RE = re.compile(r"^([ \t]*)\*(?=[ \t])", re.MULTILINE)
_STAR_RE = re.compile(r"\*")
_BULLET_RE = re.compile(r"^[ \t]*[•\-\u0000][ \t]+", re.MULTILINE)
_BLANK_LINES_RE = re.compile(r"\n{3,}")
_SINGLE_BREAK_RE = re.compile(r"(?<!\n)\n(?!\n)")

BULLET = "• "

# Placeholder for star bullets while the remaining stars are stripped
_STAR_BULLET = "\u0000"


def strip_markup(text: str) -> str:
    text = _BOLD_RE.sub("", text)
    text = _TAG_RE.sub("", text)
    text = _STAR_BULLET_RE.sub(lambda m: m.group(1) + _STAR_BULLET, text)
    return _STAR_RE.sub("", text)


def normalize_bullets(text: str) -> str:
    return _BULLET_RE.sub(BULLET, text).replace(_STAR_BULLET, "")


def collapse_blank_lines(text: str) -> str:
    return _BLANK_LINES_RE.sub("\n\n", text)


def promote_line_breaks(text: str) -> str:
    return _SINGLE_BREAK_RE.sub("\n\n", text)


def normalize_advice_text(text: str) -> str:
    text = text.replace("\r\n", "\n")
    text = strip_markup(text)
    text = normalize_bullets(text)
    text = collapse_blank_lines(text)
    text = promote_line_breaks(text)
    return text.strip()
