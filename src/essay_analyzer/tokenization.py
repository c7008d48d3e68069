from __future__ import annotations

import re
from typing import List

from .models import Token

TOKEN_PATTERN = re.compile(r"\b[A-Za-z']+\b")
WORD_PATTERN = re.compile(r"\b[a-z']+\b")
SENTENCE_PATTERN = re.compile(r"[^.!?]+[.!?]+")
PARAGRAPH_SPLIT_PATTERN = re.compile(r"\n\s*\n")


def tokenize_words(text: str) -> List[Token]:
    """Tokenize text into alphabetic word tokens with character offsets."""
    tokens: List[Token] = []
    for match in TOKEN_PATTERN.finditer(text):
        tokens.append(
            Token(text=match.group(), start_char=match.start(), end_char=match.end())
        )
    return tokens


def extract_words(text: str) -> List[str]:
    """Return the lowercase word list every analyzer counts against."""
    return WORD_PATTERN.findall(text.lower())


def split_sentences(text: str) -> List[str]:
    """Return terminated sentences; a trailing fragment without punctuation is dropped."""
    return SENTENCE_PATTERN.findall(text)


def split_paragraphs(text: str) -> List[str]:
    """Split text on blank lines. Always returns at least one element."""
    return PARAGRAPH_SPLIT_PATTERN.split(text)
