"""
Fixed lookup tables shared by the heuristic analyzers.

Every analyzer takes a ``lexicon`` argument so tests (or callers with a
different word list) can swap individual tables via ``dataclasses.replace``.
The weights that consume these tables are uncalibrated; they are preserved
exactly so scores stay comparable across releases.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(mapping)


def _compile(*patterns: str) -> Tuple[re.Pattern[str], ...]:
    return tuple(re.compile(pattern, re.IGNORECASE) for pattern in patterns)


@dataclass(frozen=True, slots=True)
class SynonymEntry:
    """A basic term and its more academic alternatives."""

    basic: str
    advanced: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class TransitionCategory:
    name: str
    phrases: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class PhraseSource:
    """Canned common-phrase match triggered by a keyword."""

    keyword: str
    passage: str
    match_percentage: int
    source: str
    url: str | None = None
    recommendation: str | None = None


STYLE_TRANSITIONS: Tuple[str, ...] = (
    "however",
    "therefore",
    "furthermore",
    "in addition",
    "moreover",
    "consequently",
    "as a result",
)

PERSONAL_VOICE_PATTERNS = _compile(
    r"\bI\s+(?:think|believe|feel|argue|contend)\b",
    r"\bin\s+my\s+(?:opinion|view|experience)\b",
    r"\bfrom\s+my\s+perspective\b",
)

CREATIVE_PATTERNS = _compile(
    r"like\s+a\s+|as\s+a\s+",
    r"metaphor|analogy|symbolize",
    r"\brepresen(?:t|ts|ting)\b|\bportra(?:y|ys|ying)\b|\bembod(?:y|ies|ying)\b",
    r"\bimagine\b|\bpicture\b|\benvision\b",
)

COLLOQUIAL_PATTERNS = _compile(
    r"\bcut\s+corners\b|\bball\s+park\b|\bbreak\s+a\s+leg\b|\bcut\s+to\s+the\s+chase\b",
    r"\bat\s+the\s+end\s+of\s+the\s+day\b|\bjust\s+saying\b|\bfor\s+what\s+it's\s+worth\b",
    r"\bneedless\s+to\s+say\b|\bthe\s+other\s+day\b|\blong\s+story\s+short\b",
)

DETECTOR_MISSPELLINGS = frozenset(
    {
        "teh", "alot", "seperate", "recieve", "wierd", "accomodate",
        "wich", "truely", "beleive", "occured", "definately", "untill",
        "accross", "neccessary", "similiar", "enviroment", "existance",
    }
)

UNUSUAL_LETTER_PAIRS: Tuple[str, ...] = ("xz", "qp", "vf", "jx")

SOPHISTICATION_FUNCTION_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "if", "while", "because",
        "to", "of", "in", "on", "at", "with", "from", "for", "by", "about",
    }
)

OVERUSE_FUNCTION_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "if", "while", "because",
        "to", "of", "in", "on", "at", "with", "from", "for", "by", "about",
        "as", "that", "this", "these", "those", "is", "are", "was", "were",
        "be", "been", "being", "have", "has", "had", "do", "does", "did",
        "will", "would", "shall", "should", "may", "might", "must", "can",
        "could", "not", "no", "nor", "yes", "yet", "so", "such", "than",
        "then", "there", "here", "when", "where", "why", "how", "all", "any",
        "both", "each", "few", "many", "some", "who", "whom", "whose", "which",
        "what", "i", "you", "he", "she", "it", "we", "they", "me", "him", "her",
        "us", "them", "my", "your", "his", "its", "our", "their", "mine", "yours",
    }
)

ACADEMIC_TERMS = frozenset(
    {
        "analysis", "theoretical", "framework", "methodology", "hypothesis",
        "paradigm", "empirical", "qualitative", "quantitative", "discourse",
        "contextualize", "pedagogical", "implementation", "comprehensive", "synthesis",
        "epistemological", "ontological", "conceptualize", "interdisciplinary", "correlation",
        "juxtaposition", "substantiate", "phenomenon", "implications", "fundamentally",
    }
)

ACADEMIC_SUFFIXES: Tuple[str, ...] = ("ology", "ism", "ization", "istic")

COMMON_TYPOS: Mapping[str, Tuple[str, ...]] = _frozen(
    {
        "teh": ("the",),
        "alot": ("a lot", "allot"),
        "recieve": ("receive",),
        "seperate": ("separate",),
        "wierd": ("weird",),
        "thier": ("their", "there"),
        "accomodate": ("accommodate",),
        "occured": ("occurred",),
        "definately": ("definitely",),
        "wich": ("which",),
        "refering": ("referring",),
        "beleive": ("believe",),
        "concious": ("conscious",),
        "neccessary": ("necessary",),
        "occassion": ("occasion",),
        "arguement": ("argument",),
        "truely": ("truly",),
        "existance": ("existence",),
        "untill": ("until",),
        "priviledge": ("privilege",),
        "similiar": ("similar",),
    }
)

TRANSITION_CATALOGUE: Tuple[TransitionCategory, ...] = (
    TransitionCategory(
        "addition",
        ("additionally", "furthermore", "moreover", "in addition", "also", "besides"),
    ),
    TransitionCategory(
        "contrast",
        ("however", "nevertheless", "nonetheless", "conversely", "in contrast", "on the other hand"),
    ),
    TransitionCategory(
        "cause",
        ("therefore", "thus", "consequently", "as a result", "hence", "for this reason"),
    ),
    TransitionCategory(
        "example",
        ("for example", "for instance", "specifically", "to illustrate", "as an illustration", "namely"),
    ),
    TransitionCategory(
        "emphasis",
        ("indeed", "notably", "particularly", "especially", "significantly", "markedly"),
    ),
)

ACADEMIC_VERBS: Tuple[SynonymEntry, ...] = (
    SynonymEntry("show", ("demonstrate", "illustrate", "exhibit", "reveal", "indicate")),
    SynonymEntry("say", ("assert", "contend", "posit", "articulate", "convey")),
    SynonymEntry("think", ("hypothesize", "theorize", "postulate", "surmise", "contemplate")),
    SynonymEntry("look at", ("examine", "analyze", "investigate", "scrutinize", "evaluate")),
    SynonymEntry("use", ("utilize", "employ", "implement", "apply", "leverage")),
    SynonymEntry("get", ("obtain", "acquire", "procure", "attain", "derive")),
    SynonymEntry("change", ("modify", "transform", "alter", "adjust", "adapt")),
    SynonymEntry("make", ("produce", "generate", "construct", "formulate", "develop")),
)

ACADEMIC_NOUNS: Tuple[SynonymEntry, ...] = (
    SynonymEntry("thing", ("element", "component", "phenomenon", "aspect", "factor")),
    SynonymEntry("area", ("domain", "field", "sphere", "realm", "discipline")),
    SynonymEntry("idea", ("concept", "notion", "hypothesis", "proposition", "theory")),
    SynonymEntry("amount", ("proportion", "quantity", "magnitude", "extent", "degree")),
    SynonymEntry("issue", ("challenge", "dilemma", "problem", "predicament", "quandary")),
    SynonymEntry("point", ("argument", "assertion", "contention", "premise", "thesis")),
)

GENERIC_ALTERNATIVES: Mapping[str, Tuple[str, ...]] = _frozen(
    {
        "good": ("beneficial", "advantageous", "valuable", "favorable"),
        "bad": ("detrimental", "adverse", "unfavorable", "problematic"),
        "big": ("substantial", "significant", "considerable", "extensive"),
        "small": ("minimal", "limited", "modest", "slight"),
        "important": ("crucial", "essential", "significant", "critical"),
        "problem": ("challenge", "issue", "obstacle", "impediment"),
        "find": ("identify", "discover", "determine", "ascertain"),
        "help": ("facilitate", "enable", "assist", "aid"),
    }
)

PHRASE_SOURCES: Tuple[PhraseSource, ...] = (
    PhraseSource(
        keyword="digital revolution",
        passage="The digital revolution has transformed modern communication.",
        match_percentage=15,
        source="Common Academic Phrase Database",
        recommendation="Rephrase this widely used expression in your own words.",
    ),
    PhraseSource(
        keyword="artificial intelligence",
        passage="Artificial intelligence represents a paradigm shift in computing technology.",
        match_percentage=20,
        source="Introduction to AI (2022)",
        url="https://example.com/ai-textbook",
        recommendation="Cite the textbook or paraphrase the definition.",
    ),
    PhraseSource(
        keyword="climate change",
        passage="Climate change is one of the most pressing challenges facing humanity today.",
        match_percentage=18,
        source="Common Academic Phrase Database",
        recommendation="Replace the stock opening with a specific, sourced claim.",
    ),
)


@dataclass(frozen=True, slots=True)
class Lexicon:
    """Bundle of every read-only table the analyzers consult."""

    style_transitions: Tuple[str, ...] = STYLE_TRANSITIONS
    personal_voice_patterns: Tuple[re.Pattern[str], ...] = PERSONAL_VOICE_PATTERNS
    creative_patterns: Tuple[re.Pattern[str], ...] = CREATIVE_PATTERNS
    colloquial_patterns: Tuple[re.Pattern[str], ...] = COLLOQUIAL_PATTERNS
    detector_misspellings: frozenset[str] = DETECTOR_MISSPELLINGS
    unusual_letter_pairs: Tuple[str, ...] = UNUSUAL_LETTER_PAIRS
    sophistication_function_words: frozenset[str] = SOPHISTICATION_FUNCTION_WORDS
    overuse_function_words: frozenset[str] = OVERUSE_FUNCTION_WORDS
    academic_terms: frozenset[str] = ACADEMIC_TERMS
    academic_suffixes: Tuple[str, ...] = ACADEMIC_SUFFIXES
    common_typos: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: COMMON_TYPOS
    )
    transition_catalogue: Tuple[TransitionCategory, ...] = TRANSITION_CATALOGUE
    academic_verbs: Tuple[SynonymEntry, ...] = ACADEMIC_VERBS
    academic_nouns: Tuple[SynonymEntry, ...] = ACADEMIC_NOUNS
    generic_alternatives: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: GENERIC_ALTERNATIVES
    )
    phrase_sources: Tuple[PhraseSource, ...] = PHRASE_SOURCES

    def is_academic_term(self, word: str) -> bool:
        return word in self.academic_terms or word.endswith(self.academic_suffixes)

    def transition_phrase_count(self) -> int:
        return sum(len(category.phrases) for category in self.transition_catalogue)


DEFAULT_LEXICON = Lexicon()
