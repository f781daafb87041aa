import re
from typing import Iterable, Optional
from .models import HistoryTurn, LanguageTag

DEVANAGARI = re.compile(r"[ऀ-ॿ]")
WORD = re.compile(r"[a-z]+")

# Romanized Hindi pronouns, postpositions, particles and interrogatives.
# Kept to words that are not also common English words.
HINGLISH_WORDS = {
    "kya", "kaise", "kese", "kaisa", "kahan", "kaha", "kab", "kyu", "kyun", "kitna", "kitne",
    "hai", "hain", "tha", "thi", "hoga", "karna", "krna", "karo", "krdo", "kardo", "karein",
    "mujhe", "mera", "meri", "mere", "hum", "humein", "aap", "aapka", "apna", "tum",
    "ka", "ki", "ke", "ko", "se", "mein", "par", "liye", "wala", "wali",
    "chahiye", "nahi", "nahin", "abhi", "phir", "aur", "bhi", "toh", "matlab", "accha", "bhai",
    "kripya", "batao", "bataiye", "dikhao", "bhejo", "gaya", "gayi", "mila", "mili",
}

MIN_CLASSIFY_CHARS = 12


def hinglish_hits(text: str) -> int:
    """Number of distinct romanized Hindi words in the text."""
    return len(set(WORD.findall(text.lower())) & HINGLISH_WORDS)


def classify_language(text: str, prior_tag: Optional[LanguageTag] = None, min_hits: int = 2) -> LanguageTag:
    t = (text or "").strip()
    if DEVANAGARI.search(t):
        return LanguageTag.HINDI
    if hinglish_hits(t) >= min_hits:
        return LanguageTag.HINGLISH
    if len(t) < MIN_CLASSIFY_CHARS and prior_tag is not None:
        return prior_tag
    return LanguageTag.ENGLISH


def prior_language(history: Iterable[HistoryTurn], locale_hint: Optional[str] = None) -> Optional[LanguageTag]:
    """Tag of the most recent turn that carries one, else the caller's locale hint."""
    for turn in reversed(list(history or [])):
        if turn.lang is not None:
            return turn.lang
    if locale_hint:
        try:
            return LanguageTag(locale_hint)
        except ValueError:
            return None
    return None
