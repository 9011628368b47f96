"""Word-for-word dictionary substitution.

This is a lexical pseudo-translation: each word is looked up on its own and
replaced when the dictionary knows it. There is no grammar or morphology, so
the output is a partial substitution rather than a translation.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping

_word_re = re.compile(r"\w+")

URDU_DICTIONARY: Mapping[str, str] = MappingProxyType(
    {
        "the": "یہ",
        "is": "ہے",
        "a": "ایک",
        "an": "ایک",
        "and": "اور",
        "or": "یا",
        "but": "لیکن",
        "of": "کا",
        "to": "کو",
        "in": "میں",
        "on": "پر",
        "for": "کے لیے",
        "with": "کے ساتھ",
        "from": "سے",
        "by": "کی طرف سے",
        "about": "کے بارے میں",
        "this": "یہ",
        "that": "وہ",
        "it": "یہ",
        "are": "ہیں",
        "was": "تھا",
        "were": "تھے",
        "not": "نہیں",
        "you": "آپ",
        "we": "ہم",
        "they": "وہ",
        "what": "کیا",
        "how": "کیسے",
        "why": "کیوں",
        "when": "جب",
        "where": "کہاں",
        "who": "کون",
        "all": "تمام",
        "also": "بھی",
        "very": "بہت",
        "more": "مزید",
        "new": "نیا",
        "good": "اچھا",
        "important": "اہم",
        "first": "پہلا",
        "one": "ایک",
        "two": "دو",
        "three": "تین",
        "day": "دن",
        "year": "سال",
        "time": "وقت",
        "people": "لوگ",
        "world": "دنیا",
        "hello": "سلام",
        "life": "زندگی",
        "work": "کام",
        "business": "کاروبار",
        "company": "کمپنی",
        "market": "بازار",
        "technology": "ٹیکنالوجی",
        "information": "معلومات",
        "news": "خبریں",
        "story": "کہانی",
        "stories": "کہانیاں",
        "blog": "بلاگ",
        "article": "مضمون",
        "post": "پوسٹ",
        "content": "مواد",
        "summary": "خلاصہ",
        "read": "پڑھیں",
        "learn": "سیکھیں",
        "health": "صحت",
        "water": "پانی",
        "food": "کھانا",
        "future": "مستقبل",
    }
)


def freeze_dictionary(mapping: Mapping[str, str]) -> Mapping[str, str]:
    """Return a read-only copy of ``mapping`` keyed by lowercase source words."""
    return MappingProxyType({str(k).lower(): str(v) for k, v in mapping.items()})


def translate(text: str, dictionary: Mapping[str, str] = URDU_DICTIONARY) -> str:
    """Replace every known word of ``text`` with its dictionary value.

    Lookup is case-insensitive; the replacement is inserted exactly as stored.
    Unknown words, whitespace and punctuation are left in place.
    """
    if not text:
        return text or ""
    return _word_re.sub(lambda m: dictionary.get(m.group(0).lower(), m.group(0)), text)
