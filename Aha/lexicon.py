# -*- coding: utf-8 -*-
"""
lexicon.py — fixed keyword tables

All rule-based classifiers read from here. The word lists are Norwegian
because the engine's input is Norwegian journal text; matching is plain
lowercase substring containment, so a few entries carry deliberate spaces
("må ", " men ") to avoid matching inside longer words.
"""
from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, Tuple

__all__ = [
    "STOPWORDS",
    "HIGH_INTENSITY",
    "LOW_INTENSITY",
    "FREQUENCY_ALWAYS",
    "FREQUENCY_OFTEN",
    "FREQUENCY_RARE",
    "MODALITY_OBLIGATION",
    "MODALITY_POSSIBILITY",
    "MODALITY_OBSTRUCTION",
    "TIME_NOW",
    "TIME_PAST",
    "TIME_FUTURE",
    "SELF_RE",
    "OTHER_RE",
    "POSITIVE_WORDS",
    "NEGATIVE_WORDS",
    "TEMPO_SUDDEN",
    "TEMPO_GRADUAL",
    "TEMPO_SLOW",
    "META_WORDS",
    "UNCERTAIN_WORDS",
    "CONTRAST_MARKERS",
    "ABSOLUTE_MARKERS",
    "DIMENSION_KEYWORDS",
    "DEFAULT_DIMENSION",
    "PHASES",
    "PHASE_ALIASES",
]

# -------------------------------------------------------------
# Stop words (function words)
# -------------------------------------------------------------
STOPWORDS = frozenset({
    "og", "i", "på", "som", "for", "med", "til",
    "det", "den", "de", "er", "en", "et", "å",
    "jeg", "du", "vi", "dere", "han", "hun",
    "oss", "av", "fra", "men", "om", "så",
})

# -------------------------------------------------------------
# Semantic axes
# -------------------------------------------------------------
HIGH_INTENSITY: Tuple[str, ...] = ("helt", "ekstremt", "kjempe", "totalt", "utrolig", "veldig")
LOW_INTENSITY: Tuple[str, ...] = ("litt", "noe", "ganske")

FREQUENCY_ALWAYS: Tuple[str, ...] = ("alltid", "hver gang", "hele tiden")
FREQUENCY_OFTEN: Tuple[str, ...] = ("ofte", "stadig", "som regel", "vanligvis")
FREQUENCY_RARE: Tuple[str, ...] = ("sjelden", "aldri", "nesten aldri")

MODALITY_OBLIGATION: Tuple[str, ...] = ("må ", "måtte", "burde", "skulle")
MODALITY_POSSIBILITY: Tuple[str, ...] = ("kan ", "har lyst", "vil ", "ønsker")
MODALITY_OBSTRUCTION: Tuple[str, ...] = ("klarer ikke", "får ikke til", "får det ikke til", "får ikke lov")

TIME_NOW: Tuple[str, ...] = ("nå", "for tiden", "i det siste", "hver dag")
TIME_PAST: Tuple[str, ...] = ("før", "tidligere", "da jeg var liten", "en gang", "før i tiden")
TIME_FUTURE: Tuple[str, ...] = ("skal", "kommer til", "neste gang", "fremover", "etterpå")

SELF_RE = re.compile(r"\bjeg\b")
OTHER_RE = re.compile(r"\bde\b|\bandre\b|\bfolk\b|\balle\b")

POSITIVE_WORDS: Tuple[str, ...] = (
    "godt", "bra", "lett", "digg", "gøy", "rolig", "fornøyd", "stolt",
    "trygg", "håpefull", "optimistisk",
)
NEGATIVE_WORDS: Tuple[str, ...] = (
    "vondt", "tungt", "stressa", "stresset", "urolig", "skam", "skamfull",
    "skyld", "redd", "engstelig", "bekymret", "lei meg", "trist", "sliten",
    "utmattet",
)

TEMPO_SUDDEN: Tuple[str, ...] = ("plutselig", "brått", "med en gang")
TEMPO_GRADUAL: Tuple[str, ...] = ("gradvis", "etter hvert", "litt etter litt")
TEMPO_SLOW: Tuple[str, ...] = ("sakte", "roligere")

META_WORDS: Tuple[str, ...] = ("egentlig", "faktisk", "tydeligvis", "visstnok", "på en måte")
UNCERTAIN_WORDS: Tuple[str, ...] = ("kanskje", "virker som", "føles som")

CONTRAST_MARKERS: Tuple[str, ...] = (
    " men ", "men ", " samtidig", "likevel", "selv om",
    "på den ene siden", "på den andre siden",
)
ABSOLUTE_MARKERS: Tuple[str, ...] = ("alltid", "aldri", "hver gang", "hele tiden", "ingen", "alle")

# -------------------------------------------------------------
# Dimensions (insertion order is output order)
# -------------------------------------------------------------
DEFAULT_DIMENSION = "thought"

DIMENSION_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "emotion": (
        "redd", "engstelig", "bekymret", "stressa", "stresset", "urolig",
        "lei meg", "skam", "skamfull", "skyld", "flau", "trist", "glad",
        "fornøyd", "stolt", "rolig",
    ),
    "behavior": (
        "utsetter", "rømmer", "prokrastinerer", "scroller", "ligger på sofaen",
        "ser på", "åpner", "lukker", "gjør ingenting", "overjobber",
        "jobber masse", "skriver", "ringer", "sletter", "ignorerer",
    ),
    "thought": (
        "tenker", "tror", "føles som", "virker som", "jeg sier til meg selv",
        "overtenker", "grubler", "forestiller meg", "bekymrer meg", "vurderer",
        "planlegger",
    ),
    "body": (
        "i kroppen", "spenning", "spenninger", "stram", "hodepine", "smerte",
        "puste", "puster", "magesmerter", "klump i magen", "sliten", "utmattet",
        "kvalm", "svimmel", "hjertet banker",
    ),
    "relation": (
        "andre", "de", "folk", "venner", "familie", "sjefen", "kollega",
        "partner", "kjæreste", "barn", "foreldre", "læreren", "klassen",
    ),
})

# -------------------------------------------------------------
# Topic phases (supplied by an outside collaborator)
# -------------------------------------------------------------
PHASES: Tuple[str, ...] = ("exploration", "pattern", "press", "stuck", "integration")

PHASE_ALIASES: Mapping[str, str] = MappingProxyType({
    "utforskning": "exploration",
    "mønster": "pattern",
    "press": "press",
    "fastlåst": "stuck",
    "integrasjon": "integration",
})
