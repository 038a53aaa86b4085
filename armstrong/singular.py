"""Turn plural English nouns into their singular form."""

from __future__ import annotations

import re

_UNCOUNTABLE_WORDS = frozenset(
    """
    adulthood advice agenda aid aircraft alcohol ammo analytics anime athletics
    audio bison blood bream buffalo butter carp cash chassis chess clothing cod
    commerce cooperation corps debris diabetes digestion elk energy equipment
    excretion expertise firmware flounder fun gallows garbage graffiti hardware
    headquarters health herpes highjinks homework housework information jeans
    justice kudos labour literature machinery mackerel mail media mews moose
    music mud manga news only personnel pike plankton pliers police pollution
    premises rain research rice salmon scissors series sewage shambles shrimp
    software staff swine tennis traffic transportation trout tuna wealth welfare
    whiting wildebeest wildlife you
    """.split()
)

_UNCOUNTABLE_PATTERNS = (
    r"pok[eé]mon$",
    r"[^aeiou]ese$",
    r"deer$",
    r"fish$",
    r"measles$",
    r"o[iu]s$",
    r"pox$",
    r"sheep$",
)

_IRREGULAR = (
    ("i", "we"),
    ("me", "us"),
    ("he", "they"),
    ("she", "they"),
    ("them", "them"),
    ("myself", "ourselves"),
    ("yourself", "yourselves"),
    ("itself", "themselves"),
    ("herself", "themselves"),
    ("himself", "themselves"),
    ("themself", "themselves"),
    ("is", "are"),
    ("was", "were"),
    ("has", "have"),
    ("this", "these"),
    ("that", "those"),
    ("echo", "echoes"),
    ("dingo", "dingoes"),
    ("volcano", "volcanoes"),
    ("tornado", "tornadoes"),
    ("torpedo", "torpedoes"),
    ("genus", "genera"),
    ("viscus", "viscera"),
    ("stigma", "stigmata"),
    ("stoma", "stomata"),
    ("dogma", "dogmata"),
    ("lemma", "lemmata"),
    ("schema", "schemata"),
    ("anathema", "anathemata"),
    ("ox", "oxen"),
    ("axe", "axes"),
    ("die", "dice"),
    ("yes", "yeses"),
    ("foot", "feet"),
    ("eave", "eaves"),
    ("goose", "geese"),
    ("tooth", "teeth"),
    ("quiz", "quizzes"),
    ("human", "humans"),
    ("proof", "proofs"),
    ("carve", "carves"),
    ("valve", "valves"),
    ("looey", "looies"),
    ("thief", "thieves"),
    ("groove", "grooves"),
    ("pickaxe", "pickaxes"),
    ("passerby", "passersby"),
)

_IRREGULAR_SINGLES = {single: plural for single, plural in _IRREGULAR}
_IRREGULAR_PLURALS = {plural: single for single, plural in _IRREGULAR}

# In order of definition; a later rule takes precedence over an earlier one.
_SINGULAR_RULES = (
    (r"s$", ""),
    (r"(ss)$", r"\g<1>"),
    (r"(wi|kni|(?:after|half|high|low|mid|non|night|[^\w]|^)li)ves$", r"\g<1>fe"),
    (r"(ar|(?:wo|[ae])l|[eo][ao])ves$", r"\g<1>f"),
    (r"ies$", "y"),
    (r"(dg|ss|ois|lk|ok|wn|mb|th|ch|ec|oal|is|ck|ix|sser|ts|wb)ies$", r"\g<1>ie"),
    (
        r"\b(l|(?:neck|cross|hog|aun)?t|coll|faer|food|gen|goon|group|hipp|junk|vegg"
        r"|(?:pork)?p|charl|calor|cut)ies$",
        r"\g<1>ie",
    ),
    (r"\b(mon|smil)ies$", r"\g<1>ey"),
    (r"\b((?:tit)?m|l)ice$", r"\g<1>ouse"),
    (r"(seraph|cherub)im$", r"\g<1>"),
    (
        r"(x|ch|ss|sh|zz|tto|go|cho|alias|[^aou]us|t[lm]as|gas|(?:her|at|gr)o"
        r"|[aeiou]ris)(?:es)?$",
        r"\g<1>",
    ),
    (r"(analy|diagno|parenthe|progno|synop|the|empha|cri|ne)(?:sis|ses)$", r"\g<1>sis"),
    (r"(movie|twelve|abuse|e[mn]u)s$", r"\g<1>"),
    (r"(test)(?:is|es)$", r"\g<1>is"),
    (
        r"(alumn|syllab|vir|radi|nucle|fung|cact|stimul|termin|bacill|foc|uter|loc"
        r"|strat)(?:us|i)$",
        r"\g<1>us",
    ),
    (
        r"(agend|addend|millenni|dat|extrem|bacteri|desiderat|strat|candelabr|errat"
        r"|ov|symposi|curricul|quor)a$",
        r"\g<1>um",
    ),
    (
        r"(apheli|hyperbat|periheli|asyndet|noumen|phenomen|criteri|organ|prolegomen"
        r"|hedr|automat)a$",
        r"\g<1>on",
    ),
    (r"(alumn|alg|vertebr)ae$", r"\g<1>a"),
    (r"(cod|mur|sil|vert|ind)ices$", r"\g<1>ex"),
    (r"(matr|append)ices$", r"\g<1>ix"),
    (r"(pe)(rson|ople)$", r"\g<1>rson"),
    (r"(child)ren$", r"\g<1>"),
    (r"(eau)x?$", r"\g<1>"),
    (r"men$", "man"),
)

_RULES = [
    (re.compile(pattern, re.IGNORECASE), replacement)
    for pattern, replacement in (
        *_SINGULAR_RULES,
        *((pattern, r"\g<0>") for pattern in _UNCOUNTABLE_PATTERNS),
    )
]


def _restore_case(word: str, token: str) -> str:
    """Give token the letter case that word has."""
    if word == token:
        return token
    if word == word.lower():
        return token.lower()
    if word == word.upper():
        return token.upper()
    if word[:1] == word[:1].upper():
        return token[:1].upper() + token[1:].lower()
    return token.lower()


def singularize(word: str) -> str:
    """Return the singular form of word, keeping its letter case."""
    token = word.lower()
    if token in _IRREGULAR_SINGLES:
        return _restore_case(word, token)
    if token in _IRREGULAR_PLURALS:
        return _restore_case(word, _IRREGULAR_PLURALS[token])
    if not token or token in _UNCOUNTABLE_WORDS:
        return word
    for pattern, replacement in reversed(_RULES):
        match = pattern.search(word)
        if match:
            result = _restore_case(match.group(), match.expand(replacement))
            return word[: match.start()] + result + word[match.end():]
    return word