"""
Lexicons for lexicon-based sentiment and keyword-group tagging.

POSITIVE_TERMS / NEGATIVE_TERMS are matched whole-word, case-insensitive.
Each term contributes at most once per scored text.

Negation weights are deliberately asymmetric:
  - a negated positive ("not amazing") reads as a complaint -> -1.0
  - a negated negative ("not bad") is hedged praise         -> +0.5
Keep them as calibrated unless there is evidence to retune.

Price descriptors (expensive, cheap, ...) are not polarity terms here.
They are picked up by the luxury/budget keyword groups instead.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Scoring weights
# ---------------------------------------------------------------------------

POSITIVE_WEIGHT = 1.0
NEGATIVE_WEIGHT = -1.0
NEGATED_POSITIVE_WEIGHT = -1.0
NEGATED_NEGATIVE_WEIGHT = 0.5

# Negation lookback: last N tokens within the preceding M characters
NEGATION_WINDOW_TOKENS = 4
NEGATION_LOOKBACK_CHARS = 50

# Summary label thresholds (strict on both sides)
POSITIVE_LABEL_THRESHOLD = 0.2
NEGATIVE_LABEL_THRESHOLD = -0.2


def _term(word: str) -> re.Pattern[str]:
    """Compile a whole-word, case-insensitive term pattern."""
    return re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Polarity lexicons
# ---------------------------------------------------------------------------

POSITIVE_TERMS: tuple[str, ...] = (
    "amazing", "beautiful", "excellent", "fantastic", "great", "incredible",
    "love", "loved", "perfect", "recommend", "stunning", "wonderful", "awesome",
    "best", "friendly", "clean", "comfortable", "delicious", "helpful",
    "memorable", "relaxing", "scenic", "worth", "must-see", "must-do",
)

NEGATIVE_TERMS: tuple[str, ...] = (
    "awful", "bad", "disappointing", "dirty", "horrible",
    "overpriced", "overcrowded", "poor", "rude", "scam", "terrible",
    "tourist trap", "waste", "worst", "avoid", "crowded", "noisy",
    "smelly", "unsafe", "overrated", "mediocre", "skip",
)

POSITIVE_PATTERNS: tuple[re.Pattern[str], ...] = tuple(_term(w) for w in POSITIVE_TERMS)
NEGATIVE_PATTERNS: tuple[re.Pattern[str], ...] = tuple(_term(w) for w in NEGATIVE_TERMS)

# Contractions ending in "n't" are negations even when not listed here.
NEGATION_WORDS: frozenset[str] = frozenset({
    "not", "never", "no", "neither", "nobody", "nothing",
    "nowhere", "hardly", "barely", "scarcely", "cannot",
    "don't", "doesn't", "didn't", "won't", "wouldn't", "couldn't",
    "shouldn't", "wasn't", "weren't",
})


# ---------------------------------------------------------------------------
# Keyword groups: tags unioned into an evidence record's category extras
# ---------------------------------------------------------------------------

AREA_CHARACTERISTICS: dict[str, tuple[str, ...]] = {
    "beach": ("beach", "beaches", "sandy", "shore", "waterfront", "coastal"),
    "surf": ("surf", "surfing", "waves", "surf break", "surf spot"),
    "nightlife": ("nightlife", "bars", "clubs", "party", "lively", "buzzing"),
    "calm_water": ("calm water", "calm", "peaceful", "quiet", "snorkeling", "swimming"),
    "luxury": ("luxury", "upscale", "five star", "5 star", "high-end", "exclusive", "expensive"),
    "budget": ("budget", "cheap", "affordable", "backpacker", "hostel"),
    "family": ("family", "kids", "children", "family-friendly", "kid-friendly"),
    "adventure": ("adventure", "hiking", "zip line", "rafting", "canyoning", "excursion"),
    "culture": ("culture", "historic", "history", "museum", "colonial", "old town"),
    "food": ("food", "restaurants", "dining", "cuisine", "foodie", "culinary"),
    "remote": ("remote", "secluded", "off the beaten path", "quiet", "isolated"),
    "touristy": ("touristy", "crowded", "tourist trap", "busy", "packed"),
    "nature": ("nature", "wildlife", "national park", "jungle", "forest", "mountains"),
    "resort": ("resort", "all-inclusive", "all inclusive", "resort area"),
    "diving": ("diving", "scuba", "dive", "reef", "underwater"),
}

CUISINE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "seafood": ("seafood", "fish", "lobster", "shrimp", "ceviche", "ocean"),
    "local": ("local", "traditional", "authentic", "native", "regional"),
    "italian": ("italian", "pasta", "pizza", "risotto"),
    "mexican": ("mexican", "tacos", "burritos", "enchiladas"),
    "asian": ("asian", "sushi", "thai", "chinese", "vietnamese", "japanese"),
    "american": ("american", "burger", "bbq", "barbecue", "steakhouse"),
    "fine_dining": ("fine dining", "upscale", "elegant", "tasting menu", "michelin"),
    "casual": ("casual", "chill", "laid back", "relaxed"),
    "brunch": ("brunch", "breakfast", "eggs", "pancakes"),
}


def compile_keyword_groups(
    groups: dict[str, tuple[str, ...]],
) -> dict[str, tuple[re.Pattern[str], ...]]:
    """Compile every keyword of every group into a whole-word pattern."""
    return {tag: tuple(_term(kw) for kw in keywords) for tag, keywords in groups.items()}


AREA_CHARACTERISTIC_PATTERNS = compile_keyword_groups(AREA_CHARACTERISTICS)
CUISINE_PATTERNS = compile_keyword_groups(CUISINE_KEYWORDS)
