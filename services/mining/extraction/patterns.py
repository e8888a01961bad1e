"""
Pattern templates for candidate-name extraction, one ordered list per
category.

A template is either:
  - a trigger template: a case-insensitive trigger phrase ("stayed at",
    "ate at", ...) followed by a case-sensitive capitalised name span,
    captured in the group "name"; or
  - a gazetteer template: a closed list of known names (hotel brands,
    sub-regions) mapped to canonical display names.

Templates are high-recall / low-precision. The validity
predicates in validators.py are the precision gate.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from services.mining.extraction.gazetteer import Gazetteer, GazetteerEntry
from services.mining.models.category import Category

# Trailing characters never part of a name ("Tulum." / "Hilton,")
_NAME_TRIM = " \t.,;:!?'’\"-&*()"


@dataclass(frozen=True)
class NameSpan:
    """One candidate name found in a text."""
    raw: str        # surface form as it appears in the text
    name: str       # canonical form used for the evidence key
    start: int      # character offset of raw in the text
    template: str   # template that produced it


@dataclass(frozen=True)
class PatternTemplate:
    name: str
    pattern: Optional[re.Pattern[str]] = None
    gazetteer: Optional[Gazetteer] = None
    # Pattern templates only: rewrites a leading known name to its canonical form
    canonicalizer: Optional[Gazetteer] = None

    def __post_init__(self) -> None:
        if (self.pattern is None) == (self.gazetteer is None):
            raise ValueError(f"Template {self.name!r} needs exactly one of pattern/gazetteer")

    def finditer(self, text: str) -> Iterator[NameSpan]:
        if self.gazetteer is not None:
            for match, canonical in self.gazetteer.finditer(text):
                raw = match.group(0)
                yield NameSpan(raw=raw, name=canonical, start=match.start(), template=self.name)
            return

        for match in self.pattern.finditer(text):
            raw = match.group("name").strip(_NAME_TRIM)
            if not raw:
                continue
            name = self.canonicalizer.canonicalize_prefix(raw) if self.canonicalizer else raw
            yield NameSpan(raw=raw, name=name, start=match.start("name"), template=self.name)


# ---------------------------------------------------------------------------
# Shared name-span fragments
# ---------------------------------------------------------------------------

# A capitalised word: "Pujol", "Ritz-Carlton", "Joe's". A dot only inside a word ("U.S")
CAP_WORD = r"[A-Z](?:[\w'’&-]|\.(?=\w))*"

# Short lowercase joiners allowed between capitalised words
CONNECTOR = r"(?:de|del|da|di|du|la|le|el|los|las|of|y|&)"

OPTIONAL_THE = r"(?:(?i:the)[ ]+)?"


def name_span(max_words: int) -> str:
    """Regex fragment for 1..max_words capitalised words on one line."""
    return rf"{CAP_WORD}(?:[ ](?:{CONNECTOR}[ ])?{CAP_WORD}){{0,{max_words - 1}}}"


# ---------------------------------------------------------------------------
# Lodging
# ---------------------------------------------------------------------------

LODGING_TRIGGER = r"\b(?i:stay(?:ed|ing)?[ ]+at|recommend(?:ed|s)?|book(?:ed)?|love(?:d)?|tried)"
LODGING_SUFFIX = r"(?:Hotel|Resort|Inn|Suites|Lodge|Hostel|B&B|Villas?)"
LODGING_PREFIX = r"(?:Hotel|Casa|Hacienda|Posada|Villa)"

# Matched case-insensitively ("the hilton"). Entries that are ordinary
# words or need a capitalised property name opt back into case with (?-i:...).
HOTEL_BRANDS: tuple[GazetteerEntry, ...] = (
    GazetteerEntry(r"JW\s+Marriott", "JW Marriott"),
    GazetteerEntry(r"Marriott", "Marriott"),
    GazetteerEntry(r"Ritz[- ]?Carlton", "Ritz Carlton"),
    GazetteerEntry(r"St\.?\s*Regis", "St Regis"),
    GazetteerEntry(r"(?-i:Four\s+Seasons)", "Four Seasons"),
    GazetteerEntry(r"Mandarin\s+Oriental", "Mandarin Oriental"),
    GazetteerEntry(r"Park\s+Hyatt", "Park Hyatt"),
    GazetteerEntry(r"Grand\s+Hyatt", "Grand Hyatt"),
    GazetteerEntry(r"Hyatt\s+Ziva", "Hyatt Ziva"),
    GazetteerEntry(r"Hyatt\s+Zilara", "Hyatt Zilara"),
    GazetteerEntry(r"Hyatt", "Hyatt"),
    GazetteerEntry(r"Waldorf(?:[- ]Astoria)?", "Waldorf Astoria"),
    GazetteerEntry(r"Hilton", "Hilton"),
    GazetteerEntry(r"Conrad", "Conrad"),
    GazetteerEntry(r"DoubleTree", "DoubleTree"),
    GazetteerEntry(r"(?-i:Holiday\s+Inn)", "Holiday Inn"),
    GazetteerEntry(r"Hampton\s+Inn", "Hampton Inn"),
    GazetteerEntry(r"(?-i:Best\s+Western)", "Best Western"),
    GazetteerEntry(r"Crowne\s+Plaza", "Crowne Plaza"),
    GazetteerEntry(r"Embassy\s+Suites", "Embassy Suites"),
    GazetteerEntry(r"(?-i:Residence\s+Inn)", "Residence Inn"),
    GazetteerEntry(r"Radisson", "Radisson"),
    GazetteerEntry(r"Westin", "Westin"),
    GazetteerEntry(r"Sheraton", "Sheraton"),
    GazetteerEntry(r"(?-i:W\s+Hotel)", "W Hotel"),
    GazetteerEntry(r"Eden\s+Roc", "Eden Roc"),
    GazetteerEntry(r"Amanera", "Amanera"),
    GazetteerEntry(r"Amanyara", "Amanyara"),
    GazetteerEntry(r"(?-i:Aman\s+[A-Z][a-z]+)"),
    GazetteerEntry(r"Rosewood", "Rosewood"),
    GazetteerEntry(r"InterContinental", "InterContinental"),
    GazetteerEntry(r"Sofitel", "Sofitel"),
    GazetteerEntry(r"Fairmont", "Fairmont"),
    GazetteerEntry(r"Shangri[- ]?La", "Shangri La"),
    GazetteerEntry(r"(?-i:Raffles)", "Raffles"),
    GazetteerEntry(r"Belmond", "Belmond"),
    GazetteerEntry(r"Andaz", "Andaz"),
    GazetteerEntry(r"Kimpton", "Kimpton"),
    GazetteerEntry(r"Langham", "Langham"),
    GazetteerEntry(r"(?-i:Six\s+Senses)", "Six Senses"),
    GazetteerEntry(r"(?-i:Banyan\s+Tree)", "Banyan Tree"),
    GazetteerEntry(r"One\s*&\s*Only", "One&Only"),
    GazetteerEntry(r"Le\s+M[eé]ridien", "Le Meridien"),
    GazetteerEntry(r"Casa\s+de\s+Campo", "Casa de Campo"),
    GazetteerEntry(r"Sanctuary\s+Cap\s+Cana", "Sanctuary Cap Cana"),
    # All-inclusive brands whose names are ordinary words on their own:
    # require a capitalised property name after the brand.
    GazetteerEntry(r"(?-i:(?:Excellence|Secrets|Dreams|Breathless|Zoetry)\s+[A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)"),
    GazetteerEntry(r"Barcel[oó]", "Barcelo"),
    GazetteerEntry(r"Iberostar", "Iberostar"),
    GazetteerEntry(r"RIU", "RIU"),
    GazetteerEntry(r"(?-i:Hard\s+Rock)", "Hard Rock"),
    GazetteerEntry(r"Paradisus", "Paradisus"),
    GazetteerEntry(r"Meli[aá]", "Melia"),
    GazetteerEntry(r"Lopesan", "Lopesan"),
    GazetteerEntry(r"Bah[ií]a\s+Pr[ií]ncipe", "Bahia Principe"),
    GazetteerEntry(r"(?-i:Club\s+Med)", "Club Med"),
)

# Property-type word allowed right after a brand ("Four Seasons Resort")
HOTEL_BRAND_SUFFIX = r"(?:Hotel|Resort|Suites|Spa|Inn|Lodge|Residences|Palace)"

HOTEL_BRAND_GAZETTEER = Gazetteer(HOTEL_BRANDS, suffix=HOTEL_BRAND_SUFFIX, ignore_case=True)

# Single-word names that still identify a real property brand
KNOWN_SINGLE_WORD_BRANDS: frozenset[str] = frozenset({
    "marriott", "hilton", "hyatt", "sheraton", "westin", "amanera", "amanyara",
    "conrad", "doubletree", "radisson", "rosewood", "intercontinental",
    "sofitel", "fairmont", "raffles", "belmond", "andaz", "kimpton", "langham",
    "barcelo", "iberostar", "riu", "paradisus", "melia", "lopesan",
})

LODGING_TEMPLATES: tuple[PatternTemplate, ...] = (
    PatternTemplate(
        name="lodging_trigger_suffix",
        pattern=re.compile(
            rf"{LODGING_TRIGGER}\s+{OPTIONAL_THE}"
            rf"(?P<name>(?:{CAP_WORD}[ ](?:{CONNECTOR}[ ])?){{1,5}}{LODGING_SUFFIX})\b"
        ),
        canonicalizer=HOTEL_BRAND_GAZETTEER,
    ),
    PatternTemplate(
        name="lodging_trigger_prefix",
        pattern=re.compile(
            rf"{LODGING_TRIGGER}\s+{OPTIONAL_THE}"
            rf"(?P<name>{LODGING_PREFIX}[ ](?:{CONNECTOR}[ ])?{name_span(3)})"
        ),
        canonicalizer=HOTEL_BRAND_GAZETTEER,
    ),
    PatternTemplate(
        name="lodging_brand",
        gazetteer=HOTEL_BRAND_GAZETTEER,
    ),
)


# ---------------------------------------------------------------------------
# Areas
# ---------------------------------------------------------------------------

AREA_TRIGGER = (
    r"\b(?i:stay(?:ed|ing)?[ ]+(?:in|at)|visit(?:ed|ing)?|recommend(?:ed)?"
    r"|based[ ]+in|explored)"
)
AREA_WORD = r"[A-Z][a-zà-ÿ]+"
AREA_GEO_SUFFIX = r"(?:Beach|Bay|Coast|Peninsula|Island)"


def _places(*names: str) -> tuple[GazetteerEntry, ...]:
    """Gazetteer entries for plain place names; spaces match any whitespace."""
    return tuple(
        GazetteerEntry(r"\s+".join(re.escape(part) for part in n.split()), n)
        for n in names
    )


DOMINICAN_REPUBLIC_AREAS = _places(
    "Punta Cana", "Puerto Plata", "Samaná", "Samana", "Santo Domingo",
    "La Romana", "Cabarete", "Sosua", "Boca Chica", "Bayahibe",
    "Las Terrenas", "Cap Cana", "Uvero Alto", "Bavaro", "Juan Dolio",
    "Casa de Campo", "Santiago", "Jarabacoa", "Constanza", "Pedernales",
    "Barahona",
)

COSTA_RICA_AREAS = _places(
    "Manuel Antonio", "Arenal", "Tamarindo", "Monteverde", "La Fortuna",
    "Puerto Viejo", "Santa Teresa", "Nosara", "Jaco", "Guanacaste",
    "Papagayo", "Tortuguero", "Drake Bay", "Corcovado", "Osa Peninsula",
)

MEXICO_AREAS = _places(
    "Cancun", "Playa del Carmen", "Tulum", "Puerto Vallarta",
    "Cabo San Lucas", "Riviera Maya", "Cozumel", "Isla Mujeres", "Holbox",
    "Sayulita", "San Miguel de Allende", "Oaxaca", "Mexico City", "Merida",
    "Bacalar",
)

JAPAN_AREAS = _places(
    "Shinjuku", "Shibuya", "Harajuku", "Akihabara", "Ginza", "Roppongi",
    "Asakusa", "Ueno", "Ikebukuro", "Tsukiji", "Odaiba", "Shimokitazawa",
    "Nakameguro", "Yanaka", "Koenji", "Kichijoji", "Ebisu",
    "Gion", "Arashiyama", "Fushimi", "Higashiyama", "Nishiki", "Pontocho",
    "Kiyomizu", "Nara",
    "Dotonbori", "Namba", "Umeda", "Shinsekai", "Amerikamura", "Tennoji",
    "Kuromon",
)


def _known_area_gazetteer(entries: tuple[GazetteerEntry, ...]) -> Gazetteer:
    # Longest names first so "Playa del Carmen" wins over any prefix
    ordered = sorted(entries, key=lambda e: len(e.canonical or ""), reverse=True)
    return Gazetteer(ordered, ignore_case=True)


AREA_TEMPLATES: tuple[PatternTemplate, ...] = (
    PatternTemplate(
        name="area_trigger",
        pattern=re.compile(
            rf"{AREA_TRIGGER}\s+"
            rf"(?P<name>{AREA_WORD}(?:[ ](?:{CONNECTOR}[ ])?{AREA_WORD})?(?:[ ]{AREA_GEO_SUFFIX})?)\b"
        ),
    ),
    PatternTemplate(name="area_dominican_republic", gazetteer=_known_area_gazetteer(DOMINICAN_REPUBLIC_AREAS)),
    PatternTemplate(name="area_costa_rica", gazetteer=_known_area_gazetteer(COSTA_RICA_AREAS)),
    PatternTemplate(name="area_mexico", gazetteer=_known_area_gazetteer(MEXICO_AREAS)),
    PatternTemplate(name="area_japan", gazetteer=_known_area_gazetteer(JAPAN_AREAS)),
)


# ---------------------------------------------------------------------------
# Eateries
# ---------------------------------------------------------------------------

EATERY_TRIGGER = (
    r"\b(?i:ate[ ]+at|dined[ ]+at|loved|recommend(?:ed)?|try|tried"
    r"|must[ ]+visit|must[ ]+try|favou?rite)"
)
EATERY_VENUE_SUFFIX = r"(?i:restaurant|cafe|café|bistro|bar|grill|kitchen|eatery)"
EATERY_PRAISE = (
    r"(?i:has|had|serves|is[ ]+known[ ]+for|makes)[ ]+"
    r"(?i:great|amazing|(?:the[ ]+)?best|delicious|incredible)\b"
)

EATERY_TEMPLATES: tuple[PatternTemplate, ...] = (
    PatternTemplate(
        name="eatery_trigger",
        pattern=re.compile(
            rf"{EATERY_TRIGGER}\s+{OPTIONAL_THE}"
            rf"(?P<name>{name_span(6)}(?:[ ]{EATERY_VENUE_SUFFIX})?)"
        ),
    ),
    PatternTemplate(
        name="eatery_praise",
        pattern=re.compile(rf"\b{OPTIONAL_THE}(?P<name>{name_span(6)})[ ]+{EATERY_PRAISE}"),
    ),
)


CATEGORY_TEMPLATES: dict[Category, tuple[PatternTemplate, ...]] = {
    Category.LODGING: LODGING_TEMPLATES,
    Category.AREA: AREA_TEMPLATES,
    Category.EATERY: EATERY_TEMPLATES,
}


# ---------------------------------------------------------------------------
# Denylists (lowercase; a name equal to or starting with an entry is rejected)
# ---------------------------------------------------------------------------

# Shared non-entities that template matches pick up as capitalised words
GENERIC_NON_ENTITIES: tuple[str, ...] = (
    "google maps", "yelp", "tripadvisor", "trip advisor",
    "reddit", "subreddit", "airbnb", "vrbo", "booking.com", "expedia",
    "uber", "lyft",
    "airport", "bus station", "train station", "gas station",
    "parking lot", "parking garage",
    "monday", "tuesday", "wednesday", "thursday", "friday",
    "saturday", "sunday",
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
    "edit", "update", "tldr", "tl;dr",
    "downtown", "uptown", "midtown",
)

GENERIC_LODGING_TERMS: tuple[str, ...] = (
    "party hostel", "party hostels", "on hostel", "a hostel", "the hostel",
    "this hotel", "that hotel", "any hotel", "some hotel", "our hotel",
    "all-inclusive resort", "all inclusive resort", "beach resort", "city hotel",
    "budget hotel", "cheap hotel", "nice hotel", "good hotel", "great hotel",
    "local hotel", "small hotel", "big hotel", "new hotel", "old hotel",
    "regular hotel", "regular hotels", "other hotel", "same hotel", "another hotel",
    "different hostel", "a different hostel", "cheapest hotel", "five-star hotel",
    "five star hotel", "four-star hotel", "four star hotel", "luxury hotel",
    "destination hostel", "nearby hotel", "closest hotel", "closest hostel",
    "flights and hotel", "flight and hotel", "airbnb or hostel", "hotel or hostel",
    "hostel or hotel",
)

GENERIC_AREA_TERMS: tuple[str, ...] = (
    "the area", "this area", "that area", "any area", "some area",
    "the beach", "this beach", "a beach", "the coast", "the town",
    "the city", "the village", "the resort", "this island", "that island",
    "an island", "day trip", "old town", "city center", "city centre",
)

GENERIC_EATERY_TERMS: tuple[str, ...] = (
    "the restaurant", "this restaurant", "that restaurant", "a restaurant",
    "the place", "this place", "that place", "the food", "food court",
    "street food", "the market", "night market",
)

FAST_FOOD_CHAINS: tuple[str, ...] = (
    "mcdonalds", "mcdonald's", "burger king", "wendys", "wendy's",
    "taco bell", "subway", "chick-fil-a", "chick fil a",
    "dunkin", "dunkin donuts", "dunkin'",
    "starbucks", "panda express", "chipotle",
    "olive garden", "applebees", "applebee's",
    "chilis", "chili's", "ihop", "denny's", "dennys",
    "dominos", "domino's", "pizza hut", "papa johns", "papa john's",
    "five guys", "in-n-out", "in n out",
    "popeyes", "popeye's", "kfc", "7-eleven", "7 eleven",
)
