"""
Unit tests for candidate-name extraction (extraction/extractor.py,
extraction/patterns.py, extraction/gazetteer.py).

Covers:
- Trigger templates per category (case-insensitive trigger, capitalised name)
- Brand and sub-region gazetteers with canonical names
- Validity gate applied after matching (find_spans vs extract)
- Dedup of names matched by several templates; nested-span suppression
"""

from __future__ import annotations

import pytest

from services.mining.extraction.extractor import EXTRACTORS, EntityExtractor, get_extractor
from services.mining.extraction.gazetteer import Gazetteer, GazetteerEntry
from services.mining.extraction.patterns import CATEGORY_TEMPLATES, PatternTemplate
from services.mining.models.category import Category, UnsupportedCategoryError


def names(category: str, text: str) -> list[str]:
    return [s.name for s in get_extractor(category).extract(text)]


# ---------------------------------------------------------------------------
# Lodging
# ---------------------------------------------------------------------------

class TestLodgingExtraction:

    def test_trigger_plus_suffix(self):
        assert names("lodging", "We stayed at the Grand Fiesta Hotel last year") == ["Grand Fiesta Hotel"]

    def test_trigger_is_case_insensitive(self):
        assert names("lodging", "STAYED AT Casa Malca Resort, loved it") == ["Casa Malca Resort"]

    def test_suffix_first_name(self):
        assert names("lodging", "Highly recommend Hotel Esencia in Tulum") == ["Hotel Esencia"]

    def test_brand_canonical_name(self):
        spans = get_extractor("lodging").extract("Loved the Ritz-Carlton in Cancun, would stay again")
        assert [(s.raw, s.name) for s in spans] == [("Ritz-Carlton", "Ritz Carlton")]

    def test_trigger_name_uses_brand_canonical_form(self):
        spans = get_extractor("lodging").extract("We stayed at the Ritz-Carlton Resort in Cancun, amazing")
        assert [(s.raw, s.name) for s in spans] == [("Ritz-Carlton Resort", "Ritz Carlton Resort")]

    def test_trigger_and_brand_mentions_share_name(self):
        assert names("lodging", "We stayed at the Ritz-Carlton Resort in Cancun") == ["Ritz Carlton Resort"]
        assert names("lodging", "Ritz-Carlton Resort Cancun was great") == ["Ritz Carlton Resort"]

    def test_brand_is_case_insensitive(self):
        assert names("lodging", "We stayed at the hilton in Cancun") == ["Hilton"]
        assert names("lodging", "the ritz-carlton resort was lovely") == ["Ritz Carlton Resort"]

    def test_common_phrase_brands_stay_case_sensitive(self):
        assert names("lodging", "we went in all four seasons and at the best western beaches") == []

    def test_brand_spelling_variants_share_canonical_name(self):
        assert names("lodging", "Ritz Carlton Cancun was great") == ["Ritz Carlton"]
        assert names("lodging", "RitzCarlton Cancun was great") == ["Ritz Carlton"]

    def test_brand_with_property_suffix(self):
        assert names("lodging", "The Four Seasons Resort Punta Mita is stunning") == ["Four Seasons Resort"]

    def test_more_specific_brand_wins(self):
        assert names("lodging", "The JW Marriott was fine") == ["JW Marriott"]
        assert names("lodging", "Park Hyatt Tokyo is a classic") == ["Park Hyatt"]

    def test_ambiguous_brand_needs_property_name(self):
        assert names("lodging", "Excellence Punta Cana was worth it") == ["Excellence Punta Cana"]
        assert names("lodging", "Dreams do come true") == []

    def test_names_do_not_cross_newlines(self):
        assert names("lodging", "We stayed at the Grand\nFiesta Hotel") == []

    def test_opener_rejected_after_matching(self):
        extractor = get_extractor("lodging")
        text = "We stayed at This Hotel"
        assert [s.name for s in extractor.find_spans(text)] == ["This Hotel"]
        assert extractor.extract(text) == []

    def test_generic_phrase_rejected(self):
        assert names("lodging", "Loved the Great Hotel vibe") == []

    def test_lowercase_text_has_no_lodging_names(self):
        assert names("lodging", "i booked a hotel near the beach") == []

    def test_same_name_twice_returned_once(self):
        text = "Stayed at Hotel Esencia. Hotel Esencia is a dream, recommend Hotel Esencia"
        assert names("lodging", text) == ["Hotel Esencia"]

    def test_start_offset_points_at_raw_name(self):
        text = "Loved the Ritz-Carlton"
        span = get_extractor("lodging").extract(text)[0]
        assert text[span.start:span.start + len(span.raw)] == "Ritz-Carlton"


# ---------------------------------------------------------------------------
# Areas
# ---------------------------------------------------------------------------

class TestAreaExtraction:

    def test_trigger_template(self):
        assert names("area", "We visited Tamarindo and loved it") == ["Tamarindo"]

    def test_trigger_with_connector(self):
        assert names("area", "We stayed in Playa del Carmen for a week") == ["Playa del Carmen"]

    def test_geographic_suffix(self):
        assert names("area", "We explored Drake Bay by boat") == ["Drake Bay"]

    def test_gazetteer_is_case_insensitive(self):
        spans = get_extractor("area").extract("we based ourselves in punta cana")
        assert [(s.raw, s.name) for s in spans] == [("punta cana", "Punta Cana")]

    def test_japan_neighbourhoods(self):
        assert names("area", "Shibuya at night, then Asakusa in the morning") == ["Shibuya", "Asakusa"]

    def test_exclude_hook(self):
        extractor = get_extractor("area")
        spans = extractor.extract("Tulum and Bacalar", exclude=lambda s: s.name == "Tulum")
        assert [s.name for s in spans] == ["Bacalar"]

    def test_article_led_name_rejected(self):
        assert names("area", "We visited The Louvre") == []


# ---------------------------------------------------------------------------
# Eateries
# ---------------------------------------------------------------------------

class TestEateryExtraction:

    def test_trigger_template(self):
        assert names("eatery", "We ate at Pujol and it was incredible") == ["Pujol"]

    def test_praise_template(self):
        assert names("eatery", "Don Chendo serves amazing tacos") == ["Don Chendo"]

    def test_multi_word_name(self):
        assert names("eatery", "Try La Docena Oyster Bar") == ["La Docena Oyster Bar"]

    def test_lowercase_venue_suffix_kept(self):
        assert names("eatery", "must try Cafe Tacuba restaurant") == ["Cafe Tacuba restaurant"]

    def test_fast_food_chain_rejected(self):
        assert names("eatery", "We tried Starbucks") == []


# ---------------------------------------------------------------------------
# Registry and building blocks
# ---------------------------------------------------------------------------

class TestExtractorRegistry:

    def test_one_extractor_per_category(self):
        assert set(EXTRACTORS) == set(Category)
        for category, extractor in EXTRACTORS.items():
            assert extractor.category is category
            assert extractor.templates == CATEGORY_TEMPLATES[category]

    def test_get_extractor_accepts_strings(self):
        assert get_extractor("EATERY") is EXTRACTORS[Category.EATERY]

    def test_unknown_category_raises(self):
        with pytest.raises(UnsupportedCategoryError):
            get_extractor("museum")

    def test_empty_text(self):
        for extractor in EXTRACTORS.values():
            assert extractor.extract("") == []
            assert extractor.extract(None) == []

    def test_custom_extractor(self):
        template = PatternTemplate(
            name="test",
            gazetteer=Gazetteer([GazetteerEntry(r"Foo\s+Bar", "Foo Bar")]),
        )
        extractor = EntityExtractor(Category.EATERY, [template], EXTRACTORS[Category.EATERY].rules)
        assert [s.name for s in extractor.extract("I like Foo  Bar")] == ["Foo Bar"]

    def test_template_needs_exactly_one_matcher(self):
        with pytest.raises(ValueError):
            PatternTemplate(name="broken")


class TestGazetteer:

    def test_entry_order_resolves_overlap(self):
        gaz = Gazetteer([GazetteerEntry("Park Hyatt", "Park Hyatt"), GazetteerEntry("Hyatt", "Hyatt")])
        assert [c for _, c in gaz.finditer("the Park Hyatt Tokyo")] == ["Park Hyatt"]

    def test_surface_form_kept_without_canonical(self):
        gaz = Gazetteer([GazetteerEntry(r"Aman\s+[A-Z][a-z]+")])
        assert [c for _, c in gaz.finditer("Aman  Tokyo")] == ["Aman Tokyo"]

    def test_suffix_appended(self):
        gaz = Gazetteer([GazetteerEntry(r"Ritz[- ]?Carlton", "Ritz Carlton")], suffix="(?:Hotel|Resort)")
        assert [c for _, c in gaz.finditer("Ritz-Carlton Resort")] == ["Ritz Carlton Resort"]

    def test_ignore_case(self):
        gaz = Gazetteer([GazetteerEntry("Tulum", "Tulum")], ignore_case=True)
        assert gaz.canonical("TULUM") == "Tulum"

    def test_unknown_surface(self):
        gaz = Gazetteer([GazetteerEntry("Tulum", "Tulum")])
        assert gaz.canonical("Cancun") is None

    def test_needs_entries(self):
        with pytest.raises(ValueError):
            Gazetteer([])

    def test_canonicalize_prefix(self):
        gaz = Gazetteer(
            [GazetteerEntry(r"Ritz[- ]?Carlton", "Ritz Carlton")],
            suffix="(?:Hotel|Resort)",
            ignore_case=True,
        )
        assert gaz.canonicalize_prefix("Ritz-Carlton Resort") == "Ritz Carlton Resort"
        assert gaz.canonicalize_prefix("ritz-carlton Cancun Hotel") == "Ritz Carlton Cancun Hotel"
        assert gaz.canonicalize_prefix("Grand Fiesta Hotel") == "Grand Fiesta Hotel"

    def test_canonicalize_prefix_only_at_start(self):
        gaz = Gazetteer([GazetteerEntry("Hilton", "Hilton")])
        assert gaz.canonicalize_prefix("Casa Hilton") == "Casa Hilton"
