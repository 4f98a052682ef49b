"""
Tests for project name normalization
"""
import pytest
from normalize import normalize_name, thai_side, english_side, strip_spaces


def test_empty_input():
    """None and blank names normalize to an empty key"""
    assert normalize_name(None) == ""
    assert normalize_name("") == ""
    assert normalize_name("   ") == ""


def test_keeps_thai_side_only():
    """Bilingual names are keyed on the part before the slash"""
    assert normalize_name("เสนา วิลเลจ / Sena Village") == "เสนา วิลเลจ"


def test_strips_phase_markers():
    """Phase suffixes in either language and casing are removed"""
    assert normalize_name("เสนา พาร์ค เฟส 2") == "เสนา พาร์ค"
    assert normalize_name("Sena Park Phase 3") == "sena park"
    assert normalize_name("Sena Park PHASE3") == "sena park"


def test_strips_parenthesized_spans():
    """Parenthesized notes are dropped"""
    assert normalize_name("เสนา คิทท์ (บางนา)") == "เสนา คิทท์"


def test_strips_building_markers():
    """'<n> building' and 'building <letters>' are noise"""
    assert normalize_name("Sena Kith 2 Building") == "sena kith"
    assert normalize_name("Sena Kith Building A, B") == "sena kith"


def test_building_followed_by_word_is_kept():
    """Only single-letter building lists are stripped"""
    assert normalize_name("Sena Building Apartment") == "sena building apartment"


def test_strips_prefixes_and_suffix_words():
    """Condo / 'the' prefixes and station-style suffix words are removed"""
    assert normalize_name("คอนโด เดอะ ไลน์") == "ไลน์"
    assert normalize_name("The Niche Station") == "niche"
    assert normalize_name("Sena Kith Interchange") == "sena kith"
    assert normalize_name("Plum Condo Ram 60") == "plum ram 60"


def test_rewrites_known_variants():
    """Typos and long place names collapse to one form"""
    assert normalize_name("เสนาวิลเลท รามคำแหง") == "เสนา วิลเลจ ราม"
    assert normalize_name("เสนา วิลเลจ รามคำแหง") == "เสนา วิลเลจ ราม"
    assert normalize_name("Ramkhamhaeng 60") == "ram 60"


def test_dash_variants_and_whitespace():
    """Dashes become spaces, whitespace runs collapse, case folds"""
    assert normalize_name("Plum–Ram-60") == "plum ram 60"
    assert normalize_name("  Sena\t\tVillage  ") == "sena village"


def test_marker_exposed_by_earlier_removal():
    """Removing one marker can reveal another; both go in one call"""
    assert normalize_name("phase building a 5") == ""


def test_rewrite_after_marker_removed():
    """A marker between two words of a rewrite leaves them single-spaced"""
    assert normalize_name("Lat Phase 2 Phrao") == "ladprao"
    assert normalize_name("lat condo phrao เสนาวิลเลจ ") == "ladprao เสนา วิลเลจ"


@pytest.mark.parametrize("raw", [
    "เสนาวิลเลท รามคำแหง เฟส 1",
    "The Niche Station / เดอะ นิช",
    "คอนโด เดอะ ไลน์ (ตึก B)",
    "Sena Kith Building A, B Phase 2",
    "phase building a 5",
    "((a)b) c",
    "Plum–Ram-60 Interchange",
    "the the condo",
    "lat condo phrao",
    "Lat Phase 2 Phrao",
    "lat condo phrao เสนาวิลเลจ ",
    "",
])
def test_idempotent(raw):
    """normalize(normalize(x)) == normalize(x)"""
    once = normalize_name(raw)
    assert normalize_name(once) == once


def test_side_helpers():
    """Side splitting trims and case-folds"""
    assert thai_side(" เสนา วิลเลจ / Sena Village ") == "เสนา วิลเลจ"
    assert english_side(" เสนา วิลเลจ / Sena Village ") == "sena village"
    assert english_side("Plum Ram60") == "plum ram60"
    assert thai_side(None) == ""
    assert english_side(None) == ""
    assert strip_spaces(" plum ram 60 ") == "plumram60"
    assert english_side("x / Straße Tower") == "strasse tower"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
