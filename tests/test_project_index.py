"""
Tests for the project index snapshot
"""
import dataclasses
import pytest
from registry import MasterProject, ProjectAlias
from project_index import build_index


P1 = MasterProject("P1", "เสนา คิทท์ บางนา", "Sena Kith Bangna")
P2 = MasterProject("P2", "เสนา พาร์ค แกรนด์", "Sena Park Grand")
P3 = MasterProject("P3", None, "Sena Ville")
P4 = MasterProject("P4", "เสนา โซลาร์", None)


def test_alias_wins_shared_exact_key():
    """A master's own name never replaces an alias with the same key"""
    idx = build_index([P1, P2], [ProjectAlias("P2", " เสนา คิทท์ บางนา ")])

    assert idx.exact_thai["เสนา คิทท์ บางนา"] is P2
    assert idx.normalized["เสนา คิทท์ บางนา"] is P2
    # the native name still takes part in scans
    assert ("เสนา คิทท์ บางนา", P1) in idx.thai_scan


def test_alias_keys_are_lowercased():
    """Aliases are stored lowercased and trimmed"""
    idx = build_index([P1], [ProjectAlias("P1", "  SKB Bangna ")])

    assert idx.exact_thai["skb bangna"] is P1
    assert idx.normalized["skb bangna"] is P1


def test_alias_with_unknown_master_is_skipped():
    """Aliases pointing at ids outside the snapshot add nothing"""
    idx = build_index([P1], [ProjectAlias("P404", "ghost")])

    assert "ghost" not in idx.exact_thai
    assert "ghost" not in idx.normalized


def test_missing_names_contribute_nothing():
    """Masters without a thai or english name are partially indexed"""
    idx = build_index([P3, P4], [])

    assert [m.id for _, m in idx.thai_scan] == ["P4"]
    assert [m.id for _, m in idx.english_scan] == ["P3"]
    assert idx.exact_english == {"sena ville": P3}
    assert idx.english_names == (("sena ville", P3),)


def test_scan_lists_keep_registry_order():
    """Scan lists follow registry iteration order"""
    idx = build_index([P2, P1, P4], [])

    assert [m.id for _, m in idx.thai_scan] == ["P2", "P1", "P4"]
    assert idx.thai_scan[0] == ("เสนา พาร์ค แกรนด์", P2)


def test_english_last_master_wins():
    """Two masters sharing an english name: the later one owns the exact key"""
    dup = MasterProject("P9", "อื่น", "Sena Kith Bangna")
    idx = build_index([P1, dup], [])

    assert idx.exact_english["sena kith bangna"] is dup
    assert len(idx.english_scan) == 2


def test_keys_are_casefolded():
    """Index keys fold case the same way query sides do"""
    idx = build_index([MasterProject("P7", "STRASSE ทาวเวอร์", "Straße Tower")], [])

    assert "strasse ทาวเวอร์" in idx.exact_thai
    assert "strasse tower" in idx.exact_english


def test_index_is_read_only():
    """Snapshots cannot be mutated after construction"""
    idx = build_index([P1], [])

    with pytest.raises(TypeError):
        idx.exact_thai["x"] = P1
    with pytest.raises(TypeError):
        idx.normalized["x"] = P1
    with pytest.raises(AttributeError):
        idx.thai_scan.append(("x", P1))
    with pytest.raises(dataclasses.FrozenInstanceError):
        idx.exact_english = {}


def test_builder_does_not_share_caller_lists():
    """Changing the input lists afterwards leaves the snapshot alone"""
    masters = [P1]
    idx = build_index(masters, [])
    masters.append(P2)

    assert len(idx.thai_scan) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
