from __future__ import annotations

import pytest

from guest_import.models.vocabulary import DEFAULT_VOCABULARIES, NO_DATA, Vocabulary


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Gość", "guest"),
        ("GOŚĆ", "guest"),
        (" guest ", "guest"),
        ("Współgość", "subguest"),
        ("sub-guest", "subguest"),
    ],
)
def test_type_aliases(raw, expected):
    assert DEFAULT_VOCABULARIES.type.lookup(raw) == expected


def test_relation_side_rsvp_aliases():
    v = DEFAULT_VOCABULARIES
    assert v.relation.lookup("Aunts/Uncles") == "aunts_uncles"
    assert v.relation.lookup("przyjaciele") == "friends"
    assert v.side.lookup("Pani Młodej") == "bride"
    assert v.side.lookup("groom's side") == "groom"
    assert v.rsvp.lookup("Potwierdzone") == "confirmed"
    assert v.rsvp.lookup("odmowa") == "declined"
    assert v.rsvp.lookup("?") == "unknown"


def test_unknown_value_is_not_coerced():
    assert DEFAULT_VOCABULARIES.relation.lookup("neighbours") is None
    assert DEFAULT_VOCABULARIES.side.lookup("both") is None


def test_canonical_values_in_display_order():
    assert DEFAULT_VOCABULARIES.rsvp.values == ("confirmed", "declined", "unknown")
    assert DEFAULT_VOCABULARIES.side.values == ("bride", "groom")


def test_with_aliases_returns_new_table():
    extended = DEFAULT_VOCABULARIES.relation.with_aliases({"Rodzina": "cousins"})
    assert extended.lookup("rodzina") == "cousins"
    assert DEFAULT_VOCABULARIES.relation.lookup("rodzina") is None


def test_with_aliases_rejects_unknown_target():
    with pytest.raises(ValueError) as ei:
        DEFAULT_VOCABULARIES.side.with_aliases({"both": "everyone"})
    assert "everyone" in str(ei.value)


def test_build_maps_canonical_to_itself():
    vocab = Vocabulary.build("Color", {"red": ["czerwony"]})
    assert vocab.lookup("RED") == "red"
    assert vocab.lookup("czerwony") == "red"


def test_blank_markers():
    v = DEFAULT_VOCABULARIES
    assert v.no_data == NO_DATA
    assert v.is_blank_marker(" Brak Danych ")
    assert not v.is_blank_marker("orzechy")
    extended = v.with_blank_markers(["???"])
    assert extended.is_blank_marker("???")
    assert not v.is_blank_marker("???")
