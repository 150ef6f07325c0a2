from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType

"""Controlled vocabularies for the guest import sheet.

Every vocabulary maps a lower-cased, trimmed alias to one canonical value.
Lookups are case-insensitive; an alias that is not in the table is "not in
vocabulary" and must be reported by the caller, never coerced.

The default tables accept the canonical English values plus the Polish
phrasing people type into these sheets ("Gość", "pani młodej",
"potwierdzone", ...). Configuration can extend them (see config.loader) but
never mutates the defaults: every extension returns a new object.
"""

__all__ = [
    "NO_DATA",
    "Vocabulary",
    "VocabularySet",
    "DEFAULT_BLANK_MARKERS",
    "DEFAULT_VOCABULARIES",
]

# Canonical value for "explicitly unknown" cells (n/a, brak danych, ...).
NO_DATA = "no data"

DEFAULT_BLANK_MARKERS: frozenset[str] = frozenset({
    "n/a",
    "na",
    "none",
    "no data",
    "-",
    "b.d.",
    "bd",
    "brak",
    "brak danych",
})


def _key(value: str) -> str:
    return value.strip().lower()


@dataclass(frozen=True)
class Vocabulary:
    """Alias table for one column."""
    column: str  # column label used in messages
    values: tuple[str, ...]  # canonical values, display order
    aliases: Mapping[str, str]  # lower-cased alias -> canonical

    @staticmethod
    def build(column: str, table: Mapping[str, Iterable[str]]) -> Vocabulary:
        """Build from ``{canonical: [alias, ...]}``; canonical values map to themselves."""
        aliases: dict[str, str] = {}
        for canonical, names in table.items():
            aliases[_key(canonical)] = canonical
            for name in names:
                aliases[_key(name)] = canonical
        return Vocabulary(column=column, values=tuple(table), aliases=MappingProxyType(aliases))

    def lookup(self, value: str) -> str | None:
        return self.aliases.get(_key(value))

    def with_aliases(self, extra: Mapping[str, str]) -> Vocabulary:
        """Return a copy with additional aliases.

        Raises:
            ValueError: if an alias points at a value that is not canonical
        """
        merged = dict(self.aliases)
        for alias, canonical in extra.items():
            if canonical not in self.values:
                raise ValueError(
                    f"{self.column}: alias '{alias}' targets unknown value '{canonical}' "
                    f"(allowed: {', '.join(self.values)})"
                )
            merged[_key(alias)] = canonical
        return replace(self, aliases=MappingProxyType(merged))


@dataclass(frozen=True)
class VocabularySet:
    """All vocabularies the row validator needs, injected as one value."""
    type: Vocabulary
    relation: Vocabulary
    side: Vocabulary
    rsvp: Vocabulary
    blank_markers: frozenset[str] = DEFAULT_BLANK_MARKERS
    no_data: str = NO_DATA

    def is_blank_marker(self, text: str) -> bool:
        return _key(text) in self.blank_markers

    def with_blank_markers(self, extra: Iterable[str]) -> VocabularySet:
        return replace(self, blank_markers=self.blank_markers | {_key(m) for m in extra})


DEFAULT_VOCABULARIES = VocabularySet(
    type=Vocabulary.build("Type", {
        "guest": ["gość", "gosc", "gośc", "gosć"],
        "subguest": ["sub-guest", "sub guest", "współgość", "wspolgosc", "współgosc", "wspolgosć", "wspólgość"],
    }),
    relation=Vocabulary.build("Relation", {
        "grandparents": ["grandparent", "dziadkowie", "dziadek", "babcia"],
        "aunts_uncles": [
            "aunts/uncles", "aunts and uncles", "aunt", "uncle",
            "wujostwo", "ciocia", "wujek", "ciocie i wujkowie",
        ],
        "cousins": ["cousin", "kuzynostwo", "kuzyni", "kuzyn", "kuzynka"],
        "friends": ["friend", "przyjaciele", "przyjaciel", "przyjaciółka"],
        "acquaintances": ["acquaintance", "znajomi", "znajomy", "znajoma"],
        "coworkers": ["co-workers", "colleagues", "praca", "współpracownicy", "wspolpracownicy"],
    }),
    side=Vocabulary.build("Side", {
        "bride": ["bride's side", "pani młodej", "pani mlodej", "pani_mlodej", "pani", "panna młoda"],
        "groom": ["groom's side", "pana młodego", "pana mlodego", "pana_mlodego", "pan", "pan młody"],
    }),
    rsvp=Vocabulary.build("RSVP", {
        "confirmed": ["yes", "potwierdzone", "potwierdzony", "potwierdzona", "tak"],
        "declined": ["no", "odmowa", "odmówione", "odmowione", "nie"],
        "unknown": ["nieznane", "?"],
    }),
)
