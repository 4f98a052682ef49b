# project_index.py
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple
import logging

from normalize import normalize_name
from registry import MasterProject, ProjectAlias, by_id

logger = logging.getLogger(__name__)

ScanEntry = Tuple[str, MasterProject]


@dataclass(frozen=True)
class ProjectIndex:
    """Read-only lookup snapshot of one registry state.

    exact_thai / normalized hold alias keys first; a master's own name
    never replaces an alias entry with the same key.
    """
    exact_thai: Mapping[str, MasterProject]
    exact_english: Mapping[str, MasterProject]
    normalized: Mapping[str, MasterProject]
    thai_scan: Tuple[ScanEntry, ...]      # (normalized thai name, master), registry order
    english_scan: Tuple[ScanEntry, ...]   # (normalized english name, master)
    english_names: Tuple[ScanEntry, ...]  # (raw case-folded english name, master)


def build_index(masters: Iterable[MasterProject], aliases: Iterable[ProjectAlias]) -> ProjectIndex:
    masters = list(masters)
    lookup = by_id(masters)

    exact_thai: Dict[str, MasterProject] = {}
    exact_english: Dict[str, MasterProject] = {}
    normalized: Dict[str, MasterProject] = {}
    thai_scan: List[ScanEntry] = []
    english_scan: List[ScanEntry] = []
    english_names: List[ScanEntry] = []

    # 1) aliases first so they win every key they share with a native name
    for a in aliases:
        master = lookup.get(a.master_id)
        if master is None:
            logger.debug(f"Skipping alias {a.alias_name!r}: unknown master {a.master_id!r}")
            continue
        key = a.alias_name.strip().casefold()
        if key in exact_thai and exact_thai[key] is not master:
            logger.debug(f"Alias {a.alias_name!r} overrides earlier alias for {exact_thai[key].id}")
        exact_thai[key] = master
        norm = normalize_name(a.alias_name)
        if norm:
            normalized[norm] = master

    # 2) native names, never overwriting
    for m in masters:
        if m.thai_name:
            key = m.thai_name.strip().casefold()
            norm = normalize_name(m.thai_name)
            if key in exact_thai:
                if exact_thai[key] is not m:
                    logger.debug(f"{m.id}: thai name {m.thai_name!r} shadowed by {exact_thai[key].id}")
            else:
                exact_thai[key] = m
            if norm and norm not in normalized:
                normalized[norm] = m
            thai_scan.append((norm, m))
        if m.english_name:
            key = m.english_name.strip().casefold()
            if key in exact_english and exact_english[key] is not m:
                logger.debug(f"{m.id}: english name {m.english_name!r} replaces {exact_english[key].id}")
            exact_english[key] = m
            english_scan.append((normalize_name(m.english_name), m))
            english_names.append((key, m))

    logger.info(
        f"Built project index: {len(masters)} masters, {len(exact_thai)} exact thai keys, "
        f"{len(normalized)} normalized keys, {len(english_scan)} english names"
    )

    return ProjectIndex(
        exact_thai=MappingProxyType(exact_thai),
        exact_english=MappingProxyType(exact_english),
        normalized=MappingProxyType(normalized),
        thai_scan=tuple(thai_scan),
        english_scan=tuple(english_scan),
        english_names=tuple(english_names),
    )
