# resolver.py
from __future__ import annotations
import os, argparse, logging
from dataclasses import dataclass
from functools import reduce
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

from dotenv import load_dotenv
from normalize import normalize_name, thai_side, english_side, strip_spaces
from registry import MasterProject, ProjectAlias, load_registry, masters_from_rows, aliases_from_rows
from project_index import ProjectIndex, ScanEntry, build_index
from signals import tokens, english_tokens, token_overlap, percent, suggest_masters, is_placeholder_name
from db import get_master_projects, get_project_aliases, get_job_project_names, update_project_match

logger = logging.getLogger(__name__)

TOKEN_THRESHOLD = 0.5


@dataclass(frozen=True)
class MatchResult:
    master: MasterProject
    method: str                    # exact | english | normalized | contains | spaceless | eng-spaceless | token(NN%) | eng-token(NN%)
    score: Optional[float] = None  # only for the token strategies


@dataclass(frozen=True)
class _Query:
    thai: str            # trimmed, case-folded text before "/"
    english: str         # trimmed, case-folded text after "/" (or whole string)
    normalized: str
    english_normalized: str

    @classmethod
    def parse(cls, raw: Optional[str]) -> "_Query":
        return cls(
            thai=thai_side(raw),
            english=english_side(raw),
            normalized=normalize_name(raw),
            english_normalized=normalize_name(english_side(raw)),
        )


Strategy = Callable[[_Query, ProjectIndex], Optional[MatchResult]]


# --- exact lookups ---
def _exact(q: _Query, idx: ProjectIndex) -> Optional[MatchResult]:
    m = idx.exact_thai.get(q.thai) if q.thai else None
    return MatchResult(m, "exact") if m else None

def _english(q: _Query, idx: ProjectIndex) -> Optional[MatchResult]:
    m = idx.exact_english.get(q.english) if q.english else None
    return MatchResult(m, "english") if m else None

def _normalized(q: _Query, idx: ProjectIndex) -> Optional[MatchResult]:
    m = idx.normalized.get(q.normalized) if q.normalized else None
    return MatchResult(m, "normalized") if m else None


# --- containment scans (first scan-order hit wins) ---
def _first_containing(query: str, scan: Iterable[ScanEntry], min_len: int,
                      transform: Callable[[str], str] = lambda s: s) -> Optional[MasterProject]:
    q = transform(query)
    if len(q) < min_len:
        return None
    for name, master in scan:
        c = transform(name)
        if len(c) >= min_len and (q in c or c in q):
            return master
    return None

def _contains(q: _Query, idx: ProjectIndex) -> Optional[MatchResult]:
    m = _first_containing(q.normalized, idx.thai_scan, 2)
    return MatchResult(m, "contains") if m else None

def _spaceless(q: _Query, idx: ProjectIndex) -> Optional[MatchResult]:
    m = _first_containing(q.normalized, idx.thai_scan, 3, strip_spaces)
    return MatchResult(m, "spaceless") if m else None

def _eng_spaceless(q: _Query, idx: ProjectIndex) -> Optional[MatchResult]:
    m = _first_containing(q.english_normalized, idx.english_scan, 3, strip_spaces)
    return MatchResult(m, "eng-spaceless") if m else None


# --- token overlap (best single candidate, first best wins ties) ---
Best = Optional[Tuple[float, MasterProject]]

def _best_overlap(query_tokens: FrozenSet[str], candidates: Iterable[Tuple[FrozenSet[str], MasterProject]]) -> Best:
    def keep(best: Best, cand: Tuple[FrozenSet[str], MasterProject]) -> Best:
        cand_tokens, master = cand
        score = token_overlap(query_tokens, cand_tokens)
        if score < TOKEN_THRESHOLD:
            return best
        if best is None or score > best[0]:
            return (score, master)
        return best
    return reduce(keep, candidates, None)

def _token(q: _Query, idx: ProjectIndex) -> Optional[MatchResult]:
    qt = tokens(q.normalized)
    if not qt:
        return None
    best = _best_overlap(qt, ((tokens(name), m) for name, m in idx.thai_scan))
    if best is None:
        return None
    score, master = best
    return MatchResult(master, f"token({percent(score)}%)", score)

def _eng_token(q: _Query, idx: ProjectIndex) -> Optional[MatchResult]:
    # an empty normalized query disables both token strategies
    if not tokens(q.normalized):
        return None
    qt = english_tokens(q.english)
    if not qt:
        return None
    best = _best_overlap(qt, ((english_tokens(name), m) for name, m in idx.english_names))
    if best is None:
        return None
    score, master = best
    return MatchResult(master, f"eng-token({percent(score)}%)", score)


# cascade order; the first strategy that returns a match wins
STRATEGIES: Tuple[Strategy, ...] = (
    _exact,
    _english,
    _normalized,
    _contains,
    _spaceless,
    _eng_spaceless,
    _token,
    _eng_token,
)


def resolve(raw_name: Optional[str], index: ProjectIndex) -> Optional[MatchResult]:
    """Match one operator-entered project name; None means no strategy matched."""
    q = _Query.parse(raw_name)
    for strategy in STRATEGIES:
        hit = strategy(q, index)
        if hit is not None:
            return hit
    return None


def resolve_many(names: Iterable[str], masters: Iterable[MasterProject],
                 aliases: Iterable[ProjectAlias]) -> Dict[str, Optional[MatchResult]]:
    """Resolve a batch against one index snapshot; repeated names are resolved once."""
    index = build_index(masters, aliases)
    out: Dict[str, Optional[MatchResult]] = {}
    for name in names:
        if name not in out:
            out[name] = resolve(name, index)
    matched = sum(1 for r in out.values() if r is not None)
    logger.info(f"Resolved {matched}/{len(out)} distinct project names")
    return out


def describe(result: Optional[MatchResult]) -> str:
    if result is None:
        return "no match"
    m = result.master
    label = " / ".join(n for n in (m.thai_name, m.english_name) if n) or m.id
    return f"{m.id} {label} [{result.method}]"


def run(limit: Optional[int], apply: bool, registry_path: Optional[str] = None) -> None:
    load_dotenv()

    # Registry: file when given, otherwise the master tables
    if registry_path:
        masters, aliases = load_registry(registry_path)
    else:
        masters = masters_from_rows(get_master_projects())
        aliases = aliases_from_rows(get_project_aliases())

    rows = get_job_project_names(limit=limit)       # [{"project_name", "job_count"}, ...]
    names = [r["project_name"] for r in rows if not is_placeholder_name(r["project_name"])]
    skipped = len(rows) - len(names)
    results = resolve_many(names, masters, aliases)

    by_method: Dict[str, int] = {}
    unmatched: List[str] = []
    for name, res in results.items():
        if res is None:
            unmatched.append(name)
            print(f"[unmatched] {name}")
            for m, score in suggest_masters(name, masters):
                print(f"  ? {m.id} {m.thai_name or ''} / {m.english_name or ''} => {round(score, 3)}")
            continue

        method = res.method.split("(")[0]
        by_method[method] = by_method.get(method, 0) + 1
        print(f"[{res.method}] {name} -> {describe(res)}")

        if apply:
            update_project_match(name, master_id=res.master.id, method=res.method)

    print(f"\nDone. {'Applied to DB' if apply else 'Dry run only'} for {len(results)} names "
          f"({len(unmatched)} unmatched, {skipped} placeholders skipped). By method: {by_method}")


if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    ap = argparse.ArgumentParser()
    ap.add_argument("--limit", type=int, default=None)
    ap.add_argument("--apply", action="store_true", help="Write matches back to DB")
    ap.add_argument("--registry", default=None, help="Registry JSON instead of the master tables")
    args = ap.parse_args()
    run(args.limit, args.apply, args.registry)
