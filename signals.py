# signals.py
from __future__ import annotations
from typing import FrozenSet, Iterable, List, Optional, Tuple
from rapidfuzz import fuzz
import re

from normalize import DASH_RX, normalize_name, english_side
from registry import MasterProject

_WORD = re.compile(r"\w+")

def tokens(s: Optional[str]) -> FrozenSet[str]:
    """Whitespace tokens longer than one character."""
    return frozenset(t for t in (s or "").split() if len(t) > 1)

def english_tokens(s: Optional[str]) -> FrozenSet[str]:
    """Like tokens(), but hyphen/dash variants also split and case is folded."""
    return tokens(DASH_RX.sub(" ", (s or "").casefold()))

def token_overlap(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    """|A ∩ B| / max(|A|, |B|); 0.0 when both are empty."""
    denom = max(len(a), len(b))
    if denom == 0:
        return 0.0
    return len(a & b) / denom

def percent(score: float) -> int:
    """Half-up rounding of a 0–1 fraction to a whole percentage."""
    return int(score * 100 + 0.5)


# --- review aids (never used for automatic matching) ---
def score_name(query: str, candidate: str) -> float:
    """0–1 fuzzy similarity; best of a few complementary rapidfuzz metrics."""
    if not query or not candidate:
        return 0.0
    s1 = fuzz.token_set_ratio(query, candidate)
    s2 = fuzz.partial_ratio(query, candidate)
    s3 = fuzz.QRatio(query, candidate)
    return max(s1, s2, s3) / 100.0

def suggest_masters(raw: str, masters: Iterable[MasterProject],
                    limit: int = 3, threshold: float = 0.6) -> List[Tuple[MasterProject, float]]:
    """Closest registry entries for a name the resolver could not place."""
    q_th = normalize_name(raw)
    q_en = normalize_name(english_side(raw))
    scored: List[Tuple[MasterProject, float]] = []
    for m in masters:
        best = max(
            score_name(q_th, normalize_name(m.thai_name)),
            score_name(q_en, normalize_name(m.english_name)),
        )
        if best >= threshold:
            scored.append((m, best))
    scored.sort(key=lambda x: x[1], reverse=True)
    return scored[:limit]


PLACEHOLDER_NAMES = {"-", "--", "n/a", "na", "none", "null", "test", "ไม่ระบุ", "ไม่มี", "อื่นๆ", "อื่น ๆ"}
def is_placeholder_name(name: Optional[str]) -> bool:
    """Values operators type when they don't know the project."""
    base = (name or "").strip().casefold()
    if not base: return True
    if base in PLACEHOLDER_NAMES: return True
    if not _WORD.search(base): return True
    # mostly digits (unit numbers pasted into the project column)?
    digits = sum(ch.isdigit() for ch in base)
    if digits / max(1, len(base)) > 0.6: return True
    return False
