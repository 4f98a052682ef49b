# normalize.py
from __future__ import annotations
import re
from typing import Optional, Tuple

def _rx(p: str, flags=re.I): return re.compile(p, flags)

# --- noise: markers that never identify a project ---
PARENS_RX = re.compile(r"\([^)]*\)")
DASH_RX   = re.compile(r"[-‐‑‒–—―−]+")
SPACE_RX  = re.compile(r"\s+")

PHASE_RX          = _rx(r"(?:เฟส|phase)\s*\d+")
N_BUILDING_RX     = _rx(r"\d+\s*buildings?\b")
BUILDING_LIST_RX  = _rx(r"\bbuildings?\s+[a-z](?:\s*(?:,|&|and)\s*[a-z])*\b")
EN_SUFFIX_RX      = _rx(r"\b(?:station|interchange|condo)\b")
PREFIX_RX         = _rx(r"^\s*(?:(?:คอนโดมิเนียม|คอนโด|เดอะ)\s*|the\s+)+")

# order matters: later patterns see the output of earlier ones
NOISE_PATTERNS: Tuple[re.Pattern, ...] = (
    PHASE_RX,
    N_BUILDING_RX,
    BUILDING_LIST_RX,
    EN_SUFFIX_RX,
)

# --- known spelling variants / abbreviations (applied top to bottom) ---
REWRITES: Tuple[Tuple[re.Pattern, str], ...] = (
    (_rx(r"วิลเลท"), "วิลเลจ"),
    (_rx(r"วิลเลต"), "วิลเลจ"),
    (_rx(r"เสนาวิลเลจ"), "เสนา วิลเลจ"),
    (_rx(r"เสนาคิทท์"), "เสนา คิทท์"),
    (_rx(r"รามคำแหง"), "ราม"),
    (_rx(r"\bram(?:kh?amh?aeng|khamhang|kamhaeng)\b"), "ram"),
    (_rx(r"\blat phrao\b"), "ladprao"),
    (_rx(r"\bvillet\b"), "village"),
)


def _strip_noise(s: str) -> str:
    for rx in NOISE_PATTERNS:
        s = rx.sub(" ", s)
    return PREFIX_RX.sub("", s)


def normalize_name(raw: Optional[str]) -> str:
    """Canonical comparison key for a project display name.

    Only the Thai side (before the first "/") is kept. Never raises;
    None or empty input gives "".
    """
    if not raw:
        return ""
    s = str(raw).split("/", 1)[0]
    s = PARENS_RX.sub(" ", s)
    s = DASH_RX.sub(" ", s)
    s = SPACE_RX.sub(" ", s).strip().casefold()

    # removing one marker can expose another ("phase building a 5");
    # rewrites below only see single-spaced text ("lat condo phrao")
    while True:
        stripped = SPACE_RX.sub(" ", _strip_noise(s)).strip()
        if stripped == s:
            break
        s = stripped

    for rx, repl in REWRITES:
        s = rx.sub(repl, s)

    return SPACE_RX.sub(" ", s).strip()


# --- side splitting (bilingual names are "thai / english") ---
def thai_side(raw: Optional[str]) -> str:
    if not raw:
        return ""
    return str(raw).split("/", 1)[0].strip().casefold()

def english_side(raw: Optional[str]) -> str:
    """Text after the first "/", or the whole string when there is none."""
    if not raw:
        return ""
    parts = str(raw).split("/", 1)
    return (parts[1] if len(parts) > 1 else parts[0]).strip().casefold()

def strip_spaces(s: str) -> str:
    return SPACE_RX.sub("", s or "")
