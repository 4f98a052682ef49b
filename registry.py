# registry.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
import json, os

# --- helpers ---
def _clean(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s or None

def _first(d: Mapping[str, Any], *keys: str) -> Optional[str]:
    for k in keys:
        v = _clean(d.get(k))
        if v is not None:
            return v
    return None

@dataclass(frozen=True)
class MasterProject:
    id: str
    thai_name: Optional[str] = None
    english_name: Optional[str] = None

@dataclass(frozen=True)
class ProjectAlias:
    master_id: str
    alias_name: str

def master_from_row(d: Mapping[str, Any]) -> MasterProject:
    """Accepts DB rows and both registry file shapes (id/project_id, name_th/thai_name, ...)."""
    master_id = _first(d, "id", "project_id", "master_id")
    if master_id is None:
        raise ValueError(f"Master project row without an id: {dict(d)!r}")
    return MasterProject(
        id=master_id,
        thai_name=_first(d, "thai_name", "name_th", "project_name_th"),
        english_name=_first(d, "english_name", "name_en", "project_name_en"),
    )

def alias_from_row(d: Mapping[str, Any]) -> Optional[ProjectAlias]:
    """Rows missing either side carry no information; they are dropped, not rejected."""
    master_id = _first(d, "master_id", "master_project_id", "project_id")
    alias = _first(d, "alias_name", "alias")
    if master_id is None or alias is None:
        return None
    return ProjectAlias(master_id=master_id, alias_name=alias)

def masters_from_rows(rows: Iterable[Mapping[str, Any]]) -> List[MasterProject]:
    return [master_from_row(r) for r in rows]

def aliases_from_rows(rows: Iterable[Mapping[str, Any]]) -> List[ProjectAlias]:
    out: List[ProjectAlias] = []
    for r in rows:
        a = alias_from_row(r)
        if a is not None:
            out.append(a)
    return out

def load_registry(path: Optional[str] = None) -> Tuple[List[MasterProject], List[ProjectAlias]]:
    """
    Load the project registry in either the full ({masters, aliases}) or
    legacy (bare list of masters) form.
    """
    path = path or os.getenv("REGISTRY_PATH", "project_registry.json")
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    # Accept both shapes
    if isinstance(raw, dict) and "masters" in raw:
        master_rows = raw["masters"]
        alias_rows = raw.get("aliases") or []
    elif isinstance(raw, list):
        master_rows = raw
        alias_rows = []
    else:
        raise ValueError("Unrecognized registry structure. Expected list or {masters:[...], aliases:[...]}.")

    return masters_from_rows(master_rows), aliases_from_rows(alias_rows)

def by_id(masters: Iterable[MasterProject]) -> Dict[str, MasterProject]:
    return {m.id: m for m in masters}
