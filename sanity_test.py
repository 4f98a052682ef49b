# sanity_test.py
import os
from registry import load_registry, masters_from_rows, aliases_from_rows
from project_index import build_index
from resolver import resolve, describe
from db import get_master_projects, get_project_aliases, get_job_project_names

path = os.getenv("REGISTRY_PATH")
if path and os.path.exists(path):
    masters, aliases = load_registry(path)
    print(f"Loaded registry file {path}")
else:
    masters = masters_from_rows(get_master_projects())
    aliases = aliases_from_rows(get_project_aliases())
    print("Loaded registry from mst_project / mst_project_alias")

index = build_index(masters, aliases)
print(f"{len(masters)} masters, {len(aliases)} aliases; "
      f"{len(index.exact_thai)} exact thai keys, {len(index.normalized)} normalized keys")

rows = get_job_project_names(limit=5)
print("Sample names:", [(r["project_name"], r["job_count"]) for r in rows])
for r in rows:
    print(f"  {r['project_name']!r} -> {describe(resolve(r['project_name'], index))}")
