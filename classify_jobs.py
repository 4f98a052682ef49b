# classify_jobs.py
from __future__ import annotations
import os, argparse, logging
from typing import Any, Dict, List, Optional
from collections import Counter

from dotenv import load_dotenv
from db import get_jobs, update_job_category
from rules import categorize, JOB_TYPES, REPAIR
from groups import group_of, summarize_groups

logger = logging.getLogger(__name__)

_COMPLETED = {"completed", "cancel", "cancelled"}

def classify_row(row: Dict[str, Any], default_job_type: str = REPAIR) -> Dict[str, Any]:
    """Category + group for one job row; the upstream repair_category is kept for comparison."""
    job_type = row.get("job_type") or default_job_type
    category = categorize(row.get("description"), job_type)
    upstream = row.get("repair_category")
    return {
        "id": row.get("id"),
        "job_type": job_type,
        "category": category,
        "group": group_of(category),
        "upstream_category": upstream,
        "upstream_group": group_of(upstream),
        "open": (row.get("job_status") or "").lower() not in _COMPLETED,
    }

def group_counts(results: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    totals: Counter = Counter()
    opened: Counter = Counter()
    for r in results:
        totals[r["category"]] += 1
        if r["open"]:
            opened[r["category"]] += 1
    rows = [{"category": c, "total_jobs": n, "open_jobs": opened[c]} for c, n in totals.items()]
    return summarize_groups(rows)

def run(job_type: Optional[str], limit: Optional[int], apply: bool) -> List[Dict[str, Any]]:
    load_dotenv()

    jobs = get_jobs(job_type=job_type, limit=limit)
    results = [classify_row(row, job_type or REPAIR) for row in jobs]

    disagree = 0
    for res in results:
        flag = ""
        if res["upstream_category"] and res["upstream_group"] != res["group"]:
            disagree += 1
            flag = f"  (upstream: {res['upstream_category']} -> {res['upstream_group']})"
        print(f"[{res['job_type']}] #{res['id']} -> {res['category']} [{res['group']}]{flag}")

        if apply:
            update_job_category(res["id"], category=res["category"], group=res["group"])

    print("\nBy group:")
    for g in group_counts(results):
        print(f"  - {g['group']}: {g['total_jobs']} ({g['open_jobs']} open)")

    logger.info(f"Classified {len(results)} jobs; {disagree} disagree with upstream category group")
    print(f"\nDone. {'Applied to DB' if apply else 'Dry run only'} for {len(results)} jobs.")
    return results

if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    ap = argparse.ArgumentParser()
    ap.add_argument("--job-type", choices=JOB_TYPES, default=None)
    ap.add_argument("--limit", type=int, default=None)
    ap.add_argument("--apply", action="store_true")
    args = ap.parse_args()
    run(args.job_type, args.limit, args.apply)
