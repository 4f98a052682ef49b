# db.py
from __future__ import annotations
import os
from typing import List, Dict, Any, Optional
import psycopg2
from psycopg2.extras import RealDictCursor
from dotenv import load_dotenv

load_dotenv()

CFG = {
    "host": os.getenv("PGHOST", "127.0.0.1"),
    "port": int(os.getenv("PGPORT", "5432")),
    "dbname": os.getenv("PGDATABASE", "dbquality"),
    "user": os.getenv("PGUSER", "postgres"),
    "password": os.getenv("PGPASSWORD", "postgres"),
}

def connect():
    return psycopg2.connect(**CFG)

def _fetch(sql_q: str, params: Optional[List[Any]] = None) -> List[Dict[str, Any]]:
    with connect() as conn, conn.cursor(cursor_factory=RealDictCursor) as cur:
        cur.execute(sql_q, params or [])
        return [dict(r) for r in cur.fetchall()]

# --- registry ---
def get_master_projects() -> List[Dict[str, Any]]:
    return _fetch("""
        SELECT project_id AS id, project_name_th AS thai_name, project_name_en AS english_name
          FROM mst_project
         ORDER BY project_id ASC
    """)

def get_project_aliases() -> List[Dict[str, Any]]:
    return _fetch("""
        SELECT master_project_id AS master_id, alias_name
          FROM mst_project_alias
         ORDER BY id ASC
    """)

# --- jobs (dbquality.trn_repair) ---
def get_job_project_names(limit: Optional[int] = None) -> List[Dict[str, Any]]:
    q = ["""
        SELECT project_name, COUNT(*) AS job_count
          FROM trn_repair
         WHERE project_name IS NOT NULL AND project_name <> ''
         GROUP BY project_name
         ORDER BY project_name
    """]
    params: List[Any] = []
    if limit:
        q.append("LIMIT %s")
        params.append(limit)
    return _fetch(" ".join(q), params)

def update_project_match(project_name: str, *, master_id: Optional[str], method: Optional[str]) -> None:
    with connect() as conn, conn.cursor() as cur:
        cur.execute(
            """
            UPDATE trn_repair
               SET master_project_id = %s,
                   match_method = %s
             WHERE project_name = %s
            """,
            (master_id, method, project_name)
        )
        conn.commit()

def get_jobs(job_type: Optional[str] = None, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    q = ["SELECT id, job_type, description, repair_category, job_status FROM trn_repair"]
    params: List[Any] = []
    if job_type:
        q.append("WHERE job_type = %s")
        params.append(job_type)
    q.append("ORDER BY id ASC")
    if limit:
        q.append("LIMIT %s")
        params.append(limit)
    return _fetch(" ".join(q), params)

def update_job_category(job_id: Any, *, category: str, group: str) -> None:
    with connect() as conn, conn.cursor() as cur:
        cur.execute(
            """
            UPDATE trn_repair
               SET text_category = %s,
                   category_group = %s,
                   updated_at = now()
             WHERE id = %s
            """,
            (category, group, job_id)
        )
        conn.commit()
