from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.core.config import load_settings
from app.db.migrations import MIGRATIONS_DIR, apply_migrations, get_connection


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create or upgrade the vocabulary database.")
    parser.add_argument("--db-path", type=Path, help="defaults to MUFRADAT_DB_PATH")
    parser.add_argument("--migrations-dir", type=Path, default=MIGRATIONS_DIR)
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    db_path = args.db_path or load_settings().db_path
    applied = apply_migrations(db_path, migrations_dir=args.migrations_dir)
    with get_connection(db_path) as conn:
        lemma_parts = conn.execute("SELECT COUNT(*) AS total FROM lemmas").fetchone()["total"]

    print(
        json.dumps(
            {
                "db_path": str(db_path),
                "migrations_dir": str(args.migrations_dir),
                "applied_migrations": applied,
                "lemma_parts": int(lemma_parts),
            },
            ensure_ascii=False,
        )
    )
