from __future__ import annotations

import json
import sys
import tempfile
from pathlib import Path

# Allow running as: python scripts/smoketest.py
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from fastapi.testclient import TestClient

from user_registry.main import create_app
from user_registry.settings import Settings


def main() -> int:
    with tempfile.TemporaryDirectory() as tmp:
        db_path = Path(tmp) / "db.json"
        db_path.write_text(json.dumps({"users": [{"email": "a@x.com", "role": "user"}]}, indent=2), encoding="utf-8")

        c = TestClient(create_app(settings=Settings(db_path=str(db_path))))

        r = c.post("/authenticate", json={"email": "a@x.com"})
        print("/authenticate", r.status_code, r.json())

        r = c.put("/update", json={"email": "a@x.com", "role": "admin"})
        print("/update", r.status_code, r.json())
        if r.status_code != 200:
            print(r.text)
            return 1

        r = c.put("/update", json={"email": "missing@x.com", "role": "admin"})
        print("/update(missing)", r.status_code, r.json())

        print(db_path.read_text(encoding="utf-8"))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
