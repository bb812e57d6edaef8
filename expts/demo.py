#!/usr/bin/env python3
"""
expts/demo.py

End-to-end demo against the filesystem backend:

  - seeds a temporary data root with a few profile records and media files
  - starts the profile service with uvicorn on localhost
  - waits for /health
  - mints a bearer token and queries /api/user for hits and misses
  - stops the service (and removes the data root unless KEEP_DATA=1)

Usage:
  python expts/demo.py

Environment:
  KEEP_DATA=1  -> leave the seeded data root on disk after the demo
"""

from __future__ import annotations

import json
import os
import shutil
import subprocess
import sys
import tempfile
import time
from pathlib import Path
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

import jwt

PORT = 8089
BASE_URL = f"http://127.0.0.1:{PORT}"
SECRET = "demo-secret-demo-secret-demo-secret!"
TABLE = "careershotinformation"
CONTAINER = "media-dev"

PROFILES = [
    # (display name, photo extension or None)
    ("Jane Doe", "png"),
    ("John Smith", "jpg"),
    ("Jo Ann Lee", None),
]


def log_section(title: str) -> None:
    print()
    print("#" * 79)
    print(f"# {title}")
    print("#" * 79)
    print()


def seed(root: Path) -> None:
    for name, photo_ext in PROFILES:
        key = "".join(name.lower().split())
        partition = name[0].upper()
        entity = {
            "PartitionKey": partition,
            "RowKey": key,
            "Name": name,
            "Description": f"{name} is a demo profile.",
            "LinkedIn": f"https://www.linkedin.com/in/{key}",
            "GitHub": f"https://github.com/{key}",
            "Skills": json.dumps(["python", "fastapi"]),
        }
        record_path = root / "tables" / TABLE / partition / f"{key}.json"
        record_path.parent.mkdir(parents=True, exist_ok=True)
        record_path.write_text(json.dumps(entity, indent=2), encoding="utf-8")

        blob_dir = root / "blobs" / CONTAINER
        blob_dir.mkdir(parents=True, exist_ok=True)
        if photo_ext:
            (blob_dir / f"{key}.{photo_ext}").write_bytes(b"demo photo")
        (blob_dir / f"{key}.pdf").write_bytes(b"%PDF-1.4 demo")
        print(f"  seeded {name!r} (photo: {photo_ext or 'none'})")


def wait_for_http(url: str, max_tries: int = 30, delay: float = 0.5) -> None:
    print(f"Waiting for {url} ...")
    for _ in range(max_tries):
        try:
            with urlopen(url, timeout=2) as resp:
                if 200 <= resp.status < 300:
                    print("  OK")
                    return
        except (URLError, ConnectionError):
            pass
        time.sleep(delay)
    raise SystemExit(f"timeout waiting for {url}")


def lookup(name: str, token: str | None) -> None:
    url = f"{BASE_URL}/api/user?{urlencode({'name': name})}"
    req = Request(url, method="GET")
    if token:
        req.add_header("Authorization", f"Bearer {token}")

    print(f"GET /api/user name={name!r} ({'with' if token else 'without'} token)")
    try:
        with urlopen(req, timeout=5) as resp:
            body = json.loads(resp.read().decode("utf-8"))
            print(f"  HTTP {resp.status}")
            for line in json.dumps(body, indent=2).splitlines():
                print(f"    {line}")
    except HTTPError as e:
        print(f"  HTTP {e.code}: {e.read().decode('utf-8', errors='replace')}")


def main() -> None:
    root_dir = Path(__file__).resolve().parent.parent
    data_root = Path(tempfile.mkdtemp(prefix="careershot-demo-"))
    keep_data = os.environ.get("KEEP_DATA", "0") == "1"

    log_section(f"Seeding data root {data_root}")
    seed(data_root)

    env = dict(
        os.environ,
        STORE_BACKEND="filesystem",
        PROFILE_DATA_ROOT=str(data_root),
        MEDIA_BASE_URL="https://media.example.com",
        AUTH_MODE="production",
        AUTH_SECRET=SECRET,
        AUTH_AUDIENCE="careershot-demo",
    )
    cmd = [
        sys.executable, "-m", "uvicorn", "careershot.main:create_app",
        "--factory", "--host", "127.0.0.1", "--port", str(PORT),
    ]

    log_section("Starting profile service")
    server = subprocess.Popen(cmd, cwd=root_dir / "profile_service", env=env)
    try:
        wait_for_http(f"{BASE_URL}/health")

        token = jwt.encode(
            {"sub": "demo", "aud": "careershot-demo", "exp": int(time.time()) + 300},
            SECRET,
            algorithm="HS256",
        )

        log_section("Lookups")
        lookup("Jane Doe", token)
        lookup("  john   SMITH ", token)
        lookup("Jo Ann Lee", token)  # record without a photo
        lookup("Nobody Here", token)
        lookup("", token)
        lookup("Jane Doe", None)
    finally:
        server.terminate()
        server.wait(timeout=10)
        if keep_data:
            log_section(f"KEEP_DATA=1 so {data_root} is left on disk")
        else:
            shutil.rmtree(data_root, ignore_errors=True)


if __name__ == "__main__":
    main()
