import os
import sys
import uvicorn
import socket

# SET DATABASE_URL BEFORE importing coachplan modules!
# db.py builds its engine at import time from this variable
if not os.getenv("DATABASE_URL"):
    if getattr(sys, 'frozen', False):
        # Running as compiled executable
        base_dir = os.path.dirname(sys.executable)
    else:
        base_dir = os.path.dirname(os.path.abspath(__file__))

    db_path = os.path.join(base_dir, "coachplan.db")
    # sqlite:///absolute/path/to/file.db (3 slashes for absolute)
    os.environ["DATABASE_URL"] = f"sqlite:///{db_path}"
    print(f"[INFO] Using SQLite database at: {db_path}")

from coachplan.db import Base, engine  # noqa: E402
from coachplan import models  # noqa: E402,F401  registers every table on Base.metadata
from coachplan.main import app as fastapi_app  # noqa: E402


def find_free_port(start_port=8000, max_attempts=10):
    """Find a free port starting from start_port"""
    for port in range(start_port, start_port + max_attempts):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind(('127.0.0.1', port))
                return port
        except OSError:
            continue
    raise RuntimeError(f"Could not find a free port in range {start_port}-{start_port + max_attempts}")


if __name__ == "__main__":
    if os.environ["DATABASE_URL"].startswith("sqlite"):
        # local file database: no alembic run, create what is missing
        Base.metadata.create_all(bind=engine)

    try:
        port = find_free_port(int(os.getenv("PORT", "8000")))
    except RuntimeError as e:
        print(f"[ERROR] {e}")
        sys.exit(1)

    uvicorn.run(fastapi_app, host="127.0.0.1", port=port, reload=False)
