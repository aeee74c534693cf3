import os
import sys

# Predictable test environment: no startup schema creation, local SQLite, no real calls
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("CALL_PROVIDER", "noop")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite:///./test_callwindow.db")

# Ensure the project root (which contains the 'callwindow' package) is on sys.path
THIS_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(THIS_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from callwindow.repositories.db import Base, engine, init_db  # noqa: E402
import callwindow.repositories.models  # noqa: E402,F401 - registers tables before drop_all

# Recreate the schema once per session (lifespan skips it when APP_ENV=test)
Base.metadata.drop_all(bind=engine)
init_db()
