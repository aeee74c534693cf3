from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from callwindow.core.config import settings


class Base(DeclarativeBase):
    pass


# SQLite (dev/test) needs cross-thread access for the TestClient and workers
connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    import callwindow.repositories.models  # noqa: F401 - registers tables on Base.metadata

    Base.metadata.create_all(bind=engine)
