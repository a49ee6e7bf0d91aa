from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .settings import settings

# SQLite needs check_same_thread off because FastAPI serves sync routes from a threadpool
_connect_args = {"check_same_thread": False} if settings.RR_DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.RR_DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
