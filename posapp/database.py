from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from posapp.core.config import settings

DATABASE_URL = settings.database_url

# pysqlite connections are shared with FastAPI's threadpool
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """One session per request; services commit through BaseService.commit."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create the tenant, staff, attendance, payroll and template tables if missing."""
    import posapp.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
