"""Database connection and session management."""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import NullPool
from quickcut.config import settings

# Serverless handlers hold no state between requests, so pooling is left to the
# Supabase pooler (port 6543). Stationary servers keep a local pool.
if "pooler.supabase.com" in settings.database_url or settings.database_url.endswith(":6543"):
    engine = create_engine(
        settings.database_url,
        poolclass=NullPool,  # Required for pooler connections
        echo=settings.environment == "development",
    )
elif settings.database_url.startswith("postgresql"):
    engine = create_engine(
        settings.database_url,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        echo=settings.environment == "development",
    )
else:
    engine = create_engine(settings.database_url, poolclass=NullPool)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
