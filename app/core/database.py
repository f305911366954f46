from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.core.config import settings

db_url = settings.DATABASE_URL

if db_url.startswith("sqlite"):
    # Local/test order store: one shared in-process connection
    engine = create_engine(
        db_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
else:
    # Create SQLAlchemy engine with optimized parameters
    engine = create_engine(
        db_url,
        pool_size=settings.DB_POOL_SIZE,       # Default pool size
        max_overflow=settings.DB_MAX_OVERFLOW,  # Connections allowed beyond pool_size
        pool_timeout=settings.DB_POOL_TIMEOUT,  # Timeout waiting for a connection from pool
        pool_recycle=1800,                      # Recycle connections every 30 minutes
        pool_pre_ping=True                      # Verify connections before using them
    )

# Create session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# Create base class for models
Base = declarative_base()

# Dependency to get DB session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
