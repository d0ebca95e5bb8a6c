from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.core.config import Settings, settings


def build_engine(config: Settings):
    connect_args = {}
    if config.DATABASE_URL.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    return create_engine(
        config.DATABASE_URL,
        connect_args=connect_args,
        pool_pre_ping=True,
        echo=config.DEBUG,
        future=True
    )


engine = build_engine(settings)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

Base = declarative_base()


def get_db():
    """
    Una sesión de BD por petición, se cierra al terminar.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
