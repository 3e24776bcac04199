from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tests._bootstrap import bootstrap_backend_imports, reset_caches


bootstrap_backend_imports()


def make_session_factory() -> sessionmaker:
    """Create an isolated SQLite in-memory DB with all kennel tables."""
    reset_caches()

    # Import models to register tables on Base.metadata before create_all().
    from kennel.database import Base  # noqa: E402

    import kennel.environment.models  # noqa: F401,E402
    import kennel.member.models  # noqa: F401,E402
    import kennel.post.models  # noqa: F401,E402
    import kennel.puppy.models  # noqa: F401,E402

    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)

    return sessionmaker(bind=engine, future=True)


def make_session() -> Session:
    return make_session_factory()()
