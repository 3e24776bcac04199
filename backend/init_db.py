"""
Database initialization script
Drops all tables, recreates them and seeds the default facilities
"""
from sqlalchemy import create_engine, inspect, select
from sqlalchemy.orm import Session, sessionmaker

from kennel.common.time import utcnow
from kennel.config import get_settings
from kennel.database import Base

# Import all models
from kennel.environment.models import Environment, EnvironmentType
from kennel.member.models import Member  # noqa: F401
from kennel.post.models import Post  # noqa: F401
from kennel.puppy.models import Puppy  # noqa: F401


DEFAULT_ENVIRONMENTS: list[dict] = [
    {
        "name": "犬舍住宿區",
        "type": EnvironmentType.ACCOMMODATION.value,
        "description": "獨立空調犬舍，每日清潔消毒",
        "features": ["獨立空調", "每日消毒"],
    },
    {
        "name": "訓練教室",
        "type": EnvironmentType.CLASSROOM.value,
        "description": "室內社會化與基礎服從訓練空間",
        "features": ["防滑地板", "訓練器材"],
    },
    {
        "name": "戶外運動場",
        "type": EnvironmentType.PLAYGROUND.value,
        "description": "草地運動場，提供每日放風時間",
        "features": ["天然草地", "遮陽棚"],
    },
    {
        "name": "接送車輛",
        "type": EnvironmentType.TRANSPORT.value,
        "description": "配備固定式運輸籠的接送車",
        "features": ["運輸籠", "車內空調"],
    },
]


def _seed_environments(db: Session) -> None:
    print(f"\nSeeding default Environment data ({len(DEFAULT_ENVIRONMENTS)} rows)...")
    names = [item["name"] for item in DEFAULT_ENVIRONMENTS]
    existing_names = set(
        db.execute(select(Environment.name).where(Environment.name.in_(names))).scalars().all()
    )

    inserted = 0
    skipped = 0
    now = utcnow()
    for item in DEFAULT_ENVIRONMENTS:
        name = item["name"]
        if name in existing_names:
            print(f"  - Environment {name}: exists, skip")
            skipped += 1
            continue

        db.add(Environment(**item, created_at=now, updated_at=now))
        print(f"  - Environment {name}: inserted")
        inserted += 1

    print(f"Environment seeding done (inserted={inserted}, skipped={skipped}).")


def init_db():
    settings = get_settings()
    engine = create_engine(settings.sqlalchemy_database_uri())

    # Drop all tables
    print("Dropping all tables...")
    Base.metadata.drop_all(bind=engine)

    # Create all tables
    print("Creating all tables...")
    Base.metadata.create_all(bind=engine)

    # Seed default data
    print("Seeding default data...")
    SessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        future=True,
    )
    db = SessionLocal()
    try:
        _seed_environments(db)
        db.commit()
        print("\n✅ Default data seeded successfully!")
    except Exception:
        db.rollback()
        print("\n❌ Failed to seed default data (rolled back).")
        raise
    finally:
        db.close()

    print("\n✅ Database initialized successfully!")

    # Show created tables
    inspector = inspect(engine)
    tables = inspector.get_table_names()
    print(f"\nCreated {len(tables)} tables:")
    for table in tables:
        print(f"  - {table}")

if __name__ == "__main__":
    init_db()
