"""
SQLite storage for skill weight seeds.

Uses SQLAlchemy. Only the seed table lives here; scores are never persisted.
"""

from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Tuple

from sqlalchemy import create_engine, Column, String, Integer, DateTime
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from .dictionary import ConstructionFailure
from .normalize import normalize_keyword

Base = declarative_base()


class SkillWeight(Base):
    """One weighted skill keyword."""

    __tablename__ = "skill_weights"

    keyword = Column(String, primary_key=True)  # normalized (lowercase, trimmed)
    weight = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False, default=0)  # seed order
    created_at = Column(DateTime, nullable=False, default=datetime.now)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()


def store_seed(db_path: Path, entries: Iterable[Tuple[str, int]], replace: bool = True) -> int:
    """
    Write (keyword, weight) pairs to the seed table.

    Args:
        db_path: Path to SQLite database file
        entries: Pairs to store; keywords are normalized before writing
        replace: Delete existing rows first

    Returns:
        Number of rows written
    """
    init_database(db_path)
    session = get_session(db_path)
    try:
        if replace:
            session.query(SkillWeight).delete()
        count = 0
        for position, (keyword, weight) in enumerate(entries):
            session.add(SkillWeight(
                keyword=normalize_keyword(keyword),
                weight=weight,
                position=position,
            ))
            count += 1
        session.commit()
        return count
    except SQLAlchemyError:
        session.rollback()
        raise
    finally:
        session.close()


def load_seed_from_db(db_path: Path) -> List[Tuple[str, int]]:
    """
    Read seed pairs in stored order.

    Raises:
        ConstructionFailure: If the database is missing or unreadable
    """
    if not db_path.exists():
        raise ConstructionFailure(f"Seed database not found: {db_path}")
    session = get_session(db_path)
    try:
        rows = session.query(SkillWeight).order_by(SkillWeight.position, SkillWeight.keyword).all()
        return [(row.keyword, row.weight) for row in rows]
    except SQLAlchemyError as e:
        raise ConstructionFailure(f"Cannot read seed database {db_path}: {e}") from e
    finally:
        session.close()
