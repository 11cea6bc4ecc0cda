"""
Tests for database.py - SQLite seed storage.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from shortlist.database import (
    SkillWeight,
    init_database,
    get_session,
    load_seed_from_db,
    store_seed,
)
from shortlist.dictionary import DEFAULT_SEED, ConstructionFailure, WeightedDictionary


class TestDatabaseInit:
    """Test database initialization."""

    def test_init_creates_database_file(self, tmp_path):
        """Test that init_database creates the database file."""
        db_path = tmp_path / "test.db"
        assert not db_path.exists()

        init_database(db_path)

        assert db_path.exists()

    def test_init_creates_tables(self, tmp_path):
        """Test that init_database creates the skill_weights table."""
        db_path = tmp_path / "test.db"
        init_database(db_path)

        session = get_session(db_path)
        result = session.query(SkillWeight).count()
        assert result == 0
        session.close()

    def test_init_creates_parent_directories(self, tmp_path):
        """Test that init_database creates parent directories if missing."""
        db_path = tmp_path / "nested" / "dir" / "test.db"
        assert not db_path.parent.exists()

        init_database(db_path)

        assert db_path.exists()


class TestSkillWeightModel:
    """Test the SkillWeight model directly."""

    @pytest.fixture
    def db_session(self, tmp_path):
        """Create a temporary database and return a session."""
        db_path = tmp_path / "test.db"
        init_database(db_path)
        session = get_session(db_path)
        yield session
        session.close()

    def test_create_skill(self, db_session):
        db_session.add(SkillWeight(keyword="python", weight=7, position=0))
        db_session.commit()

        result = db_session.query(SkillWeight).filter_by(keyword="python").first()
        assert result is not None
        assert result.weight == 7
        assert result.created_at is not None

    def test_duplicate_keyword_fails(self, db_session):
        """keyword is the primary key."""
        db_session.add(SkillWeight(keyword="python", weight=7, position=0))
        db_session.commit()
        db_session.add(SkillWeight(keyword="python", weight=1, position=1))

        with pytest.raises(IntegrityError):
            db_session.commit()

    def test_missing_weight_fails(self, db_session):
        db_session.add(SkillWeight(keyword="python"))

        with pytest.raises(IntegrityError):
            db_session.commit()


class TestSeedRoundTrip:
    """Test storing and loading seeds."""

    def test_store_default_seed(self, tmp_path):
        db_path = tmp_path / "seed.db"
        count = store_seed(db_path, DEFAULT_SEED)

        assert count == 10
        assert load_seed_from_db(db_path) == list(DEFAULT_SEED)

    def test_keywords_normalized_on_store(self, tmp_path):
        db_path = tmp_path / "seed.db"
        store_seed(db_path, [("  Hash Table ", 8)])

        assert load_seed_from_db(db_path) == [("hash table", 8)]

    def test_replace_existing(self, tmp_path):
        db_path = tmp_path / "seed.db"
        store_seed(db_path, DEFAULT_SEED)
        store_seed(db_path, [("rust", 9)])

        assert load_seed_from_db(db_path) == [("rust", 9)]

    def test_append_duplicate_rolls_back(self, tmp_path):
        db_path = tmp_path / "seed.db"
        store_seed(db_path, [("rust", 9)])

        with pytest.raises(IntegrityError):
            store_seed(db_path, [("go", 4), ("rust", 1)], replace=False)

        assert load_seed_from_db(db_path) == [("rust", 9)]

    def test_build_from_db(self, tmp_path):
        db_path = tmp_path / "seed.db"
        store_seed(db_path, DEFAULT_SEED)

        d = WeightedDictionary.build(load_seed_from_db(db_path))
        assert d.lookup("MySQL") == 2

    def test_missing_database(self, tmp_path):
        with pytest.raises(ConstructionFailure):
            load_seed_from_db(tmp_path / "missing.db")
