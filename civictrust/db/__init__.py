"""Database Infrastructure — SQLAlchemy Base shared by models, alembic and tests.

Invariants:
    - Single async engine per process (initialized via init_db)
    - All sessions are async (AsyncSession)
"""
