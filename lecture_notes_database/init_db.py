"""
Database initialization script.

Run this script to create all required tables in the database.
"""
import logging

from lecture_notes_database.db import get_engine
from lecture_notes_database.models import Base

logger = logging.getLogger(__name__)

# PUBLIC_INTERFACE
def init_db(engine=None):
    """Initializes the database by creating all tables if they do not exist."""
    engine = engine or get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("The tables were verified and the missing ones were created")
    return engine

# PUBLIC_INTERFACE
def drop_all(engine):
    """Drops every table. Only meant for test setup."""
    Base.metadata.drop_all(bind=engine)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    print("Database tables created successfully.")
