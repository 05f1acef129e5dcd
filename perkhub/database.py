from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool
from sqlalchemy.exc import SQLAlchemyError
from typing import Generator
import logging
import os

from . import config

logger = logging.getLogger(__name__)


def _build_engine():
    """
    Create the engine for the current environment.
    """
    if config.ENV == "test":
        # a single shared connection so every session sees the same in-memory db
        return create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if config.ENV == "local":
        logger.info(f"Connecting to local database at: {config.DATABASE_URL}")
        connect_args = {}
        if config.DATABASE_URL.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        return create_engine(config.DATABASE_URL, connect_args=connect_args)

    if config.ENV == "prod":
        if "DATABASE_URL" not in os.environ:
            raise ValueError("DATABASE_URL must be set when ENV=prod")
        logger.info("Connecting to production database")
        return create_engine(config.DATABASE_URL, pool_pre_ping=True)

    raise ValueError(f"Invalid environment: {config.ENV}")


engine = _build_engine()


def get_session() -> Generator[Session, None, None]:
    """
    Get a database session.
    """
    with Session(engine) as session:
        yield session


def init_db():
    """
    Initialize the database by creating all tables if they don't exist.
    """
    # make sure the table classes are registered on the metadata
    from . import models  # noqa: F401

    logger.debug("Initializing database tables")
    try:
        SQLModel.metadata.create_all(engine)
        logger.debug("Database tables initialized successfully")
    except SQLAlchemyError as e:
        logger.error(f"Error initializing database: {str(e)}")
        raise


def drop_all_tables():
    """
    Drop all tables in the database.
    """
    logger.debug("Dropping all tables")
    try:
        SQLModel.metadata.drop_all(engine)
        logger.debug("All tables dropped successfully")
    except SQLAlchemyError as e:
        logger.error(f"Error dropping tables: {str(e)}")
        raise


def recreate_tables():
    """
    Drop all tables and recreate them.
    """
    logger.debug("Starting table recreation")
    drop_all_tables()
    init_db()
    logger.debug("Table recreation completed")
