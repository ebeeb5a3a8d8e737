import logging
import time

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, declarative_base, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool


logger = logging.getLogger(__name__)

Base = declarative_base()

DEFAULT_DATABASE_URI = 'sqlite:///bookstore.db'


def make_engine(database_uri=DEFAULT_DATABASE_URI, echo=False):
    """Create the engine for the given URI.

    In-memory SQLite shares a single connection so every session sees the
    same database.
    """
    if database_uri.startswith('sqlite'):
        options = {'connect_args': {'check_same_thread': False}}
        if ':memory:' in database_uri or database_uri == 'sqlite://':
            options['poolclass'] = StaticPool
        return create_engine(database_uri, echo=echo, **options)

    return create_engine(
        database_uri,
        echo=echo,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True
    )


@event.listens_for(Engine, 'connect')
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY constraints unless asked per connection
    if type(dbapi_connection).__module__.startswith('sqlite3'):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


def check_connection(engine, max_attempts=5, delay=3):
    """Try to reach the database a few times, sleeping between attempts."""
    for attempt in range(max_attempts):
        try:
            with Session(engine) as session:
                session.execute(text('SELECT 1'))
                logger.info('Connected to the database.')
                return True
        except OperationalError:
            logger.warning('Connection failed. Attempt %s of %s.', attempt + 1, max_attempts)
            if attempt + 1 < max_attempts:
                time.sleep(delay)
    return False


def init_db(engine):
    # Models must be imported so their tables are registered on Base.metadata
    import app.models  # noqa: F401

    Base.metadata.create_all(engine)


def make_session_factory(engine):
    return scoped_session(sessionmaker(bind=engine))
