import logging
from threading import Lock
from weakref import WeakSet

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from agenda.core import config

logger = logging.getLogger(__name__)


def _is_sqlite(url: str) -> bool:
    return url.startswith('sqlite')


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


def build_engine(url: str, **kwargs) -> Engine:
    if _is_sqlite(url):
        connect_args = {'check_same_thread': False, 'timeout': config.DB_CONNECT_TIMEOUT}
    else:
        connect_args = {'connect_timeout': config.DB_CONNECT_TIMEOUT}
        kwargs.setdefault('pool_timeout', config.DB_POOL_TIMEOUT)
        kwargs.setdefault('pool_recycle', config.DB_POOL_RECYCLE)

    connect_args.update(kwargs.pop('connect_args', {}))
    new_engine = create_engine(
        url,
        pool_pre_ping=True,
        echo=config.SQL_ECHO,
        connect_args=connect_args,
        **kwargs,
    )

    # Cascades on users/classes are declared in the schema; SQLite ignores them unless asked.
    if _is_sqlite(url):
        event.listen(new_engine, 'connect', _enable_sqlite_foreign_keys)

    return new_engine


engine = build_engine(config.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
# Engines whose users table has already been checked; a new engine gets its own pass.
_checked_engines: WeakSet = WeakSet()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    # Models register themselves on Base.metadata when imported.
    from agenda.models import school_class, task, user  # noqa: F401

    target = bind or engine
    Base.metadata.create_all(bind=target)
    ensure_users_schema(target)


def ensure_users_schema(bind: Engine | None = None) -> None:
    target = bind or engine
    if target in _checked_engines:
        return

    with _schema_lock:
        if target in _checked_engines:
            return

        inspector = inspect(target)

        if 'users' not in inspector.get_table_names():
            _checked_engines.add(target)
            return

        existing_columns = {column['name'] for column in inspector.get_columns('users')}
        migration_steps = [
            ('role', "ALTER TABLE users ADD COLUMN role VARCHAR(20) NOT NULL DEFAULT 'user'"),
        ]

        with target.begin() as connection:
            for column_name, statement in migration_steps:
                if column_name not in existing_columns:
                    logger.info('Adding missing users.%s column', column_name)
                    connection.execute(text(statement))
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_classes_user_day ON classes(user_id, day, start_time)')
            )
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_tasks_user_due ON tasks(user_id, due_date)')
            )

        _checked_engines.add(target)


def db_healthcheck(bind: Engine | None = None) -> tuple[bool, str | None]:
    try:
        with (bind or engine).connect() as connection:
            connection.execute(text('SELECT 1'))
        return True, None
    except Exception as exc:
        logger.warning('Database health check failed: %s', exc)
        return False, str(exc)
