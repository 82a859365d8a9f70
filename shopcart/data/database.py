# shopcart/data/database.py
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from shopcart.utils.settings import DATABASE_URL
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    pass


def make_engine(url: str, **kwargs) -> Engine:
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True, **kwargs)

    kwargs.setdefault("connect_args", {"check_same_thread": False})
    eng = create_engine(url, **kwargs)

    #pysqlite sam zarzadza BEGIN i psuje SAVEPOINT, wiec BEGIN emitujemy recznie
    @event.listens_for(eng, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(eng, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return eng


engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    #import modeli zeby zarejestrowaly sie w Base.metadata
    import shopcart.data.models  # noqa: F401

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info(f"Database ready, tables: {sorted(Base.metadata.tables.keys())}")


def ping(db: Session) -> bool:
    db.execute(text("SELECT 1"))
    return True
