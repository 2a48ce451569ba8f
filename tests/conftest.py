import os
import tempfile
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from order_console.core.config import DatabaseConfig, KafkaConfig, LoggerConfig, Settings
from order_console.errors import BrokerError, BrokerUnavailableError
from order_console.main import create_app

ROOT = Path(__file__).resolve().parent.parent


class FakeBroker:
    """Stands in for KafkaBroker: records messages instead of publishing them."""

    def __init__(self):
        self.sent: list[tuple[str, dict, str | None]] = []
        self.is_ready = True
        self.fail = False

    def send(self, topic, message, key=None):
        if not self.is_ready:
            raise BrokerUnavailableError("Kafka producer not initialized")
        if self.fail:
            raise BrokerError(f"Failed to send message to topic {topic}")
        self.sent.append((topic, message, key))

    def connect(self):
        pass

    def close(self):
        pass


@pytest.fixture(scope="function")
def db_url():
    """Migrated SQLite database in a temporary directory."""
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    url = f"sqlite:///{test_db_path}"

    # Run Alembic migrations to set up the schema and seed the ConnectX specifications
    alembic_cfg = Config(str(ROOT / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(ROOT / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", url)
    command.upgrade(alembic_cfg, "head")

    yield url

    for suffix in ["", "-wal", "-shm"]:
        path = f"{test_db_path}{suffix}"
        if os.path.exists(path):
            os.remove(path)
    os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def session_factory(db_url):
    test_engine = create_engine(db_url, connect_args={"check_same_thread": False})

    # Enable WAL mode to reduce locking issues
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    yield sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    test_engine.dispose()


@pytest.fixture(scope="function")
def db(session_factory) -> Session:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def settings(db_url, tmp_path) -> Settings:
    return Settings(
        database=DatabaseConfig(url=db_url),
        logger=LoggerConfig(log_dir=str(tmp_path / "logs"), to_console=False),
        kafka=KafkaConfig(enable_kafka=False),
        remap_kafka_topic_name={"esb.prd.createServiceOrder": "esb.uat.createServiceOrder"},
    )


@pytest.fixture(scope="function")
def broker() -> FakeBroker:
    return FakeBroker()


@pytest.fixture(scope="function")
def app(settings, session_factory, broker):
    return create_app(
        settings,
        session_factory=session_factory,
        broker=broker,
        configure_logging=False,
    )


@pytest.fixture(scope="function")
def client(app, db):
    """Create a test client with database dependency override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    from order_console.api.deps import get_db

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()
