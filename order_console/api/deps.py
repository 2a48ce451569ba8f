from collections.abc import Iterator

from fastapi import Request
from sqlalchemy.orm import Session

from order_console.core.broker import KafkaBroker
from order_console.core.config import Settings


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_broker(request: Request) -> KafkaBroker:
    return request.app.state.broker


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
