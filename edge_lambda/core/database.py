"""캐시 디렉터리별 SQLite 연결 및 세션 관리"""
import os
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from contextlib import contextmanager
from typing import Generator

from edge_lambda.core.constants import CACHE_ID
from edge_lambda.core.logging import logger

# SQLAlchemy Base
Base = declarative_base()


def create_cache_engine(cache_dir: str) -> Engine:
    """캐시 디렉터리에 SQLite 엔진 생성 및 테이블 초기화"""
    os.makedirs(cache_dir, exist_ok=True)
    db_path = os.path.join(cache_dir, f"{CACHE_ID}.sqlite")

    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    logger.debug(f"Cache storage initialized: {db_path}")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """Context Manager: 세션 제공 (commit / rollback)"""
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
