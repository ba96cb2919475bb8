"""캐시 엔트리 리포지토리 - SQLite 기반 영속 캐시."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from edge_lambda.core.constants import CACHE_ID
from edge_lambda.core.exceptions import CacheException
from edge_lambda.core.logging import logger
from edge_lambda.repositories.models import CacheEntry


class CacheEntryRepository:
    def __init__(self, db: Session, namespace: str = CACHE_ID):
        self.db = db
        self.namespace = namespace

    def _query(self):
        return self.db.query(CacheEntry).filter(CacheEntry.namespace == self.namespace)

    def get(self, uri: str) -> Optional[CacheEntry]:
        return self._query().filter(CacheEntry.uri == uri).first()

    def upsert(self, uri: str, expire: str, body: Optional[str], body_encoding: str = "text") -> None:
        """엔트리를 삽입/덮어쓰기."""
        try:
            row = self.get(uri)
            if row:
                row.expire = expire
                row.body = body
                row.body_encoding = body_encoding
            else:
                self.db.add(
                    CacheEntry(
                        namespace=self.namespace,
                        uri=uri,
                        expire=expire,
                        body=body,
                        body_encoding=body_encoding,
                    )
                )
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Cache write error: {type(e).__name__}: {e}")
            raise CacheException(f"Failed to write cache entry: {e}", details={"uri": uri})

    def delete(self, uri: str) -> bool:
        try:
            deleted = self._query().filter(CacheEntry.uri == uri).delete()
            self.db.commit()
            return deleted > 0
        except Exception as e:
            self.db.rollback()
            logger.error(f"Cache delete error: {type(e).__name__}: {e}")
            raise CacheException(f"Failed to delete cache entry: {e}", details={"uri": uri})

    def delete_all(self) -> int:
        try:
            deleted = self._query().delete()
            self.db.commit()
            return deleted
        except Exception as e:
            self.db.rollback()
            logger.error(f"Cache purge error: {type(e).__name__}: {e}")
            raise CacheException(f"Failed to purge cache: {e}")

    def count(self) -> int:
        return self._query().count()
