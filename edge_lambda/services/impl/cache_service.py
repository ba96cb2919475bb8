"""엣지 캐시 서비스 - 캐싱 로직만 담당"""
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from edge_lambda.core.constants import CACHE_ID
from edge_lambda.core.database import create_cache_engine, create_session_factory, session_scope
from edge_lambda.core.exceptions import CacheConnectionException
from edge_lambda.core.logging import logger
from edge_lambda.repositories.impl.cache_entry_repository import CacheEntryRepository
from edge_lambda.schemas.behavior_schema import Behavior
from edge_lambda.utils.cache_control import parse_cache_control
from edge_lambda.utils.events import get_cf, to_result_response
from edge_lambda.utils.headers import CloudFrontHeadersHelper


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CacheService:
    """URI 단위 응답 본문 캐시 (캐시 디렉터리별 SQLite 파일)

    만료는 조회 시점에만 확인하며 만료된 엔트리는 그때 삭제합니다.
    """

    def __init__(
        self,
        cache_dir: str,
        clock: Callable[[], datetime] = _utc_now,
        namespace: str = CACHE_ID,
    ):
        self.cache_dir = os.path.abspath(cache_dir)
        self.namespace = namespace
        self.clock = clock
        try:
            self.engine = create_cache_engine(self.cache_dir)
        except Exception as e:
            logger.error(f"Failed to open cache storage: {e}")
            raise CacheConnectionException(str(e), details={"cache_dir": self.cache_dir}) from e
        self._session_factory = create_session_factory(self.engine)

    def retrieve_from_cache(self, event: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """요청 URI로 캐시 조회

        Returns:
            캐시된 본문을 담은 200 응답, 없거나 만료되었으면 None
        """
        uri = get_cf(event)["request"]["uri"]
        return self.lookup(uri)

    def lookup(self, uri: str) -> Optional[Dict[str, Any]]:
        with session_scope(self._session_factory) as db:
            repo = CacheEntryRepository(db, self.namespace)
            try:
                row = repo.get(uri)
            except SQLAlchemyError as e:
                logger.error(f"Cache read error: {type(e).__name__}: {e}")
                raise CacheConnectionException(
                    str(e), details={"cache_dir": self.cache_dir, "uri": uri}
                ) from e

            if row is None:
                return None

            expire = datetime.fromisoformat(row.expire)
            if self.clock() < expire:
                return to_result_response(row.body, row.body_encoding or "text")

            logger.debug(f"Cache expired for uri: {uri} (expired at {row.expire})")
            repo.delete(uri)
            return None

            expire = datetime.fromisoformat(row.expire)
            if self.clock() < expire:
                return row.body

            logger.debug(f"Cache expired for uri: {uri} (expired at {row.expire})")
            repo.delete(uri)
            return None

    def compute_ttl(self, headers: Optional[Dict[str, Any]], behavior: Behavior) -> int:
        """cache-control max-age (없으면 default_ttl)를 [min_ttl, max_ttl]로 제한"""
        ttl = behavior.default_ttl

        cache_control = CloudFrontHeadersHelper(headers).first("cache-control")
        if cache_control:
            parsed = parse_cache_control(cache_control)
            if parsed and "max-age" in parsed:
                ttl = int(parsed["max-age"])

        ttl = min(ttl, behavior.max_ttl)
        ttl = max(ttl, behavior.min_ttl)
        return ttl

    def save_to_cache(self, event: Dict[str, Any], behavior: Behavior) -> None:
        """응답 이벤트의 본문을 요청 URI로 저장"""
        cf = get_cf(event)
        uri = cf["request"]["uri"]
        response = cf.get("response") or {}
        self.store(uri, response, behavior)

    def store(self, uri: str, response: Dict[str, Any], behavior: Behavior) -> None:
        ttl = self.compute_ttl(response.get("headers"), behavior)
        expire = self.clock() + timedelta(seconds=ttl)

        with session_scope(self._session_factory) as db:
            CacheEntryRepository(db, self.namespace).upsert(
                uri, expire.isoformat(), response.get("body"), response.get("bodyEncoding") or "text"
            )
        logger.info(f"Cache set for uri: {uri}, TTL: {ttl}s")

    def purge(self) -> int:
        """네임스페이스의 모든 엔트리 삭제"""
        with session_scope(self._session_factory) as db:
            deleted = CacheEntryRepository(db, self.namespace).delete_all()
        logger.info(f"Cache purged: {deleted} entries removed")
        return deleted

    def count(self) -> int:
        with session_scope(self._session_factory) as db:
            return CacheEntryRepository(db, self.namespace).count()

    def close(self) -> None:
        self.engine.dispose()
