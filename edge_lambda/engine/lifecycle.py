"""CloudFront Lifecycle - 요청 하나의 4단계 파이프라인

viewer-request → cache → origin-request → (origin) → origin-response → viewer-response

- viewer-request가 응답을 반환하면 곧바로 viewer-response로 (캐시/오리진 생략)
- 캐시 히트면 viewer-response로 (오리진 생략), 헤더 X-Cache: Hit
- origin-request가 응답을 반환하면 오리진 조회와 origin-response를 생략
- 오리진을 거친 응답은 viewer-response 후 X-Cache: Miss
- 캐시에는 2xx 응답만 저장
"""

from typing import Any, Dict, Optional

from edge_lambda.core.constants import ORIGIN_REQUEST, ORIGIN_RESPONSE, VIEWER_REQUEST, VIEWER_RESPONSE
from edge_lambda.core.exceptions import MethodNotAllowedError
from edge_lambda.core.logging import logger
from edge_lambda.services.impl.cache_service import CacheService
from edge_lambda.utils.events import combine_result, get_cf, is_response_result, is_success_status

from .exceptions import NoResult
from .function_set import FunctionSet


class CloudFrontLifecycle:
    """요청 하나를 위한 라이프사이클 (요청마다 새로 생성)"""

    def __init__(
        self,
        event: Dict[str, Any],
        context: Any,
        cache_service: CacheService,
        fn_set: FunctionSet,
        disable_cache: bool = False,
    ):
        self.event = event
        self.context = context
        self.cache_service = cache_service
        self.fn_set = fn_set
        self.disable_cache = disable_cache

    @property
    def request(self) -> Dict[str, Any]:
        return get_cf(self.event)["request"]

    def _set_event_type(self, event_type: str) -> None:
        get_cf(self.event)["config"]["eventType"] = event_type

    async def run(self, url: str) -> Optional[Dict[str, Any]]:
        """
        파이프라인 실행

        Args:
            url: 로깅용 요청 URL

        Returns:
            viewer-response 결과

        Raises:
            MethodNotAllowedError: behavior가 허용하지 않는 메서드
        """
        self.fn_set.origin.init(self.event)

        method = self.request["method"]
        logger.info(f"{method} {url}")

        if method not in self.fn_set.behavior.allowed_methods:
            logger.info("✗  Method Not Allowed")
            raise MethodNotAllowedError("Cloudfront method not allowed")

        try:
            return await self.on_viewer_request()
        except NoResult:
            pass

        try:
            return await self.on_cache()
        except NoResult:
            pass

        result = await self.on_origin_request()

        # 2xx 응답만 저장
        if self.can_cache() and is_success_status(result):
            self.cache_service.save_to_cache(combine_result(self.event, result), self.fn_set.behavior)

        result = await self.on_viewer_response(result)
        if result:
            headers = result.get("headers") or {}
            headers["x-cache"] = [{"key": "X-Cache", "value": "Miss"}]
            result["headers"] = headers

        return result

    async def on_viewer_request(self) -> Optional[Dict[str, Any]]:
        logger.info(f"→ {VIEWER_REQUEST}")

        self._set_event_type(VIEWER_REQUEST)
        result = await self.fn_set.viewer_request(self.event, self.context)

        if is_response_result(result):
            return await self.on_viewer_response(result)

        # 핸들러가 새 요청 dict를 반환한 경우 이후 단계에 반영
        if isinstance(result, dict) and result is not self.request:
            get_cf(self.event)["request"] = result

        raise NoResult()

    async def on_viewer_response(self, result: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        logger.info(f"← {VIEWER_RESPONSE}")

        self._set_event_type(VIEWER_RESPONSE)
        event = combine_result(self.event, result)
        return await self.fn_set.viewer_response(event, self.context)

    def can_cache(self) -> bool:
        if self.disable_cache:
            return False
        return self.request["method"] in self.fn_set.behavior.cached_methods

    async def on_cache(self) -> Optional[Dict[str, Any]]:
        logger.info("→ cache")

        if not self.can_cache():
            logger.info("✗ Cache disabled")
            raise NoResult()

        result = self.cache_service.retrieve_from_cache(self.event)

        if result is None:
            logger.info("✗ Cache miss")
            raise NoResult()
        logger.info("✓ Cache hit")

        result["headers"]["x-cache"] = [{"key": "X-Cache", "value": "Hit"}]
        return await self.on_viewer_response(result)

    async def on_origin(self) -> Dict[str, Any]:
        logger.info("→ origin")
        return await self.fn_set.origin.retrieve(self.event)

    async def on_origin_request(self) -> Dict[str, Any]:
        logger.info(f"→ {ORIGIN_REQUEST}")

        self._set_event_type(ORIGIN_REQUEST)
        result = await self.fn_set.origin_request(self.event, self.context)

        if is_response_result(result):
            return result

        if isinstance(result, dict) and result is not self.request:
            get_cf(self.event)["request"] = result

        result_from_origin = await self.on_origin()
        return await self.on_origin_response(result_from_origin)

    async def on_origin_response(self, result: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"← {ORIGIN_RESPONSE}")

        self._set_event_type(ORIGIN_RESPONSE)
        event = combine_result(self.event, result)
        return await self.fn_set.origin_response(event, self.context)
