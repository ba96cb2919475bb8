"""Function Set - 경로 패턴 하나에 묶인 4개 핸들러 + 캐시 정책"""

from typing import Any, Dict, Optional

from edge_lambda.core.constants import ORIGIN_REQUEST, ORIGIN_RESPONSE, VIEWER_REQUEST, VIEWER_RESPONSE
from edge_lambda.core.logging import logger
from edge_lambda.schemas.behavior_schema import Behavior
from edge_lambda.schemas.cloudformation_schema import CloudFrontCacheBehavior
from edge_lambda.services.impl.origin_service import Origin
from edge_lambda.utils.callback import AsyncHandler, wrap_handler
from edge_lambda.utils.events import get_cf
from edge_lambda.utils.module_loader import ModuleLoader
from edge_lambda.utils.path_pattern import glob_to_regex


async def identity_request_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    return get_cf(event)["request"]


async def identity_response_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    return get_cf(event)["response"]


class FunctionSet:
    """라우팅 버킷

    설정 리로드 시 통째로 새로 만들어지며 요청 처리 중에는 읽기 전용입니다.
    """

    def __init__(
        self,
        pattern: str,
        origin: Optional[Origin] = None,
        name: str = "",
        behavior: Optional[CloudFrontCacheBehavior] = None,
        module_loader: Optional[ModuleLoader] = None,
    ):
        self.pattern = pattern
        self.regex = glob_to_regex(pattern)
        self.origin = origin or Origin()
        self.name = name
        self.behavior = Behavior.from_cache_behavior(behavior)
        self.module_loader = module_loader or ModuleLoader()

        self.viewer_request: AsyncHandler = identity_request_handler
        self.origin_request: AsyncHandler = identity_request_handler
        self.origin_response: AsyncHandler = identity_response_handler
        self.viewer_response: AsyncHandler = identity_response_handler

    def matches(self, path: str) -> bool:
        return bool(self.regex.match(path))

    def set_handler(self, event_type: str, path: str) -> None:
        """이벤트 타입 슬롯에 핸들러 바인딩

        Raises:
            HandlerLoadException: 모듈/함수 로드 실패
        """
        slots = {
            VIEWER_REQUEST: "viewer_request",
            ORIGIN_REQUEST: "origin_request",
            ORIGIN_RESPONSE: "origin_response",
            VIEWER_RESPONSE: "viewer_response",
        }
        slot = slots.get(event_type)
        if slot is None:
            logger.warning(f"Unknown CloudFront event type '{event_type}' for {path}, ignored")
            return

        fn = self.module_loader.load_module(path)
        setattr(self, slot, wrap_handler(fn, path))

    def handler_path(self, event_type: str) -> str:
        handler = getattr(self, event_type.replace("-", "_"))
        return getattr(handler, "path", None) or ""

    def purge_loaded_functions(self) -> None:
        self.module_loader.purge_loaded_modules()

    def __repr__(self) -> str:
        return f"<FunctionSet(pattern={self.pattern}, origin={self.origin.type})>"
