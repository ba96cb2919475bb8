"""Behavior Router - 경로 패턴별 FunctionSet 관리 및 요청 매칭

설정 리로드 중에는 ready 게이트가 닫혀 새 요청이 대기하고, 새 behavior 목록이
완성되면 한 번에 교체한 뒤 게이트를 엽니다. 이미 게이트를 통과한 요청은 자신이
받은 FunctionSet으로 끝까지 처리됩니다.
"""

import asyncio
import os
from typing import Dict, List, Optional
from urllib.parse import urlsplit

from edge_lambda.core.config import DEFAULT_STORAGE_DIR, Settings
from edge_lambda.core.constants import EVENT_TYPES, WILDCARD_PATTERN
from edge_lambda.core.logging import logger
from edge_lambda.schemas.cloudformation_schema import CloudFrontCacheBehavior, Manifest
from edge_lambda.services.impl.cache_service import CacheService
from edge_lambda.services.impl.origin_service import Origin
from edge_lambda.utils.module_loader import ModuleLoader
from edge_lambda.utils.resource_loader import load_manifest

from .function_set import FunctionSet


class BehaviorRouter:
    def __init__(
        self,
        settings: Settings,
        manifest: Optional[Manifest] = None,
        cache_service: Optional[CacheService] = None,
        module_loader: Optional[ModuleLoader] = None,
    ):
        self.settings = settings
        self._manifest = manifest
        offline = self.manifest.offline

        # CLI/환경 변수 → 매니페스트 → 기본값
        self.cache_dir = os.path.abspath(settings.cache_dir or offline.cache_dir or DEFAULT_STORAGE_DIR)
        self.file_dir = os.path.abspath(settings.file_dir or offline.file_dir or DEFAULT_STORAGE_DIR)
        self.path = offline.path or ""

        os.makedirs(self.cache_dir, exist_ok=True)
        os.makedirs(self.file_dir, exist_ok=True)

        self.module_loader = module_loader or ModuleLoader()
        self.cache_service = cache_service or CacheService(self.cache_dir)

        self.behaviors: Dict[str, FunctionSet] = {}
        self.origins: Dict[str, Origin] = {}

        self._ready = asyncio.Event()
        self._ready.set()

    @property
    def manifest(self) -> Manifest:
        if self._manifest is None:
            self._manifest = load_manifest(self.settings.manifest_path)
        return self._manifest

    def match(self, url: str) -> Optional[FunctionSet]:
        """요청 경로에 맞는 FunctionSet (설정 순서대로 첫 매칭, 없으면 '*')"""
        if not url:
            return None

        path = urlsplit(url).path or "/"
        behaviors = self.behaviors

        for handler in behaviors.values():
            if handler.matches(path):
                return handler

        return behaviors.get(WILDCARD_PATTERN)

    async def wait_until_ready(self) -> None:
        await self._ready.wait()

    def begin_build(self) -> None:
        """외부 빌드 시작 - 새 요청을 게이트에서 대기시킴"""
        self._ready.clear()

    def finish_build(self) -> None:
        self._ready.set()

    def configure_origins(self) -> Dict[str, Origin]:
        manifest = self.manifest
        distribution = manifest.distribution_config
        mappings = distribution.origins if distribution else []
        origin_map = manifest.offline.origin_map

        origins: Dict[str, Origin] = {}
        for item in mappings:
            base_url = next((m.target for m in origin_map if m.id == item.id), None)
            if base_url and item.origin_path:
                base_url = _join_origin_path(base_url, item.origin_path)
            origins[item.id] = Origin(item, base_url or "")
        return origins

    def extract_behaviors(self) -> Dict[str, FunctionSet]:
        """매니페스트로부터 behavior 목록을 새로 만들어 교체

        Raises:
            HandlerLoadException: 핸들러 로드 실패
            ManifestException: 매니페스트 검증 실패
        """
        manifest = self.manifest
        origins = self.configure_origins()

        distribution = manifest.distribution_config
        cloudfront_behaviors = distribution.all_behaviors if distribution else []

        behaviors: Dict[str, FunctionSet] = {}

        for fn in manifest.functions.values():
            for lambda_at_edge in fn.cloudfront_events:
                pattern = lambda_at_edge.path_pattern or WILDCARD_PATTERN
                origin_id = lambda_at_edge.origin_id

                if pattern not in behaviors:
                    behavior = _find_cache_behavior(cloudfront_behaviors, pattern, origin_id)
                    behaviors[pattern] = FunctionSet(
                        pattern,
                        origin=origins.get(origin_id) if origin_id else None,
                        name=origin_id or "",
                        behavior=behavior,
                        module_loader=self.module_loader,
                    )

                behaviors[pattern].set_handler(lambda_at_edge.event_type, os.path.join(self.path, fn.handler))

        if WILDCARD_PATTERN not in behaviors:
            behaviors[WILDCARD_PATTERN] = FunctionSet(
                WILDCARD_PATTERN,
                origin=origins.get(WILDCARD_PATTERN),
                module_loader=self.module_loader,
            )

        self.origins = origins
        self.behaviors = behaviors
        return behaviors

    async def reload_behaviors(self, reload_manifest: bool = True) -> None:
        """설정 리로드 (게이트를 닫고 교체 후 다시 엶)"""
        self.begin_build()
        try:
            if reload_manifest and self.settings.manifest_path and os.path.exists(self.settings.manifest_path):
                self._manifest = load_manifest(self.settings.manifest_path)
            self.module_loader.purge_loaded_modules()
            self.extract_behaviors()
            self.log_behaviors()
        finally:
            self.finish_build()

    def purge_storage(self) -> int:
        return self.cache_service.purge()

    def close(self) -> None:
        self.cache_service.close()

    def log_storage(self) -> None:
        logger.info(f"Cache directory: file://{self.cache_dir}")
        logger.info(f"Files directory: file://{self.file_dir}")
        logger.info(f"Cached entries: {self.cache_service.count()}")

    def log_behaviors(self) -> None:
        for key, behavior in self.behaviors.items():
            logger.info(f"Lambdas for path pattern {key}: ")
            for event_type in EVENT_TYPES:
                path = behavior.handler_path(event_type)
                if path:
                    logger.info(f"{event_type} => {path}")


def _join_origin_path(base_url: str, origin_path: str) -> str:
    if base_url.startswith(("http://", "https://")):
        return base_url.rstrip("/") + "/" + origin_path.lstrip("/")
    return os.path.join(base_url, origin_path.lstrip("/"))


def _find_cache_behavior(
    behaviors: List[CloudFrontCacheBehavior], pattern: str, origin_id: Optional[str]
) -> Optional[CloudFrontCacheBehavior]:
    """같은 PathPattern의 behavior, 없으면 TargetOriginId가 같은 behavior"""
    for behavior in behaviors:
        if behavior.path_pattern and behavior.path_pattern == pattern:
            return behavior
    if not origin_id:
        return None
    return next((b for b in behaviors if b.target_origin_id == origin_id), None)
