"""FastAPI 앱 팩토리"""
import asyncio
import signal
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from edge_lambda import __version__
from edge_lambda.api import edge_router
from edge_lambda.clients.http_client import shutdown_shared_http_client
from edge_lambda.core.config import Settings, settings as default_settings
from edge_lambda.core.logging import logger
from edge_lambda.engine import BehaviorRouter
from edge_lambda.utils.context_builder import build_config
from edge_lambda.utils.resource_loader import load_injected_headers


def _install_reload_signal(behavior_router: BehaviorRouter) -> None:
    """SIGHUP으로 매니페스트/핸들러 리로드 (지원하지 않는 플랫폼은 무시)"""
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(
            signal.SIGHUP,
            lambda: asyncio.ensure_future(behavior_router.reload_behaviors()),
        )
    except (AttributeError, NotImplementedError, RuntimeError, ValueError) as e:
        # 메인 스레드가 아니거나 SIGHUP이 없는 플랫폼
        logger.debug(f"Reload signal not installed: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기"""
    settings: Settings = app.state.settings

    logger.info("Starting edge lambda offline...")
    if app.state.behavior_router is None:
        app.state.behavior_router = BehaviorRouter(settings)
    behavior_router: BehaviorRouter = app.state.behavior_router

    behavior_router.extract_behaviors()
    behavior_router.log_storage()
    behavior_router.log_behaviors()
    _install_reload_signal(behavior_router)
    logger.info(f"CloudFront Offline listening on port {settings.port}")

    yield

    logger.info("Shutting down edge lambda offline...")
    behavior_router.purge_storage()
    logger.info("CloudFront Offline storage purged")
    behavior_router.close()
    await shutdown_shared_http_client()


def create_app(settings: Optional[Settings] = None, behavior_router: Optional[BehaviorRouter] = None) -> FastAPI:
    """
    FastAPI 앱 생성 (Factory Pattern)

    Args:
        settings: 애플리케이션 설정 (기본: 환경 변수)
        behavior_router: 미리 구성한 라우터 (기본: lifespan에서 생성)

    Returns:
        FastAPI 앱 인스턴스
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Edge Lambda Offline",
        description="Lambda@Edge 라이프사이클 로컬 시뮬레이터",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.settings = settings
    app.state.behavior_router = behavior_router
    app.state.config_builder = build_config(settings)
    app.state.injected_headers = load_injected_headers(settings.headers_file)

    # 모든 경로를 받는 라우터이므로 마지막에 등록
    app.include_router(edge_router)

    return app


# 앱 인스턴스 생성 (uvicorn이 로드할 수 있도록)
app = create_app()
