"""로깅 설정

라이프사이클 단계 로그(→ viewer-request, ✓ Cache hit ...)는 한 줄씩 읽히는 것이
중요하므로 개발 환경에서도 호출 위치는 DEBUG 레벨에서만 붙입니다.
"""
import logging
import os
import sys
from typing import Optional

from edge_lambda.core.config import settings


LOGGER_NAME = "edge_lambda"

IS_PRODUCTION = os.getenv("ENVIRONMENT", "development") == "production"

_PLAIN_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
_DEBUG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"


def _resolve_level(level: Optional[str]) -> int:
    name = (level or settings.log_level).upper()
    # Production에서는 최소 INFO
    if IS_PRODUCTION and name == "DEBUG":
        name = "INFO"
    return getattr(logging, name, logging.INFO)


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """edge_lambda 로거 초기화 (여러 번 호출해도 핸들러는 하나)"""
    log = logging.getLogger(LOGGER_NAME)
    resolved = _resolve_level(level)
    log.setLevel(resolved)
    # uvicorn 루트 핸들러와 중복 출력 방지
    log.propagate = False

    handler = next((h for h in log.handlers if getattr(h, "_edge_lambda", False)), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler._edge_lambda = True
        log.addHandler(handler)

    handler.setLevel(resolved)
    fmt = _DEBUG_FORMAT if resolved <= logging.DEBUG else _PLAIN_FORMAT
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S"))

    return log


def set_log_level(level: str) -> None:
    """명령행 등에서 레벨을 다시 지정"""
    setup_logging(level)


logger = setup_logging()
