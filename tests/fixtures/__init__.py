"""테스트 자산 레이어

규칙:
- 네트워크 의존 없음
- 이벤트/핸들러 소스/매니페스트 조각만 제공
"""

from .events import make_event
from .handlers import AUTH_HANDLER, BROKEN_HANDLER, PASS_THROUGH_HANDLER, VIEWER_RESPONSE_HANDLER, write_handler

__all__ = [
    "make_event",
    "write_handler",
    "PASS_THROUGH_HANDLER",
    "VIEWER_RESPONSE_HANDLER",
    "AUTH_HANDLER",
    "BROKEN_HANDLER",
]
