"""Lambda 실행 컨텍스트 / 이벤트 config 빌더"""
import sys
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict

from edge_lambda.core.config import Settings


@dataclass
class LambdaContext:
    """핸들러에 두 번째 인자로 전달되는 컨텍스트 (AWS Python 런타임과 같은 속성명)"""

    function_name: str = ""
    function_version: str = ""
    invoked_function_arn: str = ""
    memory_limit_in_mb: str = "128"
    aws_request_id: str = field(default_factory=lambda: str(uuid.uuid1()))
    log_group_name: str = ""
    log_stream_name: str = ""
    callback_waits_for_empty_event_loop: bool = True

    def get_remaining_time_in_millis(self) -> int:
        # 로컬 실행에는 타임아웃이 없음
        return sys.maxsize


def build_context() -> LambdaContext:
    return LambdaContext()


def build_config(settings: Settings) -> Callable[[str], Dict[str, Any]]:
    """eventType을 받아 이벤트 config dict를 만드는 빌더 반환"""

    def builder(event_type: str) -> Dict[str, Any]:
        return {
            "distributionDomainName": settings.distribution_domain_name,
            "distributionId": settings.distribution_id,
            "eventType": event_type,
            "requestId": str(uuid.uuid4()),
        }

    return builder
