"""CloudFront 이벤트 빌더 및 결과 판별 헬퍼

Lambda@Edge 핸들러가 받는 이벤트 형식
``{"Records": [{"cf": {"config": ..., "request": ..., "response": ...}}]}``
을 그대로 dict로 다룹니다.
"""

import base64
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from edge_lambda.core.constants import MAX_BODY_BYTES
from edge_lambda.utils.headers import to_cloudfront_headers


CloudFrontEvent = Dict[str, Any]


def get_cf(event: CloudFrontEvent) -> Dict[str, Any]:
    return event["Records"][0]["cf"]


def get_request(event: CloudFrontEvent) -> Dict[str, Any]:
    return get_cf(event)["request"]


def build_post_body(raw: bytes) -> Dict[str, Any]:
    """POST/PUT 본문을 CloudFront include-body 형식으로 변환 (최대 1MB)"""
    return {
        "data": base64.b64encode(raw[:MAX_BODY_BYTES]).decode("ascii"),
        "encoding": "base64",
        "inputTruncated": len(raw) > MAX_BODY_BYTES,
    }


def convert_to_cloudfront_event(
    *,
    method: str,
    path: str,
    query_string: str,
    headers: Iterable[Tuple[str, str]],
    client_ip: Optional[str],
    body: Any,
    cookies: Optional[Mapping[str, str]],
    config: Dict[str, Any],
) -> CloudFrontEvent:
    """수신 요청 정보를 viewer-request 이벤트로 변환"""
    request = {
        "clientIp": client_ip or "",
        "method": method.upper(),
        "headers": to_cloudfront_headers(headers),
        "uri": path.split("?")[0] or "/",
        "querystring": query_string or "",
        "body": body,
        "cookies": dict(cookies or {}),
    }
    return {"Records": [{"cf": {"config": config, "request": request}}]}


def combine_result(event: CloudFrontEvent, response: Dict[str, Any]) -> CloudFrontEvent:
    """요청 이벤트에 응답을 얹은 새 응답 이벤트 생성 (원본 이벤트는 그대로)"""
    cf = get_cf(event)
    return {"Records": [{"cf": {**cf, "config": dict(cf["config"]), "response": response}}]}


def is_response_result(result: Any) -> bool:
    """요청 단계 핸들러 결과가 응답 형태(status 보유)인지 판별"""
    return isinstance(result, Mapping) and "status" in result


def is_success_status(result: Any) -> bool:
    """응답 status가 2xx인지 판별 (캐시 저장 대상)"""
    if not is_response_result(result):
        return False
    try:
        return 200 <= int(result["status"]) < 300
    except (TypeError, ValueError):
        return False


def to_result_response(body: Optional[str], body_encoding: str = "text") -> Dict[str, Any]:
    """캐시된 본문을 응답 형태로 감쌈"""
    return {
        "status": "200",
        "statusDescription": "",
        "headers": {},
        "bodyEncoding": body_encoding,
        "body": body,
    }
