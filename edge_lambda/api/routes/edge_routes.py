"""Edge Routes - 모든 경로/메서드를 받아 CloudFront 라이프사이클로 위임

HTTP Layer는 요청을 이벤트로 바꾸고 결과를 HTTP 응답으로 되돌리는
Translator 역할만 수행합니다.
"""

import base64
import json
import traceback
from http import HTTPStatus
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from edge_lambda.core.constants import VIEWER_REQUEST
from edge_lambda.core.exceptions import HttpError, InternalServerError
from edge_lambda.core.logging import logger
from edge_lambda.engine import BehaviorRouter, CloudFrontLifecycle
from edge_lambda.utils.context_builder import build_context
from edge_lambda.utils.events import build_post_body, convert_to_cloudfront_event
from edge_lambda.utils.headers import CloudFrontHeadersHelper

router = APIRouter(tags=["edge"])

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "PURGE"]

# 본문 길이/전송 방식은 서버가 다시 계산
_SERVER_MANAGED_HEADERS = {"content-length", "transfer-encoding"}


def get_behavior_router(request: Request) -> BehaviorRouter:
    """lifespan에서 만든 BehaviorRouter"""
    return request.app.state.behavior_router


async def build_event(request: Request) -> Dict[str, Any]:
    method = request.method.upper()

    body: Any = None
    if method in ("POST", "PUT"):
        body = build_post_body(await request.body())

    headers = list(request.headers.items()) + list(request.app.state.injected_headers)
    config_builder = request.app.state.config_builder

    return convert_to_cloudfront_event(
        method=method,
        path=request.url.path,
        query_string=request.url.query,
        headers=headers,
        client_ip=request.client.host if request.client else None,
        body=body,
        cookies=request.cookies,
        config=config_builder(VIEWER_REQUEST),
    )


def render_response(response: Dict[str, Any]) -> Response:
    """viewer-response 결과를 HTTP 응답으로 변환"""
    body = response.get("body")
    if body is None:
        content: Any = b""
    elif response.get("bodyEncoding") == "base64" and isinstance(body, str):
        content = base64.b64decode(body)
    elif isinstance(body, (str, bytes)):
        content = body
    else:
        content = json.dumps(body)

    http_response = Response(content=content, status_code=int(response.get("status") or HTTPStatus.OK))

    for key, values in CloudFrontHeadersHelper(response.get("headers")).as_http_headers():
        if key.lower() in _SERVER_MANAGED_HEADERS:
            continue
        for value in values:
            if value:
                http_response.headers.append(key, value)

    return http_response


def handle_error(err: Exception) -> JSONResponse:
    """예외를 {code, message} JSON 응답으로 변환"""
    if isinstance(err, HttpError):
        return JSONResponse(status_code=err.status_code, content=err.get_response_payload())

    status = HTTPStatus.INTERNAL_SERVER_ERROR
    stack = "".join(traceback.format_exception(type(err), err, err.__traceback__))
    return JSONResponse(
        status_code=status,
        content={"code": int(status), "message": stack or str(err)},
    )


@router.api_route("/{full_path:path}", methods=ALL_METHODS, include_in_schema=False)
async def edge_request(
    request: Request,
    full_path: str,
    behavior_router: BehaviorRouter = Depends(get_behavior_router),
):
    """모든 요청의 진입점

    Flow:
        1. PURGE → 캐시 비우기
        2. 리로드 중이면 대기 후 behavior 매칭
        3. 이벤트 변환 후 라이프사이클 실행
        4. 결과를 HTTP 응답으로 변환
    """
    if request.method.upper() == "PURGE":
        behavior_router.purge_storage()
        return Response(status_code=HTTPStatus.OK)

    await behavior_router.wait_until_ready()

    url = str(request.url.path) + (f"?{request.url.query}" if request.url.query else "")
    handler = behavior_router.match(url)

    if handler is None:
        return Response(status_code=HTTPStatus.NOT_FOUND)

    try:
        event = await build_event(request)
        lifecycle = CloudFrontLifecycle(
            event,
            build_context(),
            behavior_router.cache_service,
            handler,
            disable_cache=behavior_router.settings.disable_cache,
        )
        response = await lifecycle.run(url)

        if not response:
            raise InternalServerError("No response set after full request lifecycle")

        return render_response(response)
    except Exception as e:
        if not isinstance(e, HttpError):
            logger.error(f"Lifecycle failed: {request.method} {url}, error={type(e).__name__}: {e}", exc_info=True)
        return handle_error(e)
