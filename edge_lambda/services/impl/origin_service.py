"""오리진 리졸버 - 요청 URI를 원격 HTTP(S) 또는 로컬 디렉터리에서 가져옴"""
import base64
import json
import os
from http import HTTPStatus
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlsplit, urlunsplit

import aiofiles
import aiofiles.os

from edge_lambda.clients.http_client import get_shared_http_client
from edge_lambda.core.exceptions import HttpError, InternalServerError, NotFoundError
from edge_lambda.core.logging import logger
from edge_lambda.schemas.cloudformation_schema import CloudFrontOrigin
from edge_lambda.utils.events import get_request
from edge_lambda.utils.headers import CloudFrontHeadersHelper


# 오리진으로 그대로 넘기면 안 되는 프레이밍 관련 헤더
_HOP_BY_HOP_HEADERS = {"host", "connection", "content-length", "transfer-encoding", "keep-alive"}


class Origin:
    """오리진 하나 (http / https / file / noop)"""

    def __init__(self, origin: Optional[CloudFrontOrigin] = None, base_url: str = ""):
        origin_path = (origin.origin_path if origin else "") or "/"
        self.base_url = base_url or ""

        if not self.base_url:
            self.type = "noop"
        elif self.base_url.startswith("http://"):
            self.type = "http"
        elif self.base_url.startswith("https://"):
            self.type = "https"
        else:
            self.base_url = os.path.abspath(self.base_url)
            self.type = "file"
            origin_path = self.base_url

        custom_headers = {
            header.header_name.lower(): [{"key": header.header_name, "value": header.header_value}]
            for header in (origin.origin_custom_headers if origin else [])
        }
        domain_name = (origin.domain_name if origin else "") or "example.com"

        self.descriptor: Dict[str, Any] = {
            "custom": {
                "customHeaders": custom_headers,
                "domainName": domain_name,
                "path": origin_path,
                "keepaliveTimeout": 5,
                "port": 443,
                "protocol": "https",
                "readTimeout": 5,
                "sslProtocols": ["TLSv1", "TLSv1.1"],
            },
            "s3": {
                "customHeaders": custom_headers,
                "domainName": domain_name,
                "path": origin_path,
            },
        }

    def init(self, event: Dict[str, Any]) -> None:
        """요청 이벤트에 오리진 정보 부착"""
        get_request(event)["origin"] = json.loads(json.dumps(self.descriptor))

    async def retrieve(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """
        오리진에서 리소스를 가져와 응답 형태로 반환

        실패해도 예외를 던지지 않고 {code, message} JSON 본문을 가진 응답을 반환합니다.
        (origin-response 핸들러가 오류 응답도 보고 변환할 수 있도록)
        """
        request = get_request(event)

        try:
            contents, body_encoding = await self.get_resource(request)
            return {
                "status": "200",
                "statusDescription": "",
                # NOTE: 업스트림 content-type과 무관하게 application/json으로 표기
                "headers": {"content-type": [{"key": "content-type", "value": "application/json"}]},
                "bodyEncoding": body_encoding,
                "body": contents,
            }
        except Exception as e:
            status = e.status_code if isinstance(e, HttpError) else HTTPStatus.INTERNAL_SERVER_ERROR
            message = e.message if isinstance(e, HttpError) else str(e)
            logger.warning(f"Origin retrieve failed: uri={request.get('uri')}, status={int(status)}, error={message}")
            return {
                "status": str(int(status)),
                "statusDescription": message,
                "headers": {"content-type": [{"key": "content-type", "value": "application/json"}]},
                "bodyEncoding": "text",
                "body": json.dumps({"code": int(status), "message": message}),
            }

    async def get_resource(self, request: Dict[str, Any]) -> Tuple[str, str]:
        """(본문, bodyEncoding) 반환"""
        if self.type == "file":
            return await self._get_file_resource(request["uri"])
        if self.type in ("http", "https"):
            return await self._get_http_resource(request), "text"
        if self.type == "noop":
            raise NotFoundError("Operation given as 'noop'")
        raise InternalServerError("Invalid request type (needs to be 'http', 'https' or 'file')")

    async def _get_file_resource(self, uri: str) -> Tuple[str, str]:
        file_name = urlsplit(uri).path.lstrip("/")
        file_target = os.path.normpath(os.path.join(self.base_url, file_name))

        if os.path.commonpath([self.base_url, file_target]) != self.base_url:
            raise NotFoundError(f"{file_target} does not exist.")
        if not await aiofiles.os.path.exists(file_target):
            raise NotFoundError(f"{file_target} does not exist.")
        if not await aiofiles.os.path.isfile(file_target):
            raise NotFoundError(f"{file_target} is not a file.")

        async with aiofiles.open(file_target, "rb") as f:
            raw = await f.read()

        # UTF-8이 아닌 파일(이미지 등)은 base64로 전달
        try:
            return raw.decode("utf-8"), "text"
        except UnicodeDecodeError:
            return base64.b64encode(raw).decode("ascii"), "base64"

    async def _get_http_resource(self, request: Dict[str, Any]) -> str:
        base = urlsplit(self.base_url)
        target = urlsplit(request["uri"])
        querystring = request.get("querystring") or target.query
        path = base.path.rstrip("/") + "/" + target.path.lstrip("/")
        url = urlunsplit((base.scheme, base.netloc, path, querystring, ""))

        headers = {
            key: values[0]
            for key, values in CloudFrontHeadersHelper(request.get("headers")).as_http_headers()
            if values and key.lower() not in _HOP_BY_HOP_HEADERS
        }
        headers["Connection"] = "close"

        data = None
        body = request.get("body")
        if isinstance(body, dict) and body.get("encoding") == "base64" and body.get("data"):
            data = base64.b64decode(body["data"])

        client = get_shared_http_client()
        _, text = await client.request_text(request["method"], url, headers=headers, data=data)
        return text
