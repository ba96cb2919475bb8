"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from http import HTTPStatus
from typing import Any, Optional


# 기본 예외 클래스
class EdgeLambdaException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# HTTP 상태 코드를 가진 예외
class HttpError(EdgeLambdaException):
    """HTTP 응답으로 변환되는 예외의 기본 클래스"""
    def __init__(
        self,
        message: str,
        status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR,
        last_error: Optional[BaseException] = None,
        error_code: str = "HTTP_ERROR",
    ):
        super().__init__(message, error_code, {"status_code": int(status_code)})
        self.status_code = int(status_code)
        self.last_error = last_error

    def get_response_payload(self) -> dict[str, Any]:
        """HTTP 경계에서 내려보낼 JSON 본문"""
        return {"code": self.status_code, "message": self.message}


class MethodNotAllowedError(HttpError):
    """behavior가 허용하지 않는 메서드"""
    def __init__(self, message: str, last_error: Optional[BaseException] = None):
        super().__init__(message, HTTPStatus.METHOD_NOT_ALLOWED, last_error, "METHOD_NOT_ALLOWED")


class NotFoundError(HttpError):
    """오리진에서 리소스를 찾지 못함"""
    def __init__(self, message: str, last_error: Optional[BaseException] = None):
        super().__init__(message, HTTPStatus.NOT_FOUND, last_error, "NOT_FOUND")


class InternalServerError(HttpError):
    """오리진 설정 오류, 응답 누락 등"""
    def __init__(self, message: str, last_error: Optional[BaseException] = None):
        super().__init__(message, HTTPStatus.INTERNAL_SERVER_ERROR, last_error, "INTERNAL_SERVER_ERROR")


# 핸들러/매니페스트 관련 예외
class HandlerLoadException(EdgeLambdaException):
    """핸들러 모듈 또는 함수를 불러올 수 없을 때"""
    def __init__(self, path: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Unable to load handler '{path}': {reason}"
        super().__init__(message, "HANDLER_LOAD_ERROR", details or {"path": path, "reason": reason})


class ManifestException(EdgeLambdaException):
    """매니페스트 파일 읽기/검증 실패"""
    def __init__(self, path: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Invalid manifest '{path}': {reason}"
        super().__init__(message, "MANIFEST_ERROR", details or {"path": path, "reason": reason})


# 캐시 관련 예외
class CacheException(EdgeLambdaException):
    """캐시 관련 예외"""
    def __init__(self, message: str, error_code: str = "CACHE_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CACHE_ERROR", details)


class CacheConnectionException(CacheException):
    """캐시 저장소 열기/읽기 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Cache storage unavailable: {reason}"
        super().__init__(message, "CACHE_CONNECTION_ERROR", details)
