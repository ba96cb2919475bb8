"""설정 관리 - 환경 변수 로드 및 검증"""
import os
import tempfile
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator


DEFAULT_STORAGE_DIR = os.path.join(tempfile.gettempdir(), "edge-lambda")


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 서버
    host: str = "127.0.0.1"
    port: int = 8080

    # 캐시
    # NOTE: disable_cache는 모든 behavior의 캐시 조회/저장을 끕니다.
    disable_cache: bool = False
    cache_dir: Optional[str] = None

    # 파일 오리진 기본 디렉터리
    file_dir: Optional[str] = None

    # 요청 이벤트에 주입할 CloudFront 헤더(JSON 파일)
    headers_file: Optional[str] = None

    # 프로젝트 매니페스트 (functions / resources / custom.offlineEdgeLambda)
    manifest_path: str = "serverless.yml"

    # 이벤트 config에 실리는 배포 메타데이터
    distribution_domain_name: str = "d111111abcdef8.cloudfront.net"
    distribution_id: str = "EDFDVBD6EXAMPLE"

    # 로깅
    log_level: str = "INFO"

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("port must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log_level: {v}")
        return v.upper()

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
