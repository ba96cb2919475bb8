"""전역 테스트 설정

역할:
- 테스트 환경 구성
- 공통 Fake 주입 (캐시, 오리진, 시계)
- 임시 디렉터리 기반 캐시/설정
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Optional

import pytest


# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from edge_lambda.core.config import Settings  # noqa: E402
from edge_lambda.services.impl.cache_service import CacheService  # noqa: E402
from edge_lambda.utils.events import to_result_response  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """테스트 환경 변수 설정 (세션 전역)"""
    os.environ["ENVIRONMENT"] = "test"


class FakeClock:
    """CacheService에 주입하는 수동 시계"""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@dataclass
class FakeCache:
    """라이프사이클 Unit 테스트용 캐시

    - retrieve/save 호출 횟수 기록
    - 저장된 본문을 메모리에 유지
    """

    store: dict[str, Optional[str]] = field(default_factory=dict)
    encodings: dict[str, str] = field(default_factory=dict)
    retrieve_calls: int = 0
    save_calls: int = 0

    def retrieve_from_cache(self, event: dict[str, Any]) -> Optional[dict[str, Any]]:
        self.retrieve_calls += 1
        uri = event["Records"][0]["cf"]["request"]["uri"]
        if uri not in self.store:
            return None
        return to_result_response(self.store[uri], self.encodings.get(uri, "text"))

    def save_to_cache(self, event: dict[str, Any], behavior: Any) -> None:
        self.save_calls += 1
        cf = event["Records"][0]["cf"]
        self.store[cf["request"]["uri"]] = cf["response"].get("body")
        self.encodings[cf["request"]["uri"]] = cf["response"].get("bodyEncoding") or "text"


class FakeOrigin:
    """오리진 조회 횟수를 기록하는 가짜 오리진"""

    type = "fake"

    def __init__(self, body: str = "origin body", status: str = "200"):
        self.body = body
        self.status = status
        self.init_calls = 0
        self.retrieve_calls = 0

    def init(self, event: dict[str, Any]) -> None:
        self.init_calls += 1
        event["Records"][0]["cf"]["request"]["origin"] = {"custom": {"domainName": "fake.example.com"}}

    async def retrieve(self, event: dict[str, Any]) -> dict[str, Any]:
        self.retrieve_calls += 1
        return {
            "status": self.status,
            "statusDescription": "",
            "headers": {"content-type": [{"key": "content-type", "value": "text/plain"}]},
            "bodyEncoding": "text",
            "body": self.body,
        }


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def fake_origin() -> FakeOrigin:
    return FakeOrigin()


@pytest.fixture
def cache_service(tmp_path: Path, fake_clock: FakeClock):
    service = CacheService(str(tmp_path / "cache"), clock=fake_clock)
    yield service
    service.close()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    return Settings(
        cache_dir=str(tmp_path / "cache"),
        file_dir=str(tmp_path / "files"),
        manifest_path=str(tmp_path / "serverless.yml"),
    )
