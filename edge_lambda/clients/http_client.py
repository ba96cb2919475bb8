"""공유 HTTP 클라이언트 (curl_cffi)

- 오리진 요청마다 AsyncSession을 만들면 TLS/커넥션 오버헤드가 커지므로
  프로세스 단위로 세션을 재사용합니다.
- 앱 종료 시 close()로 정리합니다.
"""

from __future__ import annotations

import asyncio
from typing import Dict, Optional

from curl_cffi.requests import AsyncSession

from edge_lambda.core.logging import logger


class SharedHttpClient:
    def __init__(self, timeout_s: float = 30.0) -> None:
        self._lock = asyncio.Lock()
        self._session: Optional[AsyncSession] = None
        self.timeout_s = timeout_s

    async def _ensure_session(self) -> AsyncSession:
        async with self._lock:
            if self._session is not None:
                return self._session
            # 오리진 응답(리다이렉트 포함)을 그대로 전달하기 위해 리다이렉트는 따라가지 않음
            self._session = AsyncSession(allow_redirects=False, trust_env=False)
            return self._session

    async def request_text(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        data: Optional[bytes] = None,
    ) -> tuple[int, str]:
        """요청을 보내고 (상태 코드, 전체 본문)을 반환

        Raises:
            Exception: 네트워크 오류 (호출자가 응답으로 변환)
        """
        sess = await self._ensure_session()
        try:
            resp = await sess.request(
                method,
                url,
                headers=headers,
                data=data,
                timeout=self.timeout_s,
            )
        except Exception as e:
            logger.info(f"[HTTP_CLIENT] {method} {url} failed: {type(e).__name__}: {repr(e)}")
            raise
        status = getattr(resp, "status_code", 0) or 0
        text = getattr(resp, "text", "") or ""
        return status, text

    async def close(self) -> None:
        async with self._lock:
            if self._session is None:
                return
            try:
                await self._session.close()
            except Exception as e:
                logger.debug(f"[HTTP_CLIENT] close failed: {type(e).__name__}: {e}")
            self._session = None


_shared_http_client = SharedHttpClient()


def get_shared_http_client() -> SharedHttpClient:
    return _shared_http_client


async def shutdown_shared_http_client() -> None:
    await _shared_http_client.close()
