"""HTTP 헤더 ↔ CloudFront 헤더 변환"""
from typing import Dict, Iterable, Iterator, List, Optional, Tuple


CloudFrontHeaders = Dict[str, List[Dict[str, str]]]


def to_cloudfront_headers(pairs: Iterable[Tuple[str, str]]) -> CloudFrontHeaders:
    """(이름, 값) 쌍을 CloudFront 헤더 형식으로 변환

    같은 이름의 헤더는 하나의 리스트에 순서대로 쌓입니다.
    """
    headers: CloudFrontHeaders = {}
    for key, value in pairs:
        headers.setdefault(key.lower(), []).append({"key": key, "value": value})
    return headers


class CloudFrontHeadersHelper:
    """CloudFront 헤더 dict를 HTTP 응답 헤더로 풀어내는 헬퍼"""

    def __init__(self, headers: Optional[CloudFrontHeaders] = None):
        self.headers = headers or {}

    def as_http_headers(self) -> Iterator[Tuple[str, List[str]]]:
        for name, entries in self.headers.items():
            if isinstance(entries, str):
                yield name, [entries]
                continue
            values = [entry.get("value", "") for entry in entries or [] if isinstance(entry, dict)]
            key = next(
                (entry["key"] for entry in entries or [] if isinstance(entry, dict) and entry.get("key")),
                name,
            )
            yield key, values

    def first(self, name: str) -> Optional[str]:
        """헤더의 첫 값 (문자열 또는 [{key, value}] 리스트 모두 허용)"""
        name = name.lower()
        entries = next((v for k, v in self.headers.items() if k.lower() == name), None)
        if not entries:
            return None
        if isinstance(entries, str):
            return entries
        first = entries[0]
        if isinstance(first, dict):
            return first.get("value")
        return str(first)
