"""Cache-Control 헤더 파서"""
import re
from typing import Dict, Optional, Union


_DIRECTIVE_RE = re.compile(r'([a-zA-Z][\w-]*)\s*(?:=\s*(?:"([^"]*)"|([^\s,]+)))?')


def parse_cache_control(value: Optional[str]) -> Optional[Dict[str, Union[int, str, bool]]]:
    """
    Cache-Control 헤더 문자열을 디렉티브 dict로 변환

    Args:
        value: 헤더 값 (예: "public, max-age=120")

    Returns:
        {"public": True, "max-age": 120} 형태의 dict.
        max-age/s-maxage 값이 숫자가 아니면 None (헤더 전체 무효)
    """
    if not value:
        return {}

    directives: Dict[str, Union[int, str, bool]] = {}
    for match in _DIRECTIVE_RE.finditer(value):
        name = match.group(1).lower()
        raw = match.group(2) if match.group(2) is not None else match.group(3)
        if raw is None:
            directives[name] = True
            continue
        if name in ("max-age", "s-maxage"):
            if not raw.isdigit():
                return None
            directives[name] = int(raw)
        else:
            directives[name] = raw
    return directives
