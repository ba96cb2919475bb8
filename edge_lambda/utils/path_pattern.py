"""CloudFront 경로 패턴(glob) → 정규식 변환"""
import re
from functools import lru_cache
from typing import Pattern


@lru_cache(maxsize=256)
def glob_to_regex(pattern: str) -> Pattern[str]:
    """
    경로 패턴을 정규식으로 변환

    - ``*``: 0개 이상의 임의 문자 (``/`` 포함)
    - ``?``: 임의의 한 문자
    - 그 외 문자는 리터럴

    Examples:
        >>> bool(glob_to_regex("/images/*").match("/images/a/b.png"))
        True
    """
    parts = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("^" + "".join(parts) + "$")
