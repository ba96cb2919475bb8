"""리소스 파일(YAML/JSON) 로더 유틸리티"""
import json
import os
import yaml
from typing import Any, Dict, List, Optional, Tuple
from pydantic import ValidationError

from edge_lambda.core.exceptions import ManifestException
from edge_lambda.core.logging import logger
from edge_lambda.schemas.cloudformation_schema import Manifest


def load_yaml_file(path: str) -> Dict[str, Any]:
    """YAML 파일 로드 (없으면 빈 dict)

    Raises:
        yaml.YAMLError: 파싱 실패
    """
    if not os.path.exists(path):
        logger.warning(f"Resource not found: {path}")
        return {}

    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_injected_headers(path: Optional[str]) -> List[Tuple[str, str]]:
    """모든 요청에 주입할 CloudFront 헤더(JSON 객체) 로드

    Args:
        path: {"CloudFront-Viewer-Country": "KR", ...} 형태의 JSON 파일

    Returns:
        (헤더명, 값) 리스트. 파일이 없거나 형식이 틀리면 빈 리스트
    """
    if not path:
        return []
    if not os.path.exists(path):
        logger.warning(f"Headers file not found: {path}")
        return []

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load headers file {path}: {e}")
        return []

    if not isinstance(data, dict):
        logger.error(f"Headers file must contain a JSON object: {path}")
        return []

    pairs: List[Tuple[str, str]] = []
    for key, value in data.items():
        values = value if isinstance(value, list) else [value]
        pairs.extend((key, str(v)) for v in values)
    return pairs


def load_manifest(path: str) -> Manifest:
    """프로젝트 매니페스트(YAML) 로드 및 검증

    파일이 없으면 빈 매니페스트(와일드카드 behavior만 생성됨)를 반환합니다.

    Raises:
        ManifestException: YAML 파싱 또는 스키마 검증 실패
    """
    try:
        data = load_yaml_file(path)
    except yaml.YAMLError as e:
        raise ManifestException(path, f"YAML parse error: {e}") from e

    if not isinstance(data, dict):
        raise ManifestException(path, "top level must be a mapping")

    try:
        manifest = Manifest.model_validate(data)
        # cloudFront 이벤트도 미리 검증
        for fn in manifest.functions.values():
            fn.cloudfront_events
        manifest.distribution_config
    except ValidationError as e:
        raise ManifestException(path, str(e)) from e

    logger.info(f"Manifest loaded: {path} ({len(manifest.functions)} functions)")
    return manifest
