"""캐시 정책 스키마"""
from typing import List, Optional
from pydantic import BaseModel, Field

from edge_lambda.schemas.cloudformation_schema import CloudFrontCacheBehavior


class Behavior(BaseModel):
    """라우팅 버킷 하나의 캐시 정책 (TTL 단위: 초)"""
    min_ttl: int = Field(0, ge=0, description="최소 TTL")
    max_ttl: int = Field(31536000, ge=0, description="최대 TTL (1년)")
    default_ttl: int = Field(86400, ge=0, description="cache-control이 없을 때 TTL (1일)")
    allowed_methods: List[str] = Field(default_factory=lambda: ["GET", "HEAD"], description="허용 메서드")
    cached_methods: List[str] = Field(default_factory=lambda: ["GET", "HEAD"], description="캐시 대상 메서드")

    @classmethod
    def from_cache_behavior(cls, behavior: Optional[CloudFrontCacheBehavior]) -> "Behavior":
        """CloudFront cache behavior로부터 생성 (값이 비어 있거나 0이면 기본값 유지)"""
        policy = cls()
        if behavior is None:
            return policy
        return cls(
            min_ttl=behavior.min_ttl or policy.min_ttl,
            max_ttl=behavior.max_ttl or policy.max_ttl,
            default_ttl=behavior.default_ttl or policy.default_ttl,
            allowed_methods=[m.upper() for m in behavior.allowed_methods or policy.allowed_methods],
            cached_methods=[m.upper() for m in behavior.cached_methods or policy.cached_methods],
        )
