"""Pydantic 스키마 패키지."""

from .behavior_schema import Behavior
from .cloudformation_schema import (
    CloudFrontCacheBehavior,
    CloudFrontEventBinding,
    CloudFrontOrigin,
    DistributionConfig,
    FunctionDefinition,
    Manifest,
    OfflineEdgeLambdaConfig,
    OriginMapping,
)

__all__ = [
    "Behavior",
    "CloudFrontCacheBehavior",
    "CloudFrontEventBinding",
    "CloudFrontOrigin",
    "DistributionConfig",
    "FunctionDefinition",
    "Manifest",
    "OfflineEdgeLambdaConfig",
    "OriginMapping",
]
