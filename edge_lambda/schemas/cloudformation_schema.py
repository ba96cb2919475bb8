"""매니페스트 스키마 (serverless 매니페스트 + CloudFormation 배포 설정)"""
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class _CloudFormationModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class OriginCustomHeader(_CloudFormationModel):
    """오리진 커스텀 헤더"""
    header_name: str = Field(..., alias="HeaderName")
    header_value: str = Field("", alias="HeaderValue")


class CloudFrontOrigin(_CloudFormationModel):
    """DistributionConfig.Origins 항목"""
    id: str = Field(..., alias="Id")
    domain_name: str = Field("", alias="DomainName")
    origin_path: str = Field("", alias="OriginPath")
    origin_custom_headers: List[OriginCustomHeader] = Field(default_factory=list, alias="OriginCustomHeaders")


class CloudFrontCacheBehavior(_CloudFormationModel):
    """CacheBehaviors / DefaultCacheBehavior 항목"""
    path_pattern: Optional[str] = Field(None, alias="PathPattern")
    target_origin_id: Optional[str] = Field(None, alias="TargetOriginId")
    min_ttl: Optional[int] = Field(None, ge=0, alias="MinTTL")
    max_ttl: Optional[int] = Field(None, ge=0, alias="MaxTTL")
    default_ttl: Optional[int] = Field(None, ge=0, alias="DefaultTTL")
    allowed_methods: Optional[List[str]] = Field(None, alias="AllowedMethods")
    cached_methods: Optional[List[str]] = Field(None, alias="CachedMethods")
    compress: Optional[bool] = Field(None, alias="Compress")
    viewer_protocol_policy: Optional[str] = Field(None, alias="ViewerProtocolPolicy")


class DistributionConfig(_CloudFormationModel):
    origins: List[CloudFrontOrigin] = Field(default_factory=list, alias="Origins")
    cache_behaviors: List[CloudFrontCacheBehavior] = Field(default_factory=list, alias="CacheBehaviors")
    default_cache_behavior: Optional[CloudFrontCacheBehavior] = Field(None, alias="DefaultCacheBehavior")

    @property
    def all_behaviors(self) -> List[CloudFrontCacheBehavior]:
        """CacheBehaviors 뒤에 DefaultCacheBehavior를 붙인 목록"""
        behaviors = list(self.cache_behaviors)
        if self.default_cache_behavior:
            behaviors.append(self.default_cache_behavior)
        return behaviors


class CloudFrontEventBinding(_CloudFormationModel):
    """functions.<name>.events[].cloudFront"""
    event_type: str = Field(..., alias="eventType")
    path_pattern: Optional[str] = Field(None, alias="pathPattern")
    origin: Optional[Union[str, Dict[str, Any]]] = None

    @property
    def origin_id(self) -> Optional[str]:
        if isinstance(self.origin, dict):
            return self.origin.get("Id")
        return self.origin


class FunctionDefinition(_CloudFormationModel):
    handler: str
    events: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def cloudfront_events(self) -> List[CloudFrontEventBinding]:
        return [
            CloudFrontEventBinding.model_validate(event["cloudFront"])
            for event in self.events
            if isinstance(event, dict) and "cloudFront" in event
        ]


class OriginMapping(_CloudFormationModel):
    """오리진 Id → 로컬 위치(URL 또는 디렉터리) 매핑"""
    id: str = Field(..., alias="Id")
    target: str
    default: bool = False


class OfflineEdgeLambdaConfig(_CloudFormationModel):
    """custom.offlineEdgeLambda"""
    path: str = ""
    cache_dir: Optional[str] = Field(None, alias="cacheDir")
    file_dir: Optional[str] = Field(None, alias="fileDir")
    origin_map: List[OriginMapping] = Field(default_factory=list, alias="originMap")


class CustomSection(_CloudFormationModel):
    offline_edge_lambda: OfflineEdgeLambdaConfig = Field(
        default_factory=OfflineEdgeLambdaConfig, alias="offlineEdgeLambda"
    )


class Manifest(_CloudFormationModel):
    """프로젝트 매니페스트 (필요한 섹션만)"""
    functions: Dict[str, FunctionDefinition] = Field(default_factory=dict)
    resources: Dict[str, Any] = Field(default_factory=dict)
    custom: CustomSection = Field(default_factory=CustomSection)

    @property
    def distribution_config(self) -> Optional[DistributionConfig]:
        raw = (
            ((self.resources.get("Resources") or {}).get("CloudFrontDistribution") or {})
            .get("Properties", {})
            .get("DistributionConfig")
        )
        if not raw:
            return None
        return DistributionConfig.model_validate(raw)

    @property
    def offline(self) -> OfflineEdgeLambdaConfig:
        return self.custom.offline_edge_lambda
