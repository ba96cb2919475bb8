"""유틸리티 패키지 - export only."""

from .cache_control import parse_cache_control
from .callback import CallbackResult, wrap_handler
from .context_builder import LambdaContext, build_config, build_context
from .events import (
    build_post_body,
    combine_result,
    convert_to_cloudfront_event,
    is_response_result,
    is_success_status,
    to_result_response,
)
from .headers import CloudFrontHeadersHelper, to_cloudfront_headers
from .module_loader import ModuleLoader
from .path_pattern import glob_to_regex

__all__ = [
    "parse_cache_control",
    "CallbackResult",
    "wrap_handler",
    "LambdaContext",
    "build_config",
    "build_context",
    "build_post_body",
    "combine_result",
    "convert_to_cloudfront_event",
    "is_response_result",
    "is_success_status",
    "to_result_response",
    "CloudFrontHeadersHelper",
    "to_cloudfront_headers",
    "ModuleLoader",
    "glob_to_regex",
]
