"""Engine Layer - Lifecycle Orchestration and Routing

This module provides the core engine layer of the edge simulator:
- CloudFrontLifecycle: four-stage pipeline for one request
- FunctionSet: handlers + cache policy of one path pattern
- BehaviorRouter: path pattern matching and configuration reload
- NoResult: internal "continue pipeline" signal
"""

from .behavior_router import BehaviorRouter
from .exceptions import NoResult
from .function_set import FunctionSet, identity_request_handler, identity_response_handler
from .lifecycle import CloudFrontLifecycle

__all__ = [
    "BehaviorRouter",
    "CloudFrontLifecycle",
    "FunctionSet",
    "NoResult",
    "identity_request_handler",
    "identity_response_handler",
]
