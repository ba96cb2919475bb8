"""공용 상수"""

# 캐시 저장소 네임스페이스 (파일명 + 행 구분자)
CACHE_ID = "edge-lambda-cache"

# CloudFront 이벤트 타입 (실행 순서)
VIEWER_REQUEST = "viewer-request"
ORIGIN_REQUEST = "origin-request"
ORIGIN_RESPONSE = "origin-response"
VIEWER_RESPONSE = "viewer-response"

EVENT_TYPES = (VIEWER_REQUEST, ORIGIN_REQUEST, ORIGIN_RESPONSE, VIEWER_RESPONSE)

WILDCARD_PATTERN = "*"

# POST/PUT 본문은 CloudFront와 동일하게 1MB까지만 전달
MAX_BODY_BYTES = 1_000_000
