"""Edge Lambda Offline - Lambda@Edge 요청 라이프사이클 로컬 시뮬레이터"""

__version__ = "1.0.0"
