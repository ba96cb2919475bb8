"""Core - 설정, 로깅, 예외, 저장소 연결."""
