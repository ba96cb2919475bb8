"""데이터베이스 모델"""
from sqlalchemy import Column, Integer, String, Text, Index, UniqueConstraint
from edge_lambda.core.database import Base


class CacheEntry(Base):
    """엣지 캐시 테이블

    - namespace: 캐시 저장소 식별자 (CACHE_ID)
    - uri: 요청 URI (쿼리스트링 제외)
    - expire: 만료 시각 (ISO-8601)
    - body: 캐시된 응답 본문
    - body_encoding: 본문 인코딩 (text | base64)
    """

    __tablename__ = "cache_entries"

    id = Column(Integer, primary_key=True, index=True)
    namespace = Column(String, nullable=False)
    uri = Column(String, nullable=False)
    expire = Column(String, nullable=False)
    body = Column(Text, nullable=True)
    body_encoding = Column(String, nullable=False, default="text")

    __table_args__ = (
        UniqueConstraint("namespace", "uri", name="uq_cache_namespace_uri"),
        Index("idx_cache_namespace_uri", "namespace", "uri"),
    )

    def __repr__(self) -> str:
        return f"<CacheEntry(uri={self.uri}, expire={self.expire})>"
