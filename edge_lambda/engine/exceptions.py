"""Engine Exceptions - 파이프라인 내부 제어 신호"""


class NoResult(Exception):
    """단계가 응답을 만들지 않음 (다음 단계로 진행)

    CloudFrontLifecycle.run() 밖으로 전파되지 않습니다.
    """

    pass
