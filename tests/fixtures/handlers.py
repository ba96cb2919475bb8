"""핸들러 소스 자산

매니페스트의 handler 값은 '<파일 경로(.py 제외)>.<함수명>' 형식입니다.
"""
import textwrap
from pathlib import Path


PASS_THROUGH_HANDLER = """
def handler(event, context):
    return event["Records"][0]["cf"]["request"]
"""

# callback 규약
VIEWER_RESPONSE_HANDLER = """
def handler(event, context, callback):
    response = event["Records"][0]["cf"]["response"]
    response["headers"]["x-served-by"] = [{"key": "X-Served-By", "value": "edge-lambda"}]
    callback(None, response)
"""

# 주입 헤더(cloudfront-viewer-country)를 본문에 담아 403으로 단락
AUTH_HANDLER = """
async def handler(event, context):
    request = event["Records"][0]["cf"]["request"]
    country = request["headers"].get("cloudfront-viewer-country", [{"value": ""}])[0]["value"]
    return {
        "status": "403",
        "statusDescription": "Forbidden",
        "headers": {"content-type": [{"key": "Content-Type", "value": "text/plain"}]},
        "body": "denied:" + country,
    }
"""

BROKEN_HANDLER = """
def handler(event, context):
    raise ValueError("handler exploded")
"""


def write_handler(directory: Path, name: str, source: str) -> str:
    """핸들러 파일을 만들고 매니페스트용 경로를 반환"""
    directory.mkdir(parents=True, exist_ok=True)
    (directory / f"{name}.py").write_text(textwrap.dedent(source), encoding="utf-8")
    return str(directory / name) + ".handler"
