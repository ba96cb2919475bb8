"""명령행 실행 진입점

    python -m edge_lambda --port 8080 --cache-dir .cache --manifest serverless.yml
"""
import argparse
from typing import List, Optional

import uvicorn

from edge_lambda.core.config import Settings
from edge_lambda.core.logging import logger, set_log_level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="edge-lambda-offline",
        description="Start the offline edge lambda server",
    )
    parser.add_argument("--port", type=int, default=None, help="Specify the port that the server will listen on")
    parser.add_argument(
        "--cloudfront-port",
        type=int,
        default=None,
        help="[Deprecated] Specify the port that the server will listen on. Use --port instead",
    )
    parser.add_argument("--host", default=None, help="Interface to bind")
    parser.add_argument("--disable-cache", action="store_true", default=None, help="Disables simulated cache")
    parser.add_argument("--cache-dir", default=None, help="Specify the directory where cache file will be stored")
    parser.add_argument("--file-dir", default=None, help="Specify the directory where origin requests will draw from")
    parser.add_argument(
        "--headers-file",
        default=None,
        help="Specify the file (JSON) where injected CloudFront headers will be taken from",
    )
    parser.add_argument("--manifest", dest="manifest_path", default=None, help="Project manifest (YAML)")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    return parser


def settings_from_args(argv: Optional[List[str]] = None) -> Settings:
    """명령행 옵션을 환경 변수 설정 위에 덮어씀"""
    args = build_parser().parse_args(argv)

    overrides = {
        key: value
        for key, value in vars(args).items()
        if value is not None and key != "cloudfront_port"
    }
    if args.cloudfront_port is not None:
        logger.warning("--cloudfront-port is deprecated, use --port instead")
        overrides["port"] = args.cloudfront_port

    return Settings(**overrides)


def main(argv: Optional[List[str]] = None) -> None:
    from edge_lambda.app import create_app

    settings = settings_from_args(argv)
    set_log_level(settings.log_level)
    app = create_app(settings)

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
