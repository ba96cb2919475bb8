"""Origin 유닛 테스트 - file / noop / http 오리진"""
import base64
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from edge_lambda.schemas.cloudformation_schema import CloudFrontOrigin
from edge_lambda.services import Origin

from tests.fixtures import make_event


@pytest.fixture
def files_dir(tmp_path):
    root = tmp_path / "files"
    (root / "docs").mkdir(parents=True)
    (root / "index.html").write_text("<h1>hello</h1>", encoding="utf-8")
    (root / "docs" / "a.json").write_text('{"a": 1}', encoding="utf-8")
    return root


def _body(response):
    return json.loads(response["body"])


class TestOriginType:
    @pytest.mark.parametrize(
        "base_url, expected",
        [
            ("", "noop"),
            ("http://localhost:9000", "http"),
            ("https://example.com", "https"),
            ("./public", "file"),
        ],
    )
    def test_type_from_base_url(self, base_url, expected):
        assert Origin(base_url=base_url).type == expected

    def test_descriptor_from_distribution_origin(self):
        origin = CloudFrontOrigin(
            Id="api",
            DomainName="api.example.com",
            OriginPath="/v1",
            OriginCustomHeaders=[{"HeaderName": "X-Api-Key", "HeaderValue": "secret"}],
        )
        event = make_event()

        Origin(origin, "https://api.example.com/v1").init(event)

        attached = event["Records"][0]["cf"]["request"]["origin"]
        assert attached["custom"]["domainName"] == "api.example.com"
        assert attached["custom"]["path"] == "/v1"
        assert attached["custom"]["customHeaders"]["x-api-key"] == [{"key": "X-Api-Key", "value": "secret"}]
        assert attached["s3"]["domainName"] == "api.example.com"

    def test_init_attaches_copy(self):
        origin = Origin(base_url="http://localhost")
        event = make_event()
        origin.init(event)

        event["Records"][0]["cf"]["request"]["origin"]["custom"]["domainName"] = "changed"

        assert origin.descriptor["custom"]["domainName"] == "example.com"


class TestFileOrigin:
    @pytest.mark.asyncio
    async def test_reads_file(self, files_dir):
        response = await Origin(base_url=str(files_dir)).retrieve(make_event(uri="/docs/a.json"))

        assert response["status"] == "200"
        assert response["body"] == '{"a": 1}'

    @pytest.mark.asyncio
    async def test_content_type_is_always_json(self, files_dir):
        # 업스트림 형식과 무관하게 application/json으로 표기
        response = await Origin(base_url=str(files_dir)).retrieve(make_event(uri="/index.html"))

        assert response["body"] == "<h1>hello</h1>"
        assert response["headers"]["content-type"][0]["value"] == "application/json"

    @pytest.mark.asyncio
    async def test_binary_file_is_base64(self, files_dir):
        png = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"
        (files_dir / "logo.png").write_bytes(png)

        response = await Origin(base_url=str(files_dir)).retrieve(make_event(uri="/logo.png"))

        assert response["status"] == "200"
        assert response["bodyEncoding"] == "base64"
        assert base64.b64decode(response["body"]) == png

    @pytest.mark.asyncio
    async def test_text_file_keeps_text_encoding(self, files_dir):
        (files_dir / "ko.txt").write_text("안녕하세요", encoding="utf-8")

        response = await Origin(base_url=str(files_dir)).retrieve(make_event(uri="/ko.txt"))

        assert response["bodyEncoding"] == "text"
        assert response["body"] == "안녕하세요"

    @pytest.mark.asyncio
    async def test_missing_file_returns_404_response(self, files_dir):
        response = await Origin(base_url=str(files_dir)).retrieve(make_event(uri="/nope.txt"))

        assert response["status"] == "404"
        body = _body(response)
        assert body["code"] == 404
        assert str(files_dir / "nope.txt") in body["message"]
        assert body["message"].endswith("does not exist.")

    @pytest.mark.asyncio
    async def test_directory_is_not_a_file(self, files_dir):
        response = await Origin(base_url=str(files_dir)).retrieve(make_event(uri="/docs"))

        assert response["status"] == "404"
        assert _body(response)["message"].endswith("is not a file.")

    @pytest.mark.asyncio
    async def test_path_outside_base_dir(self, files_dir, tmp_path):
        (tmp_path / "secret.txt").write_text("secret", encoding="utf-8")

        response = await Origin(base_url=str(files_dir)).retrieve(make_event(uri="/../secret.txt"))

        assert response["status"] == "404"
        assert _body(response)["message"].endswith("does not exist.")


class TestNoopOrigin:
    @pytest.mark.asyncio
    async def test_noop_returns_404(self):
        response = await Origin().retrieve(make_event())

        assert response["status"] == "404"
        assert _body(response) == {"code": 404, "message": "Operation given as 'noop'"}

    @pytest.mark.asyncio
    async def test_unknown_type_returns_500(self):
        origin = Origin()
        origin.type = "ftp"

        response = await origin.retrieve(make_event())

        assert response["status"] == "500"
        assert "needs to be 'http', 'https' or 'file'" in _body(response)["message"]


class TestHttpOrigin:
    @pytest.fixture
    def http_client(self):
        client = MagicMock()
        client.request_text = AsyncMock(return_value=(200, "remote body"))
        with patch("edge_lambda.services.impl.origin_service.get_shared_http_client", return_value=client):
            yield client

    @pytest.mark.asyncio
    async def test_forwards_request(self, http_client):
        event = make_event(uri="/users/1", querystring="expand=true")

        response = await Origin(base_url="http://localhost:9000/api").retrieve(event)

        assert response["status"] == "200"
        assert response["body"] == "remote body"

        method, url = http_client.request_text.await_args.args
        headers = http_client.request_text.await_args.kwargs["headers"]
        assert method == "GET"
        assert url == "http://localhost:9000/api/users/1?expand=true"
        assert headers["Connection"] == "close"
        assert headers["Accept"] == "text/html"
        assert "Host" not in headers
        assert http_client.request_text.await_args.kwargs["data"] is None

    @pytest.mark.asyncio
    async def test_forwards_decoded_body(self, http_client):
        event = make_event(method="POST", uri="/submit")
        event["Records"][0]["cf"]["request"]["body"] = {
            "data": base64.b64encode(b"a=1").decode("ascii"),
            "encoding": "base64",
            "inputTruncated": False,
        }

        await Origin(base_url="https://example.com").retrieve(event)

        assert http_client.request_text.await_args.kwargs["data"] == b"a=1"

    @pytest.mark.asyncio
    async def test_network_error_becomes_500_response(self, http_client):
        http_client.request_text.side_effect = ConnectionError("refused")

        response = await Origin(base_url="http://localhost:1").retrieve(make_event())

        assert response["status"] == "500"
        assert _body(response) == {"code": 500, "message": "refused"}
