"""핸들러 로딩/호출 규약 테스트"""
import pytest

from edge_lambda.core.exceptions import HandlerLoadException
from edge_lambda.engine import FunctionSet
from edge_lambda.utils.callback import accepts_callback, wrap_handler
from edge_lambda.utils.module_loader import ModuleLoader

from tests.fixtures import write_handler


class TestWrapHandler:
    """세 가지 호출 규약"""

    @pytest.mark.asyncio
    async def test_coroutine_handler(self):
        async def handler(event, context):
            return {"uri": event["uri"]}

        assert await wrap_handler(handler)({"uri": "/a"}, None) == {"uri": "/a"}

    @pytest.mark.asyncio
    async def test_callback_handler(self):
        def handler(event, context, callback):
            callback(None, {"status": "200"})

        assert await wrap_handler(handler)({}, None) == {"status": "200"}

    @pytest.mark.asyncio
    async def test_callback_error_is_raised(self):
        def handler(event, context, callback):
            callback("denied")

        with pytest.raises(Exception, match="denied"):
            await wrap_handler(handler)({}, None)

    @pytest.mark.asyncio
    async def test_callback_exception_instance_is_raised(self):
        def handler(event, context, callback):
            callback(PermissionError("no access"))

        with pytest.raises(PermissionError):
            await wrap_handler(handler)({}, None)

    @pytest.mark.asyncio
    async def test_plain_return_value(self):
        def handler(event, context):
            return "plain"

        assert await wrap_handler(handler)({}, None) == "plain"

    @pytest.mark.asyncio
    async def test_callback_handler_returning_value(self):
        def handler(event, context, callback):
            return "returned"

        assert await wrap_handler(handler)({}, None) == "returned"

    @pytest.mark.asyncio
    async def test_first_callback_wins(self):
        def handler(event, context, callback):
            callback(None, "first")
            callback(None, "second")

        assert await wrap_handler(handler)({}, None) == "first"

    def test_path_attached(self):
        assert wrap_handler(lambda e, c: None, "handlers/a.handler").path == "handlers/a.handler"

    def test_accepts_callback(self):
        assert accepts_callback(lambda e, c, cb: None)
        assert accepts_callback(lambda *args: None)
        assert not accepts_callback(lambda e, c: None)


class TestModuleLoader:
    def test_loads_function(self, tmp_path):
        path = write_handler(tmp_path / "h", "auth", "def handler(event, context):\n    return 'ok'\n")
        loader = ModuleLoader()

        fn = loader.load_module(path)

        assert fn({}, None) == "ok"
        assert path in loader

    def test_relative_to_base_dir(self, tmp_path):
        write_handler(tmp_path / "h", "auth", "def handler(event, context):\n    return 'ok'\n")
        loader = ModuleLoader(base_dir=str(tmp_path))

        assert loader.load_module("h/auth.handler")({}, None) == "ok"

    def test_cached_until_purged(self, tmp_path):
        path = write_handler(tmp_path / "h", "counter", "def handler(event, context):\n    return 1\n")
        loader = ModuleLoader()
        first = loader.load_module(path)

        write_handler(tmp_path / "h", "counter", "def handler(event, context):\n    return 'reloaded'\n")
        assert loader.load_module(path) is first

        loader.purge_loaded_modules()
        assert path not in loader
        assert loader.load_module(path)({}, None) == "reloaded"

    def test_sibling_import(self, tmp_path):
        write_handler(tmp_path / "h", "helpers_for_test", "VALUE = 'sibling'\n")
        path = write_handler(
            tmp_path / "h",
            "uses_sibling",
            "import helpers_for_test\n\ndef handler(event, context):\n    return helpers_for_test.VALUE\n",
        )

        assert ModuleLoader().load_module(path)({}, None) == "sibling"

    @pytest.mark.parametrize("bad_path", ["nodot", ".handler", "module."])
    def test_malformed_path(self, bad_path):
        with pytest.raises(HandlerLoadException):
            ModuleLoader().load_module(bad_path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(HandlerLoadException, match="does not exist"):
            ModuleLoader().load_module(str(tmp_path / "missing") + ".handler")

    def test_missing_function(self, tmp_path):
        path = write_handler(tmp_path / "h", "empty", "x = 1\n")

        with pytest.raises(HandlerLoadException, match="function 'handler' not found"):
            ModuleLoader().load_module(path)

    def test_import_error_wrapped(self, tmp_path):
        path = write_handler(tmp_path / "h", "broken", "raise RuntimeError('at import')\n")

        with pytest.raises(HandlerLoadException, match="RuntimeError"):
            ModuleLoader().load_module(path)


class TestFunctionSet:
    def test_identity_defaults(self):
        fn_set = FunctionSet("*")
        assert fn_set.origin.type == "noop"
        assert fn_set.behavior.allowed_methods == ["GET", "HEAD"]
        assert fn_set.handler_path("viewer-request") == ""

    @pytest.mark.asyncio
    async def test_identity_handlers_pass_through(self):
        fn_set = FunctionSet("*")
        event = {"Records": [{"cf": {"config": {}, "request": {"uri": "/"}, "response": {"status": "200"}}}]}

        assert await fn_set.viewer_request(event, None) == {"uri": "/"}
        assert await fn_set.viewer_response(event, None) == {"status": "200"}

    def test_unknown_event_type_ignored(self, tmp_path):
        path = write_handler(tmp_path / "h", "any", "def handler(event, context):\n    return None\n")
        fn_set = FunctionSet("*")

        fn_set.set_handler("edge-request", path)

        assert fn_set.handler_path("viewer-request") == ""

    def test_set_handler_binds_slot(self, tmp_path):
        path = write_handler(tmp_path / "h", "slot", "def handler(event, context):\n    return None\n")
        fn_set = FunctionSet("/api/*")

        fn_set.set_handler("origin-request", path)

        assert fn_set.handler_path("origin-request") == path
        assert fn_set.matches("/api/x")
        assert not fn_set.matches("/other")
