"""핸들러 모듈 로더

매니페스트의 ``handler`` 값(``handlers/auth.handler`` 처럼 "파일 경로.함수명")으로
파이썬 파일을 import 하고 함수를 찾아 반환합니다. 한 번 로드한 함수는 경로별로
캐싱하며, 설정 리로드 시 purge_loaded_modules()로 비웁니다.
"""

import hashlib
import importlib.util
import os
import sys
from typing import Callable, Dict

from edge_lambda.core.exceptions import HandlerLoadException
from edge_lambda.core.logging import logger


class ModuleLoader:
    def __init__(self, base_dir: str = "") -> None:
        self.base_dir = base_dir
        self._loaded: Dict[str, Callable] = {}
        self._module_names: Dict[str, str] = {}

    def resolve(self, path: str) -> tuple[str, str]:
        """'경로.함수명'을 (절대 파일 경로, 함수명)으로 분리"""
        module_path, sep, function_name = path.rpartition(".")
        if not sep or not module_path or not function_name:
            raise HandlerLoadException(path, "expected '<module path>.<function name>'")

        file_path = module_path if module_path.endswith(".py") else f"{module_path}.py"
        if not os.path.isabs(file_path):
            file_path = os.path.join(self.base_dir or os.getcwd(), file_path)
        return os.path.abspath(file_path), function_name

    def load_module(self, path: str) -> Callable:
        if path in self._loaded:
            return self._loaded[path]

        file_path, function_name = self.resolve(path)
        if not os.path.isfile(file_path):
            raise HandlerLoadException(path, f"{file_path} does not exist")

        module_name = "edge_lambda_handler_" + hashlib.md5(file_path.encode()).hexdigest()
        spec = importlib.util.spec_from_file_location(module_name, file_path)
        if spec is None or spec.loader is None:
            raise HandlerLoadException(path, f"cannot import {file_path}")

        # 핸들러 옆의 모듈을 import 할 수 있도록
        handler_dir = os.path.dirname(file_path)
        if handler_dir not in sys.path:
            sys.path.insert(0, handler_dir)

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(module_name, None)
            raise HandlerLoadException(path, f"{type(e).__name__}: {e}") from e

        fn = getattr(module, function_name, None)
        if not callable(fn):
            sys.modules.pop(module_name, None)
            raise HandlerLoadException(
                path,
                f"function '{function_name}' not found. Please recheck your manifest / exported handlers!",
            )

        logger.debug(f"Handler loaded: {path} -> {file_path}:{function_name}")
        self._loaded[path] = fn
        self._module_names[path] = module_name
        return fn

    def purge_loaded_modules(self) -> None:
        for module_name in self._module_names.values():
            sys.modules.pop(module_name, None)
        self._loaded.clear()
        self._module_names.clear()

    def __contains__(self, path: str) -> bool:
        return path in self._loaded
