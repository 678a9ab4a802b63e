import io
import json
from typing import Dict, List

import httpx
import pytest
from rich.console import Console

from vfsh.client import RemoteFileSystem
from vfsh.commands.handlers import FileCommands, build_registry
from vfsh.formatter import Formatter
from vfsh.history import HistoryNavigator
from vfsh.shell import Shell

BASE_URL = "http://vfs.test"


class FakeFileSystem:
    """In-memory filesystem answering the shell's HTTP verbs."""

    def __init__(self, files: Dict[str, str]):
        self.files = dict(files)
        self.opened: List[str] = []
        self.requests: List[httpx.Request] = []

    def _children(self, path: str):
        prefix = path if path.endswith("/") else path + "/"
        entries = {}
        for name in self.files:
            if not name.startswith(prefix):
                continue
            head, sep, _ = name[len(prefix):].partition("/")
            kind = "directory" if sep else "file"
            full = prefix + head + ("/" if sep else "")
            entries[full] = {"path": full, "type": kind, "open": full in self.opened}
        return [entries[key] for key in sorted(entries)]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        method = request.method

        if method == "LIST":
            entries = self._children(path)
            if not entries and path != "/":
                return httpx.Response(404, text=f"No such directory: {path}")
            return httpx.Response(200, json=entries)
        if method == "INFO":
            if path not in self.files:
                return httpx.Response(404, text=f"Not found: {path}")
            return httpx.Response(200, json={"path": path, "type": "file", "size": len(self.files[path])})
        if method == "OPEN":
            if path not in self.files:
                return httpx.Response(404, text=f"Not found: {path}")
            self.opened.append(path)
            return httpx.Response(204)
        if method == "GET":
            if path not in self.files:
                return httpx.Response(404, text=f"Not found: {path}")
            return httpx.Response(200, text=self.files[path])
        if method == "PUT":
            self.files[path] = request.content.decode()
            return httpx.Response(201)
        if method == "DELETE":
            if self.files.pop(path, None) is None:
                return httpx.Response(404, text=f"Not found: {path}")
            return httpx.Response(204)
        return httpx.Response(405, text=f"Unsupported method {method}")


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    return FakeFileSystem({
        "/docs/readme.txt": "hello [bold]world[/bold]",
        "/docs/notes/todo.txt": "buy milk",
        "/config.json": json.dumps({"debug": True}),
    })


@pytest.fixture
def remote(fake_fs) -> RemoteFileSystem:
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(fake_fs))
    return RemoteFileSystem(client)


@pytest.fixture
def commands(remote) -> FileCommands:
    return FileCommands(remote)


@pytest.fixture
def registry(commands):
    return build_registry(commands)


@pytest.fixture
def shell(registry) -> Shell:
    return Shell(registry, HistoryNavigator())


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def formatter(output) -> Formatter:
    return Formatter(Console(file=output, width=120, color_system=None))
