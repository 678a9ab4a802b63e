import httpx
import pytest

from vfsh.client import RemoteFileSystem, ResourceEntry, query_params
from vfsh.errors import RemoteError


def test_query_params_render_like_the_serializer():
    assert query_params({"force": True, "offset": 10, "name": "x"}) == {
        "force": "true",
        "offset": "10",
        "name": "x",
    }
    assert query_params(None) == {}


def test_resource_entry_defaults():
    assert ResourceEntry.from_dict({"path": "/a"}) == ResourceEntry(path="/a", type="file", open=False)


@pytest.mark.asyncio
async def test_list_uses_list_verb(remote, fake_fs):
    entries = await remote.list("/")

    assert fake_fs.requests[-1].method == "LIST"
    assert entries == [
        ResourceEntry(path="/config.json", type="file", open=False),
        ResourceEntry(path="/docs/", type="directory", open=False),
    ]


@pytest.mark.asyncio
async def test_info_uses_info_verb(remote, fake_fs):
    info = await remote.info("/docs/readme.txt")

    assert fake_fs.requests[-1].method == "INFO"
    assert info["path"] == "/docs/readme.txt"


@pytest.mark.asyncio
async def test_write_sends_body(remote, fake_fs):
    await remote.write("/a.txt", "content", {"append": True})

    request = fake_fs.requests[-1]
    assert request.method == "PUT"
    assert request.content == b"content"
    assert request.url.params["append"] == "true"


@pytest.mark.asyncio
async def test_error_status_raises_remote_error(remote):
    with pytest.raises(RemoteError) as excinfo:
        await remote.read("/missing.txt")

    assert excinfo.value.status == 404
    assert excinfo.value.reason == "Not found: /missing.txt"
    assert excinfo.value.path == "/missing.txt"


@pytest.mark.asyncio
async def test_empty_error_body_still_has_message():
    def handler(request):
        return httpx.Response(500)

    async with RemoteFileSystem(httpx.AsyncClient(base_url="http://vfs.test", transport=httpx.MockTransport(handler))) as remote:
        with pytest.raises(RemoteError, match="status 500"):
            await remote.delete("/a")


@pytest.mark.asyncio
async def test_transport_errors_propagate():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    remote = RemoteFileSystem(httpx.AsyncClient(base_url="http://vfs.test", transport=httpx.MockTransport(handler)))

    with pytest.raises(httpx.ConnectError):
        await remote.list("/")
