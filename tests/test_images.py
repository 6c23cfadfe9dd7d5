import httpx
import pytest

from food_ordering.services.images import ImageRehoster, file_name_from_url


@pytest.mark.asyncio
async def test_rehost_uploads_image_and_returns_view_url(rehoster, backend, png_bytes):
    result = await rehoster.rehost("https://images.example.com/menu/burger.png")

    [stored] = backend.files("assets")
    assert result.rehosted is True
    assert result.file_id == stored["$id"]
    assert result.url == backend.get_file_view_url("assets", stored["$id"])
    assert stored["name"] == "burger.png"
    assert stored["mimeType"] == "image/png"
    assert stored["sizeOriginal"] == len(png_bytes)
    assert backend.file_content("assets", stored["$id"]) == png_bytes


@pytest.mark.asyncio
async def test_http_error_falls_back_to_source_url(rehoster, backend):
    url = "https://images.example.com/broken/burger.png"

    result = await rehoster.rehost(url)

    assert result.rehosted is False
    assert result.url == url
    assert "404" in result.error_message
    assert backend.files("assets") == []


@pytest.mark.asyncio
async def test_upload_error_falls_back_to_source_url(rehoster, backend):
    backend.inject_fault("create_file")
    url = "https://images.example.com/menu/pizza.png"

    result = await rehoster.rehost(url)

    assert result.rehosted is False
    assert result.url == url


@pytest.mark.asyncio
async def test_transport_error_falls_back_to_source_url(backend):
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    rehoster = ImageRehoster(backend, "assets", http_client=client)
    url = "https://slow.example.com/menu/wrap.png"

    result = await rehoster.rehost(url)

    assert result.url == url
    assert result.rehosted is False


@pytest.mark.asyncio
async def test_content_type_parameters_are_dropped(backend):
    def handler(request):
        return httpx.Response(200, content=b"x", headers={"content-type": "image/jpeg; charset=binary"})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    rehoster = ImageRehoster(backend, "assets", http_client=client)

    await rehoster.rehost("https://images.example.com/menu/wrap.jpg")

    assert backend.files("assets")[0]["mimeType"] == "image/jpeg"


def test_file_name_is_last_path_segment():
    assert file_name_from_url("https://cdn.example.com/a/b/burger.png?w=200") == "burger.png"


def test_file_name_falls_back_when_path_is_empty():
    name = file_name_from_url("https://cdn.example.com/")

    assert name.startswith("file-")
    assert name.endswith(".jpg")
