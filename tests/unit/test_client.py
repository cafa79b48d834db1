"""
Unit tests for the API client and command line wrapper.
"""

import io
from unittest.mock import MagicMock, patch

import pytest
import requests
from PIL import Image

from app import cli
from app.client import EnhanceClient, EnhanceClientError, encode_jpeg


def _response(status_code=200, body=None, content=b""):
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    if body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


class TestEncodeJpeg:
    def test_png_is_reencoded(self, make_image):
        encoded = encode_jpeg(make_image(fmt="PNG", mode="RGBA", color=(10, 20, 30, 255)))

        with Image.open(io.BytesIO(encoded)) as img:
            assert img.format == "JPEG"
            assert img.size == (800, 600)

    def test_reads_from_path(self, tmp_path, make_image):
        path = tmp_path / "photo.png"
        path.write_bytes(make_image())

        assert encode_jpeg(path)[:2] == b"\xff\xd8"


class TestEnhanceClient:
    def test_posts_multipart_image_field(self, make_image):
        client = EnhanceClient("http://relay.local/")
        ok = _response(body={"success": True, "enhancedImageUrl": "https://cdn.example/out.png"})

        with patch.object(client.session, "post", return_value=ok) as post:
            url = client.enhance(make_image(), prompt="on a beach")

        assert url == "https://cdn.example/out.png"
        args, kwargs = post.call_args
        assert args[0] == "http://relay.local/api/image/enhance"
        filename, payload, content_type = kwargs["files"]["image"]
        assert filename == "image.jpg"
        assert content_type == "image/jpeg"
        assert payload[:2] == b"\xff\xd8"
        assert kwargs["data"] == {"prompt": "on a beach"}

    def test_prompt_omitted_when_not_given(self, make_image):
        client = EnhanceClient()
        ok = _response(body={"success": True, "enhancedImageUrl": "https://cdn.example/out.png"})

        with patch.object(client.session, "post", return_value=ok) as post:
            client.enhance(make_image())

        assert post.call_args.kwargs["data"] is None

    def test_error_envelope_raises(self, make_image):
        client = EnhanceClient()
        failed = _response(
            status_code=500,
            body={"success": False, "error": "Failed to process image", "details": "timeout"},
        )

        with patch.object(client.session, "post", return_value=failed):
            with pytest.raises(EnhanceClientError) as exc_info:
                client.enhance(make_image())

        assert exc_info.value.status_code == 500
        assert str(exc_info.value) == "Failed to process image: timeout"

    def test_non_json_response_raises(self, make_image):
        client = EnhanceClient()

        with patch.object(client.session, "post", return_value=_response(status_code=502)):
            with pytest.raises(EnhanceClientError) as exc_info:
                client.enhance(make_image())

        assert exc_info.value.status_code == 502

    def test_missing_url_raises(self, make_image):
        client = EnhanceClient()

        with patch.object(client.session, "post", return_value=_response(body={"success": True})):
            with pytest.raises(EnhanceClientError):
                client.enhance(make_image())

    def test_download(self):
        client = EnhanceClient()

        with patch.object(client.session, "get", return_value=_response(content=b"png-bytes")) as get:
            assert client.download("https://cdn.example/out.png") == b"png-bytes"

        get.return_value.raise_for_status.assert_called_once()


class TestCli:
    def test_missing_image_file(self, tmp_path, capsys):
        assert cli.main([str(tmp_path / "missing.jpg")]) == 2
        assert "Image not found" in capsys.readouterr().err

    def test_prints_url_and_saves_output(self, tmp_path, make_image, capsys):
        source = tmp_path / "photo.png"
        source.write_bytes(make_image())
        output = tmp_path / "out.png"

        with patch.object(cli.EnhanceClient, "enhance", return_value="https://cdn.example/out.png"), \
                patch.object(cli.EnhanceClient, "download", return_value=b"png-bytes"):
            code = cli.main([str(source), "-o", str(output)])

        assert code == 0
        assert "https://cdn.example/out.png" in capsys.readouterr().out
        assert output.read_bytes() == b"png-bytes"

    def test_api_error_exit_code(self, tmp_path, make_image, capsys):
        source = tmp_path / "photo.png"
        source.write_bytes(make_image())

        with patch.object(cli.EnhanceClient, "enhance", side_effect=EnhanceClientError("No image file provided", 400)):
            code = cli.main([str(source)])

        assert code == 1
        assert "No image file provided" in capsys.readouterr().err

    def test_connection_error_exit_code(self, tmp_path, make_image):
        source = tmp_path / "photo.png"
        source.write_bytes(make_image())

        with patch.object(cli.EnhanceClient, "enhance", side_effect=requests.ConnectionError("refused")):
            assert cli.main([str(source)]) == 1
