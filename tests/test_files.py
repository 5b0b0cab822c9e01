"""업로드 파일 처리 유틸리티 테스트"""

import base64
import io

import pytest
from PIL import Image

from eduvane.models import InputFile
from eduvane.settings import settings
from eduvane.utils.files import encode_file, image_to_bytes, resize_image


def decode_image(encoded):
    return Image.open(io.BytesIO(base64.b64decode(encoded)))


class TestResizeImage:
    """resize_image 테스트"""

    def test_small_image_unchanged(self, sample_image):
        assert resize_image(sample_image, 200, 200) is sample_image

    def test_keeps_aspect_ratio(self):
        image = Image.new("RGB", (4000, 1000))
        resized = resize_image(image, 2048, 2048)
        assert resized.size == (2048, 512)


class TestEncodeFile:
    """encode_file 테스트"""

    def test_small_png_passthrough(self, png_file):
        """축소가 필요 없는 PNG는 원본 바이트 그대로"""
        encoded, mime = encode_file(png_file)

        assert mime == "image/png"
        assert base64.b64decode(encoded) == png_file.data

    def test_large_image_downscaled(self):
        image = Image.new("RGB", (3000, 1500), color="white")
        file = InputFile(name="big.jpg", mime_type="image/jpeg", data=image_to_bytes(image, "JPEG"))

        encoded, mime = encode_file(file, max_edge=1000)

        assert mime == "image/jpeg"
        assert decode_image(encoded).size == (1000, 500)

    def test_gif_converted_to_png(self):
        image = Image.new("P", (10, 10))
        file = InputFile(name="a.gif", mime_type="image/gif", data=image_to_bytes(image, "GIF"))

        encoded, mime = encode_file(file)

        assert mime == "image/png"
        assert decode_image(encoded).format == "PNG"

    def test_pdf_encoded_as_is(self):
        file = InputFile(name="work.pdf", mime_type="application/pdf", data=b"%PDF-1.4 test")

        encoded, mime = encode_file(file)

        assert mime == "application/pdf"
        assert base64.b64decode(encoded) == b"%PDF-1.4 test"

    def test_unsupported_type(self):
        file = InputFile(name="a.txt", mime_type="text/plain", data=b"hi")
        with pytest.raises(ValueError, match="Unsupported file type"):
            encode_file(file)

    def test_too_large(self, monkeypatch):
        monkeypatch.setattr(settings, "max_upload_size_mb", 1)
        file = InputFile(name="a.pdf", mime_type="application/pdf", data=b"0" * (1024 * 1024 + 1))

        with pytest.raises(ValueError, match="larger than 1 MB"):
            encode_file(file)

    def test_corrupt_image(self):
        file = InputFile(name="broken.png", mime_type="image/png", data=b"not an image")
        with pytest.raises(ValueError, match="Unable to open image"):
            encode_file(file)
