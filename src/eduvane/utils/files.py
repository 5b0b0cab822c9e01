"""업로드 파일 처리 유틸리티 (전송용 base64 인코딩)"""

import base64
import io

from PIL import Image, UnidentifiedImageError

from eduvane.models.session import InputFile
from eduvane.settings import settings

SUPPORTED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp", "image/gif", "image/bmp"}
SUPPORTED_MIME_TYPES = SUPPORTED_IMAGE_TYPES | {"application/pdf"}

# 다시 저장할 때 사용할 PIL 포맷 (GIF/BMP는 PNG로 변환)
_PIL_FORMATS = {
    "image/jpeg": ("JPEG", "image/jpeg"),
    "image/png": ("PNG", "image/png"),
    "image/webp": ("WEBP", "image/webp"),
    "image/gif": ("PNG", "image/png"),
    "image/bmp": ("PNG", "image/png"),
}


def load_image_from_bytes(data: bytes) -> Image.Image:
    """바이트 데이터에서 이미지 로드"""
    return Image.open(io.BytesIO(data))


def image_to_bytes(image: Image.Image, format: str = "PNG") -> bytes:
    """이미지를 바이트로 변환"""
    buffer = io.BytesIO()
    if format == "JPEG" and image.mode not in ("RGB", "L"):
        image = image.convert("RGB")
    image.save(buffer, format=format)
    return buffer.getvalue()


def resize_image(
    image: Image.Image, max_width: int = 2048, max_height: int = 2048
) -> Image.Image:
    """이미지 리사이즈 (비율 유지)"""
    if image.width <= max_width and image.height <= max_height:
        return image

    ratio = min(max_width / image.width, max_height / image.height)
    new_size = (int(image.width * ratio), int(image.height * ratio))

    return image.resize(new_size, Image.Resampling.LANCZOS)


def validate_upload(file: InputFile) -> None:
    """지원 형식/크기 검증

    Raises:
        ValueError: 지원하지 않는 형식이거나 최대 크기를 넘을 때
    """
    if file.mime_type not in SUPPORTED_MIME_TYPES:
        raise ValueError(f"Unsupported file type: {file.mime_type}")
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(file.data) > max_bytes:
        raise ValueError(f"File is larger than {settings.max_upload_size_mb} MB.")


def encode_file(file: InputFile, max_edge: int | None = None) -> tuple[str, str]:
    """업로드 파일을 전송용 base64 문자열로 변환

    이미지는 max_edge 이내로 축소 후 인코딩하고, PDF는 그대로 인코딩합니다.

    Args:
        file: 업로드 파일
        max_edge: 이미지 최대 변 길이 (None이면 settings.max_image_edge)

    Returns:
        (base64 문자열, 실제 mime 타입) 튜플
    """
    validate_upload(file)
    if file.is_pdf:
        return base64.b64encode(file.data).decode("ascii"), file.mime_type

    max_edge = max_edge or settings.max_image_edge
    try:
        image = load_image_from_bytes(file.data)
    except UnidentifiedImageError as e:
        raise ValueError(f"Unable to open image: {file.name}") from e

    pil_format, mime_type = _PIL_FORMATS[file.mime_type]
    resized = resize_image(image, max_width=max_edge, max_height=max_edge)
    if resized is image and pil_format == image.format:
        data = file.data
    else:
        data = image_to_bytes(resized, format=pil_format)
    return base64.b64encode(data).decode("ascii"), mime_type

