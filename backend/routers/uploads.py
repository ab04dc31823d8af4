import logging
from typing import Optional

from fastapi import APIRouter, Depends, UploadFile, File

from core.config import settings
from core.exceptions import ValidationError
from core.uploads import LocalImageStorage
from schemas.cocktails import UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter()

image_storage = LocalImageStorage(settings.upload_dir, settings.max_upload_bytes)


def get_image_storage() -> LocalImageStorage:
    return image_storage


@router.post("/upload", response_model=UploadResponse)
async def upload_image(
    image: Optional[UploadFile] = File(None),
    storage: LocalImageStorage = Depends(get_image_storage),
):
    """
    Store a JPEG or PNG image sent as multipart field ``image``.
    Returns the path the image is served from (/uploads/...), usable verbatim
    as a cocktail's theJpeg.
    """
    if image is None or not image.filename:
        raise ValidationError("No file uploaded")

    # one byte past the limit is enough to know it is too large
    file_data = await image.read(storage.max_bytes + 1)
    try:
        file_path = storage.store(file_data, image.filename, image.content_type)
    except ValidationError as e:
        logger.warning("Rejected upload %r (%s): %s", image.filename, image.content_type, e)
        raise

    return {"filePath": file_path}
