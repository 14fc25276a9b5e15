import logging
import os
import shutil
import uuid
from fastapi import UploadFile
from sanchalana.constant_file import (UPLOAD_DIR,
                                      PUBLIC_BASE_URL,
                                      storage_buckets,
                                      allowed_upload_extensions)
from sanchalana.exceptions import ValidationError

logger = logging.getLogger(__name__)


def bucket_dir(bucket: str, upload_dir: str = None) -> str:
    if bucket not in storage_buckets:
        raise ValidationError(f"Unknown storage bucket: {bucket}", field="bucket")
    path = os.path.join(upload_dir or UPLOAD_DIR, bucket)
    os.makedirs(path, exist_ok=True)
    return path


def public_url(bucket: str, file_name: str) -> str:
    return f"{PUBLIC_BASE_URL}/uploads/{bucket}/{file_name}"


# ------------------ Upload file ------------------
async def upload_file_controller(bucket: str, file: UploadFile, upload_dir: str = None):
    if not file or not file.filename:
        raise ValidationError("No file provided", field="file")

    extension = file.filename.rsplit(".", 1)[-1].lower() if "." in file.filename else ""
    if extension not in allowed_upload_extensions:
        raise ValidationError(f"File type .{extension} is not allowed", field="file")

    # random names, uploads never overwrite each other
    file_name = f"{uuid.uuid4()}.{extension}"
    path = os.path.join(bucket_dir(bucket, upload_dir), file_name)
    with open(path, "wb") as buffer:
        file.file.seek(0)
        shutil.copyfileobj(file.file, buffer)

    logger.info("Stored %s in bucket %s", file_name, bucket)
    return {"bucket": bucket, "path": file_name, "public_url": public_url(bucket, file_name)}
