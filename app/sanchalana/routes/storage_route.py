from fastapi import APIRouter, Response, Depends, UploadFile, File
from sanchalana.dependencies import get_current_admin
from sanchalana.controller.storage_controller import upload_file_controller
from sanchalana.response_model import ResponseModel, ErrorFromException
from sanchalana.exceptions import FestError

router = APIRouter()


@router.post("/upload/{bucket}", response_description="Upload an image to a public bucket")
async def upload_file(
    response: Response,
    bucket: str,
    file: UploadFile = File(...),
    admin=Depends(get_current_admin)
):
    try:
        stored = await upload_file_controller(bucket, file)
        return ResponseModel(stored, "File uploaded successfully")
    except FestError as e:
        return ErrorFromException(response, e)


__all__ = ["router"]
