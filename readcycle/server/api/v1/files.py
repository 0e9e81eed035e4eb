"""
File API Endpoints.

Upload and delete book thumbnails. Stored files are served by the static
mount under ``/upload``.
"""

from typing import Optional

from fastapi import APIRouter, File, Response, UploadFile, status

from readcycle.core.models.io import ResultResponse, UploadFileResponse, build_response
from readcycle.server.services.deps import AdminDep, FileServiceDep

router = APIRouter()


@router.post(
    "/upload",
    response_model=ResultResponse[UploadFileResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Upload File",
    description="Store a single image. Allowed extensions come from the upload configuration.",
    responses={400: {"description": "Empty file or extension not allowed"}},
)
async def upload_file(_: AdminDep, files: FileServiceDep, file: Optional[UploadFile] = File(default=None)):
    data = await files.upload(file)
    return build_response(data, "Upload single file", status.HTTP_201_CREATED)


@router.delete(
    "/delete/{file_name}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete File",
    responses={400: {"description": "File not found"}},
)
async def delete_file(file_name: str, _: AdminDep, files: FileServiceDep):
    await files.delete(file_name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
