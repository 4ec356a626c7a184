# src/postboard/api/v1/endpoints/images.py
"""Image upload endpoint used before creating or updating a post."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from postboard.api.v1.dependencies import ImageStoreDep, RequestContextDep

router = APIRouter(tags=["images"])


@router.put("/post-image", summary="Upload a post image")
async def upload_post_image(
    ctx: RequestContextDep,
    images: ImageStoreDep,
    image: Annotated[UploadFile | None, File()] = None,
    old_path: Annotated[str | None, Form(alias="oldPath")] = None,
) -> JSONResponse:
    """Store a PNG/JPEG image and return its path.

    Files of any other type are ignored. When ``oldPath`` is given, the
    previous image is deleted on a best-effort basis.
    """
    ctx.require_user_id()

    stored = await images.save(image) if image is not None else None
    if stored is None:
        return JSONResponse(status_code=status.HTTP_200_OK, content={"message": "No file provided"})

    if old_path:
        images.clear(old_path)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "File stored", "filePath": stored},
    )
