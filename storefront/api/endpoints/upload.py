"""Upload API: multipart upload of product images and design files (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from storefront.api.dependencies import OptionalUser, get_upload_actions
from storefront.api.responses import action_response
from storefront.application.actions import UploadActions
from storefront.core.limiter import limit_upload
from storefront.schemas.upload import UploadResponse

router = APIRouter()


@router.post("")
@limit_upload
async def upload_file(
    request: Request,
    user: OptionalUser,
    actions: Annotated[UploadActions, Depends(get_upload_actions)],
    file: Annotated[UploadFile, File()],
    upload_type: Annotated[str, Form()] = "image",
):
    """Store the file under uploads/<user>/<timestamp>_<name>; return key and public URL.

    upload_type is "image" (jpeg/png/webp/svg) or "product" (images plus
    pdf/eps/postscript).
    """
    data = await file.read()
    result = await actions.upload_file(
        user, file.filename, file.content_type, data, upload_type=upload_type
    )
    return action_response(result, UploadResponse)
