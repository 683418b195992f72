"""스토리지 라우터 — 서명된 blob ID를 실제 파일로 리다이렉트.

Storage Router — Resolves signed blob ids to stored attachments.
Local mode streams the file; S3 mode redirects to a presigned GET URL.
No bearer token is required: the signed id itself is the credential.
"""

import jwt
from fastapi import APIRouter
from fastapi.responses import FileResponse, RedirectResponse, Response

from app.services.storage_service import storage_service
from app.utils.exceptions import NotFoundError
from app.utils.jwt import decode_token

router: APIRouter = APIRouter()


@router.get("/blobs/redirect/{signed_id}/{filename}")
async def redirect_blob(signed_id: str, filename: str) -> Response:
    """서명된 blob ID로 첨부파일을 제공합니다.

    Serve the attachment behind a signed blob id.

    Raises:
        NotFoundError: 서명이 잘못되었거나 만료됨, 또는 파일 없음
                       (Bad or expired signature, or missing file)
    """
    try:
        payload: dict = decode_token(signed_id)
    except jwt.InvalidTokenError:
        raise NotFoundError("File not found")
    key: str | None = payload.get("key")
    if payload.get("type") != "blob" or not key:
        raise NotFoundError("File not found")

    if storage_service.is_local:
        path = storage_service.local_path(key)
        if not path.is_file():
            raise NotFoundError("File not found")
        return FileResponse(path, filename=filename)

    return RedirectResponse(storage_service.download_url(key), status_code=302)
