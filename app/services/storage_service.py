"""스토리지 서비스 — S3 또는 로컬 파일 저장.

Storage Service — Stores organization attachments (logo, court report
template) on S3 or on local disk.
AWS 키가 비어있으면 자동으로 로컬 모드로 전환됩니다.
Files replaced or deleted through a session are removed only after that
session commits; files saved in a session that rolls back are removed too.
Public links never expose the storage key directly: they carry a signed blob
id which the redirect endpoint resolves back to the stored file.
"""

import logging
import uuid
from pathlib import Path
from urllib.parse import quote
from uuid import UUID

from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from app.config import settings
from app.utils.jwt import create_signed_blob_id

logger: logging.Logger = logging.getLogger(__name__)

# 로컬 업로드 디렉토리 — .env의 LOCAL_UPLOADS_DIR 또는 <root>/uploads
_PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent.parent

# 첨부파일 리다이렉트 경로 — Public redirect path prefix for attachments
BLOB_REDIRECT_PREFIX: str = "/api/v1/storage/blobs/redirect"

# 세션 info 키 — Keys removed from storage once the session transaction ends
_DELETE_ON_COMMIT: str = "storage_delete_on_commit"
_DELETE_ON_ROLLBACK: str = "storage_delete_on_rollback"


def uploads_dir() -> Path:
    return Path(settings.LOCAL_UPLOADS_DIR) if settings.LOCAL_UPLOADS_DIR else _PROJECT_ROOT / "uploads"


class StorageService:
    """파일 저장 서비스 — S3 또는 로컬 모드 자동 선택."""

    def __init__(self) -> None:
        self._client = None

    @property
    def is_local(self) -> bool:
        return not settings.AWS_ACCESS_KEY_ID or not settings.AWS_S3_BUCKET

    @property
    def client(self):
        if self.is_local:
            return None
        if self._client is None:
            import boto3
            from botocore.config import Config as BotoConfig

            self._client = boto3.client(
                "s3",
                region_name=settings.AWS_S3_REGION,
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                config=BotoConfig(signature_version="s3v4"),
            )
        return self._client

    def generate_key(self, organization_id: UUID, folder: str, filename: str) -> str:
        ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
        return f"{folder}/{organization_id}/{uuid.uuid4().hex}.{ext}"

    def save(self, key: str, data: bytes, content_type: str) -> None:
        """파일을 저장합니다.

        Store bytes under the given key (S3 put_object or local file write).
        """
        if self.is_local:
            path = uploads_dir() / key
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
            return

        self.client.put_object(
            Bucket=settings.AWS_S3_BUCKET,
            Key=key,
            Body=data,
            ContentType=content_type,
        )

    def delete(self, key: str) -> None:
        """파일을 삭제합니다. 없는 파일은 무시합니다."""
        if self.is_local:
            (uploads_dir() / key).unlink(missing_ok=True)
            return
        self.client.delete_object(Bucket=settings.AWS_S3_BUCKET, Key=key)

    def local_path(self, key: str) -> Path:
        return uploads_dir() / key

    def download_url(self, key: str, expires: int = 300) -> str:
        """S3 presigned GET URL을 반환합니다 (S3 모드 전용).

        Presigned GET URL for a stored object; only meaningful in S3 mode.
        """
        return self.client.generate_presigned_url(
            "get_object",
            Params={"Bucket": settings.AWS_S3_BUCKET, "Key": key},
            ExpiresIn=expires,
        )

    def redirect_path(self, key: str, filename: str) -> str:
        """서명된 blob ID가 포함된 리다이렉트 경로를 반환합니다.

        Public redirect path ``/api/v1/storage/blobs/redirect/{signed_id}/{filename}``.
        """
        return f"{BLOB_REDIRECT_PREFIX}/{create_signed_blob_id(key)}/{quote(filename)}"

    def delete_on_commit(self, db: AsyncSession, key: str) -> None:
        """세션 커밋 후 파일을 삭제하도록 예약합니다.

        Schedule ``key`` for removal once ``db`` commits. A rollback cancels
        the removal, so the row that still points at the file keeps it.
        """
        db.info.setdefault(_DELETE_ON_COMMIT, []).append(key)

    def delete_on_rollback(self, db: AsyncSession, key: str) -> None:
        """세션 롤백 시 파일을 삭제하도록 예약합니다.

        Schedule a freshly saved ``key`` for removal if ``db`` rolls back,
        so no stored file is left without a row referencing it.
        """
        db.info.setdefault(_DELETE_ON_ROLLBACK, []).append(key)

    def discard(self, keys: list[str]) -> None:
        for key in keys:
            try:
                self.delete(key)
            except (OSError, BotoCoreError, ClientError):
                logger.warning("Failed to remove stored file %s", key, exc_info=True)


storage_service: StorageService = StorageService()


@event.listens_for(Session, "after_commit")
def _discard_after_commit(session: Session) -> None:
    session.info.pop(_DELETE_ON_ROLLBACK, None)
    storage_service.discard(session.info.pop(_DELETE_ON_COMMIT, []))


@event.listens_for(Session, "after_rollback")
def _discard_after_rollback(session: Session) -> None:
    session.info.pop(_DELETE_ON_COMMIT, None)
    storage_service.discard(session.info.pop(_DELETE_ON_ROLLBACK, []))
