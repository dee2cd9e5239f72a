import aioboto3
import logging
from typing import Optional
from botocore.exceptions import ClientError, EndpointConnectionError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential
from app.core.config import settings

logger = logging.getLogger(__name__)

class S3ClientManager:
    """S3 클라이언트 세션을 관리하는 팩토리 클래스"""
    def __init__(self):
        self._session = None

    def _get_session(self):
        if not self._session:
            self._session = aioboto3.Session(
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                region_name=settings.AWS_REGION,
            )
        return self._session

    def public_url(self, s3_key: str) -> str:
        return f"https://{settings.AWS_S3_BUCKET}.s3.{settings.AWS_REGION}.amazonaws.com/{s3_key}"

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=5),
        retry=retry_if_exception_type(EndpointConnectionError),
        reraise=True,
    )
    async def _put_object(self, s3_key: str, data: bytes, content_type: Optional[str]):
        session = self._get_session()
        async with session.client("s3") as s3_client:
            put_kwargs = {"Bucket": settings.AWS_S3_BUCKET, "Key": s3_key, "Body": data}
            if content_type:
                put_kwargs["ContentType"] = content_type
            await s3_client.put_object(**put_kwargs)

    async def upload_bytes(self, s3_key: str, data: bytes, content_type: Optional[str] = None) -> Optional[str]:
        """바이트를 업로드하고 공개 URL을 반환합니다. 실패 시 None"""
        try:
            await self._put_object(s3_key, data, content_type)
            return self.public_url(s3_key)
        except (ClientError, EndpointConnectionError) as e:
            logger.error(f"S3 upload Error: {s3_key} ({e})")
            return None

    async def delete_object(self, s3_key: str) -> bool:
        """
        객체를 삭제합니다. 객체가 존재하지 않으면 False를 반환합니다.
        """
        session = self._get_session()
        async with session.client("s3") as s3_client:
            try:
                await s3_client.head_object(Bucket=settings.AWS_S3_BUCKET, Key=s3_key)
            except ClientError as e:
                error_code = e.response.get("Error", {}).get("Code")
                if error_code in ("404", "NoSuchKey", "NotFound"):
                    return False
                raise
            await s3_client.delete_object(Bucket=settings.AWS_S3_BUCKET, Key=s3_key)
        logger.info(f"S3 object deleted: {s3_key}")
        return True

# 전역 인스턴스 생성
s3_manager = S3ClientManager()
