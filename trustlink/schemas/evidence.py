from pydantic import BaseModel, ConfigDict, Field

from trustlink.schemas.common import RawEmail


class UploadEvidenceIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_email: RawEmail = Field(alias="userEmail")
    trusted_contact_email: RawEmail = Field(alias="trustedContactEmail")
    # base64 encoded video bytes
    video_data: str = Field(alias="videoData", min_length=1)
    file_name: str = Field(alias="fileName", min_length=1, max_length=255)


class UploadEvidenceOut(BaseModel):
    success: bool = True
    fileId: str
