from pydantic import BaseModel, ConfigDict, Field

from trustlink.schemas.common import RawEmail


class InitiateSetupIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_email: RawEmail = Field(alias="userEmail")
    contact_google_email: RawEmail = Field(alias="contactGoogleEmail")


class CompleteContactAuthIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    setup_token: str = Field(alias="setupToken", min_length=1, max_length=128)
    contact_email: RawEmail = Field(alias="contactEmail")
    refresh_token: str = Field(alias="refreshToken", min_length=1)
