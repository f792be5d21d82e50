import uuid

from pydantic import BaseModel, ConfigDict, Field


class MarkEmailSentIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email_id: uuid.UUID = Field(alias="emailId")
