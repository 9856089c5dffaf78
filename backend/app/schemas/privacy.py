from pydantic import BaseModel, Field


class ApprovedContextsRequest(BaseModel):
    context_ids: list[int] = Field(default_factory=list)


class ApprovedUsersRequest(BaseModel):
    user_ids: list[int] = Field(default_factory=list)
