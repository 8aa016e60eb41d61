from pydantic import BaseModel, Field


class SessionInDB(BaseModel):
    """A named group of clips. ``created_at`` is epoch milliseconds."""
    id: str = Field(alias="_id")
    user_id: str
    name: str
    created_at: int

    class Config:
        populate_by_name = True


class SessionCreate(BaseModel):
    name: str


class SessionRename(BaseModel):
    name: str


class SessionResponse(BaseModel):
    id: str
    name: str
    created_at: int


class SessionCreated(BaseModel):
    session_id: str
