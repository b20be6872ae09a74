from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from sqlmodel import SQLModel, Field


class ScoreRecord(SQLModel, table=True):
    __tablename__ = "score"

    email: str = Field(primary_key=True)
    name: Optional[str] = None
    picture: Optional[str] = None
    identity_id: Optional[str] = None
    score: int = Field(default=0, index=True)
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# --- Pydantic request/response schemas ---
# Wire names follow the JSON contract shared with the quiz client.

class ScoreSubmit(SQLModel):
    name: Optional[str] = None
    email: Optional[str] = None
    picture: Optional[str] = None
    identityId: Optional[str] = None
    score: int = 0


class ScoreResponse(SQLModel):
    success: bool
    new: Optional[bool] = None
    updated: Optional[bool] = None


class ScoreRecordRead(SQLModel):
    name: Optional[str] = None
    email: str
    picture: Optional[str] = None
    identityId: Optional[str] = None
    score: int
    lastUpdated: datetime

    @classmethod
    def from_record(cls, record: ScoreRecord) -> "ScoreRecordRead":
        return cls(
            name=record.name,
            email=record.email,
            picture=record.picture,
            identityId=record.identity_id,
            score=record.score,
            lastUpdated=record.last_updated,
        )


# --- Quiz client models ---

class Question(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: str
    options: list[str] = PydanticField(min_length=4, max_length=4)
    correct_answer: int = PydanticField(alias="correctAnswer", ge=0, le=3)
    difficulty: str = "medium"
    explanation: str = ""


class Identity(BaseModel):
    name: Optional[str] = None
    email: str
    picture: Optional[str] = None
    sub: Optional[str] = None
