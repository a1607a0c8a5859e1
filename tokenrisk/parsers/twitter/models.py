"""Pydantic models for TwitterAPI.io responses."""

from pydantic import BaseModel


class TwitterAuthor(BaseModel):
    """Account profile."""

    userName: str = ""
    id: str = ""
    name: str = ""
    followers: int = 0
    isBlueVerified: bool = False
    createdAt: str = ""

    model_config = {"extra": "ignore"}


class TwitterTweet(BaseModel):
    id: str = ""
    text: str = ""
    likeCount: int = 0
    retweetCount: int = 0
    replyCount: int = 0
    createdAt: str = ""

    model_config = {"extra": "ignore"}
