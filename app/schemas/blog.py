from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PostStatus = Literal["published", "draft"]


def _split_tags(value):
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    return value


class Post(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    type: str = "News"
    date: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    contentHtml: Optional[str] = None
    link: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    status: PostStatus = "published"
    featured: bool = False
    featuredImage: Optional[str] = None
    author: Optional[str] = None
    seoTitle: Optional[str] = None
    seoDescription: Optional[str] = None
    seoKeywords: Optional[str] = None
    seoImage: Optional[str] = None
    canonicalUrl: Optional[str] = None
    noIndex: bool = False
    autoGenerateSEO: bool = True
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value):
        if value is None:
            return []
        return _split_tags(value)


class PostCreate(BaseModel):
    """Create payload. Title/content presence is checked by the service."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    title: Optional[str] = None
    type: Optional[str] = None
    date: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    contentHtml: Optional[str] = None
    link: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    status: Optional[PostStatus] = None
    featured: bool = False
    featuredImage: Optional[str] = None
    seoTitle: Optional[str] = None
    seoDescription: Optional[str] = None
    seoKeywords: Optional[str] = None
    seoImage: Optional[str] = None
    canonicalUrl: Optional[str] = None
    noIndex: bool = False
    autoGenerateSEO: bool = True

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value):
        if value is None:
            return []
        return _split_tags(value)


class PostUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    type: Optional[str] = None
    date: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    contentHtml: Optional[str] = None
    link: Optional[str] = None
    tags: Optional[List[str]] = None
    status: Optional[PostStatus] = None
    featured: Optional[bool] = None
    featuredImage: Optional[str] = None
    seoTitle: Optional[str] = None
    seoDescription: Optional[str] = None
    seoKeywords: Optional[str] = None
    seoImage: Optional[str] = None
    canonicalUrl: Optional[str] = None
    noIndex: Optional[bool] = None
    autoGenerateSEO: Optional[bool] = None

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value):
        return _split_tags(value)


class FeaturedPostRequest(BaseModel):
    postId: Optional[str] = None


class FeaturedPostResponse(BaseModel):
    message: str
    post: Optional[Post] = None


class MessageResponse(BaseModel):
    message: str
