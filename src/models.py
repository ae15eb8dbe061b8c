"""
Pydantic models for content nodes and generated pages.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


# =============================================================================
# Content Types
# =============================================================================


class ContentType(str, Enum):
    """Kinds of content the generator builds pages for."""

    CHALLENGE = "challenge"
    TRACK = "track"
    GUIDE = "guide"

    @property
    def collection(self) -> str:
        """URL collection segment and content file stem (`challenges`, ...)."""
        return f"{self.value}s"


class TagDimension(str, Enum):
    """Tag lists a listing can be filtered on."""

    LANGUAGES = "languages"
    TOPICS = "topics"


# =============================================================================
# Content Nodes
# =============================================================================


class ContentNode(BaseModel):
    """A content item with a unique id, a URL slug and tag lists."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    title: str = ""
    languages: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)

    def tags(self, dimension: TagDimension | str) -> list[str]:
        return list(getattr(self, TagDimension(dimension).value))


class Challenge(ContentNode):
    """A coding challenge."""


class Guide(ContentNode):
    """A written guide."""


class Video(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    title: str = ""
    source: str | None = Field(default=None, description="Video host reference, e.g. a YouTube id")


class Chapter(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = ""
    videos: list[Video] = Field(default_factory=list)


class TrackPosition(BaseModel):
    """Zero-based position of a video inside its track, in declared order."""

    model_config = ConfigDict(frozen=True)

    chapter_index: int = Field(default=0, ge=0)
    video_index: int = Field(default=0, ge=0)

    def to_context(self) -> dict[str, int]:
        return {"chapterIndex": self.chapter_index, "videoIndex": self.video_index}


class Track(ContentNode):
    """
    A track of videos.

    A track is either flat (`videos`) or chaptered (`chapters`), never both.
    A track with neither has no videos at all.
    """

    type: str = "main"
    videos: list[Video] | None = None
    chapters: list[Chapter] | None = None

    @model_validator(mode="after")
    def check_flat_or_chaptered(self) -> Track:
        if self.videos is not None and self.chapters is not None:
            raise ValueError("a track has either videos or chapters, not both")
        return self

    @property
    def is_chaptered(self) -> bool:
        return self.chapters is not None

    def iter_videos(self) -> Iterator[tuple[TrackPosition, Video]]:
        """Yield every video with its position, flattening chapters in order."""
        if self.chapters is not None:
            for chapter_index, chapter in enumerate(self.chapters):
                for video_index, video in enumerate(chapter.videos):
                    yield TrackPosition(chapter_index=chapter_index, video_index=video_index), video
        else:
            for video_index, video in enumerate(self.videos or []):
                yield TrackPosition(chapter_index=0, video_index=video_index), video

    def first_video(self) -> tuple[TrackPosition, Video] | None:
        """The track's entry video, or None for a track without videos."""
        return next(self.iter_videos(), None)


NODE_MODELS: dict[ContentType, type[ContentNode]] = {
    ContentType.CHALLENGE: Challenge,
    ContentType.TRACK: Track,
    ContentType.GUIDE: Guide,
}


# =============================================================================
# Filters & Manifests
# =============================================================================


class TagFilter(BaseModel):
    """Exact, case-insensitive tag filter. `None` matches any value."""

    model_config = ConfigDict(frozen=True)

    languages: str | None = None
    topics: str | None = None

    @property
    def is_wildcard(self) -> bool:
        return self.languages is None and self.topics is None

    def value(self, dimension: TagDimension | str) -> str | None:
        return getattr(self, TagDimension(dimension).value)


class FilterManifest(BaseModel):
    """The `{languages, topics}` facet file a listing's client-side filter reads."""

    languages: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)


# =============================================================================
# Pages
# =============================================================================


class Page(BaseModel):
    """A page registration: URL path, template identifier and template context."""

    model_config = ConfigDict(frozen=True)

    path: str
    template: str
    context: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def normalize_path(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("path"), str):
            path = data["path"].strip("/")
            if not path:
                raise ValueError("page path must not be empty")
            data = {**data, "path": path}
        return data

    @property
    def url(self) -> str:
        return f"/{self.path}"
