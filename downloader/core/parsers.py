# downloader/core/parsers.py
"""
Per-platform response parsing.

The aggregation API has no shared schema: every endpoint returns its own
loosely-typed JSON.  Each platform gets a pydantic model describing only
the fields we read, and a ``parse_*`` function that validates the raw
payload, picks the media URL and builds the caption.

Any missing or malformed required field becomes ``MediaNotFoundError``
*before* caption formatting starts.
"""
from __future__ import annotations

from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from downloader.core.domain import ContentKind, MediaLink, ParsedMedia
from downloader.core.errors import MediaNotFoundError
from downloader.core.formatting import caption_block, convert_miles

ModelT = TypeVar("ModelT", bound=BaseModel)


def _validate(model: type[ModelT], payload: Any) -> ModelT:
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        where = ".".join(str(part) for part in first["loc"]) or "response"
        raise MediaNotFoundError(
            f"Invalid API response: missing or malformed '{where}'"
        ) from exc


def _metric(value: Any) -> Any:
    return "-" if value is None else convert_miles(value)


def _text(value: Any) -> Any:
    return "-" if value in (None, "") else value


# ============================================================================
# TIKTOK
# ============================================================================

class TikTokAuthor(BaseModel):
    nickname: Any = None
    username: Any = None


class TikTokMusic(BaseModel):
    title: Any = None
    author: Any = None
    duration: Any = None


class TikTokMediaVariant(BaseModel):
    hd: Optional[str] = None
    org: Optional[str] = None


class TikTokMeta(BaseModel):
    media: list[TikTokMediaVariant]


class TikTokPost(BaseModel):
    author: TikTokAuthor = TikTokAuthor()
    duration: Any = None
    repro: Any = None
    like: Any = None
    share: Any = None
    comment: Any = None
    download: Any = None
    music: TikTokMusic = TikTokMusic()
    meta: TikTokMeta


class TikTokResponse(BaseModel):
    data: TikTokPost


def parse_tiktok(payload: Any) -> ParsedMedia:
    post = _validate(TikTokResponse, payload).data

    if not post.meta.media:
        raise MediaNotFoundError("No media found in this TikTok post")
    variant = post.meta.media[0]
    media_url = variant.hd or variant.org
    if not media_url:
        raise MediaNotFoundError("No valid media URL found in API response")

    caption = (
        caption_block("TikTok Download", [
            ("Name", _text(post.author.nickname)),
            ("Username", _text(post.author.username)),
            ("Duration", f"{_text(post.duration)}s"),
            ("Plays", _metric(post.repro)),
            ("Likes", _metric(post.like)),
            ("Shares", _metric(post.share)),
            ("Comments", _metric(post.comment)),
            ("Downloads", _metric(post.download)),
        ])
        + "\n\n"
        + caption_block("Music Info", [
            ("Music", _text(post.music.title)),
            ("Author", _text(post.music.author)),
            ("Duration", f"{_text(post.music.duration)}s"),
        ])
    )

    return ParsedMedia(
        platform="tiktok",
        caption=caption,
        media_url=media_url,
        content_kind=ContentKind.VIDEO,
    )


# ============================================================================
# INSTAGRAM
# ============================================================================

INSTAGRAM_HEADER = "*亗 I N S T A G R A M*\n\n"


class InstagramItem(BaseModel):
    type: Any = None
    url: str


class InstagramResponse(BaseModel):
    data: list[InstagramItem]


def instagram_endpoint(url: str) -> str:
    """Stories live behind their own endpoint."""
    return "igstories" if "/stories/" in url else "instagram"


def parse_instagram(payload: Any) -> ParsedMedia:
    items = _validate(InstagramResponse, payload).data
    if not items:
        raise MediaNotFoundError("No media found in this Instagram post")

    links = [
        MediaLink(type="media" if item.type in (None, "") else str(item.type), url=item.url)
        for item in items
    ]
    listing = INSTAGRAM_HEADER + "".join(
        f"*› Media {index} [{link.type}]:* {link.url}\n"
        for index, link in enumerate(links, start=1)
    )

    return ParsedMedia(platform="instagram", caption=listing, items=links)


# ============================================================================
# SOUNDCLOUD
# ============================================================================

class SoundCloudTrack(BaseModel):
    title: Any = None
    author: Any = None
    playbacks: Any = None
    likes: Any = None
    comments: Any = None
    download: str


class SoundCloudResponse(BaseModel):
    data: SoundCloudTrack


def parse_soundcloud(payload: Any) -> ParsedMedia:
    track = _validate(SoundCloudResponse, payload).data
    if not track.download:
        raise MediaNotFoundError("No download link found for this track")

    caption = caption_block("Soundcloud Download", [
        ("Title", _text(track.title)),
        ("Artist", _text(track.author)),
        ("Plays", _metric(track.playbacks)),
        ("Likes", _metric(track.likes)),
        ("Comments", _metric(track.comments)),
    ])

    return ParsedMedia(
        platform="soundcloud",
        caption=caption,
        media_url=track.download,
        content_kind=ContentKind.AUDIO,
    )


# ============================================================================
# TWITTER / X
# ============================================================================

NO_TWEET_MEDIA = "This tweet does not contain any media."
UNSUPPORTED_TWEET_MEDIA = "Unsupported media type or media not available."


class TwitterAuthor(BaseModel):
    username: Any = None


class TwitterVideo(BaseModel):
    url: Optional[str] = None


class TwitterMedia(BaseModel):
    type: Any = None
    videos: list[TwitterVideo] = []
    image: Optional[str] = None


class TwitterPost(BaseModel):
    author: TwitterAuthor = TwitterAuthor()
    description: Any = None
    view: Any = None
    favorite: Any = None
    retweet: Any = None
    media: Optional[list[TwitterMedia]] = None


class TwitterResponse(BaseModel):
    data: TwitterPost


def _select_tweet_media(media: TwitterMedia) -> tuple[Optional[str], ContentKind]:
    # Variants are ordered by quality, best last
    if media.type == "video" and media.videos:
        return media.videos[-1].url, ContentKind.VIDEO
    if media.type == "photo" and media.image:
        return media.image, ContentKind.IMAGE
    if media.type == "gif" and media.videos:
        return media.videos[0].url, ContentKind.VIDEO
    return None, ContentKind.VIDEO


def parse_twitter(payload: Any) -> ParsedMedia:
    post = _validate(TwitterResponse, payload).data

    if not post.media:
        raise MediaNotFoundError(NO_TWEET_MEDIA, soft=True)

    media_url, kind = _select_tweet_media(post.media[0])
    if not media_url:
        raise MediaNotFoundError(UNSUPPORTED_TWEET_MEDIA, soft=True)

    # t.co links trail the text; keep only the prose before the first one
    description = "" if post.description is None else str(post.description)
    description = description.split("https://")[0].strip()

    caption = caption_block("Twitter Download", [
        ("Author", f"@{_text(post.author.username)}"),
        ("Description", _text(description)),
        ("Views", _metric(post.view)),
        ("Likes", _metric(post.favorite)),
        ("Retweets", _metric(post.retweet)),
    ])

    return ParsedMedia(
        platform="twitter",
        caption=caption,
        media_url=media_url,
        content_kind=kind,
    )


# ============================================================================
# FACEBOOK
# ============================================================================

class FacebookQuality(BaseModel):
    hd: Optional[str] = None
    sd: Optional[str] = None


class FacebookVideo(BaseModel):
    title: Any = None
    urls: list[FacebookQuality]


def parse_facebook(payload: Any) -> ParsedMedia:
    urls = payload.get("urls") if isinstance(payload, dict) else None
    if not isinstance(urls, list) or not urls:
        raise MediaNotFoundError("Invalid API response: No media URLs found")

    video = _validate(FacebookVideo, payload)

    # HD sits in the first entry, SD in the second
    media_url = video.urls[0].hd or (video.urls[1].sd if len(video.urls) > 1 else None)
    if not media_url:
        raise MediaNotFoundError("No valid media URL found in API response")

    caption = caption_block("Facebook video Download", [
        ("Title", video.title if video.title not in (None, "") else "No title available"),
    ])

    return ParsedMedia(
        platform="facebook",
        caption=caption,
        media_url=media_url,
        content_kind=ContentKind.VIDEO,
    )
