"""
Sample scraped records for tests.

Posts mirror the shapes real scrapers emit: TikTok video posts with
camelCase counters and {"name": ...} hashtags, Instagram posts with
plain string hashtags, and long-form text posts.
"""


def make_video_post(i: int, **extra) -> dict:
    """Create a TikTok-style video post."""
    post = {
        "caption": f"Night market run #{i} with @mina_eats",
        "videoUrl": f"https://cdn.example.com/v{i}.mp4",
        "covers": {"default": f"https://cdn.example.com/c{i}.jpg"},
        "playCount": 1000 * (i + 1),
        "diggCount": 100 * (i + 1),
        "commentCount": 10,
        "shareCount": 5,
        "duration": 15,
        "hashtags": [{"name": "streetfood"}, {"name": "seoul"}],
    }
    post.update(extra)
    return post


def make_document_post(i: int, length: int = 800) -> dict:
    """Create a long-form text post of exactly `length` characters."""
    return {
        "text": (f"Long read {i} about slow travel with @editor. " * 40)[:length],
        "hashtags": ["slowtravel"],
    }


def make_record(posts: list, platform: str = "tiktok", **extra) -> dict:
    """Wrap posts in a raw content record."""
    record = {"platform": platform, "data": posts}
    record.update(extra)
    return record
