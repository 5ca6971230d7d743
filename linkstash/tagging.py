from typing import List

from .platforms import Platform

MAX_TAGS = 4

DEFAULT_TAGS = {
    Platform.VIDEO: ["video", "tutorial", "education"],
    Platform.MICROBLOG: ["social", "discussion", "insights"],
    Platform.PROFESSIONAL: ["professional", "career", "business"],
    Platform.OTHER: ["web", "article", "resource"],
}

# (tag, keywords) in scan order
KEYWORD_CATEGORIES = [
    (
        "development",
        ["javascript", "react", "typescript", "css", "html", "node", "python",
         "development", "programming", "code", "tech", "software"],
    ),
    (
        "design",
        ["design", "ui", "ux", "interface", "user", "experience", "visual", "graphic"],
    ),
    (
        "business",
        ["business", "startup", "entrepreneur", "marketing", "strategy", "growth", "productivity"],
    ),
    (
        "career",
        ["career", "job", "interview", "resume", "professional", "leadership", "management"],
    ),
]


def generate_tags(title: str, description: str, platform: Platform) -> List[str]:
    """
    Platform defaults first, then one tag per keyword category whose
    keywords appear as substrings of the title/description.
    Capped at MAX_TAGS, never repeats a tag.
    """
    tags = list(DEFAULT_TAGS.get(platform, DEFAULT_TAGS[Platform.OTHER]))
    text = f"{title or ''} {description or ''}".lower()

    for tag, keywords in KEYWORD_CATEGORIES:
        if tag in tags:
            continue
        if any(keyword in text for keyword in keywords):
            tags.append(tag)

    return tags[:MAX_TAGS]
