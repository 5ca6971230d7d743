from pathlib import Path

APP_NAME = "LinkStash"

HOST = "127.0.0.1"
PORT = 8765

DATA_DIR = Path("data")
LINKS_FILE = DATA_DIR / "saved_links.json"
PREFERENCES_FILE = DATA_DIR / "preferences.json"

OEMBED_ENDPOINT = "https://www.youtube.com/oembed"
OEMBED_TIMEOUT = 5

VIDEO_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
VIDEO_THUMBNAIL_URL = "https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"
VIDEO_PLACEHOLDER_THUMBNAIL = "https://www.youtube.com/img/desktop/yt_1200.png"
# LinkedIn posts reuse the same touch icon
SOCIAL_ICON_URL = "https://abs.twimg.com/icons/apple-touch-icon-192x192.png"
FAVICON_URL = "https://www.google.com/s2/favicons?domain={domain}&sz=128"
