import pytest

from okofeed.config import FeedConfig, Settings, get_settings

API_URL = "https://api.oko.press/articles"


def make_node(
    node_id: str = "42",
    title: str = "Test",
    publish_at: str = "2023-05-01T10:00:00",
    slug: str = "test-article",
    image: str = "/img.jpg",
) -> dict:
    return {
        "id": node_id,
        "title": title,
        "publish_at": publish_at,
        "seo_fields": {"slug": slug},
        "featured_image": {"original_url": image},
    }


@pytest.fixture
def feed_config() -> FeedConfig:
    return FeedConfig(url=API_URL, thumbnail_compression="https://proxy/", interval=5)


@pytest.fixture
def settings() -> Settings:
    return Settings(server_host="127.0.0.1", shutdown_grace_period=1.0)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
