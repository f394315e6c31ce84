from __future__ import annotations


class OkoFeedError(Exception):
    """Base class for every failure that should stop the process."""


class ConfigError(OkoFeedError):
    pass


class FetchError(OkoFeedError):
    pass


class UpstreamNetworkError(FetchError):
    pass


class UpstreamStatusError(FetchError):
    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"bad HTTP status {status_code} from {url}")
        self.status_code = status_code
        self.url = url


class UpstreamDecodeError(FetchError):
    pass


class TimestampParseError(OkoFeedError):
    def __init__(self, value: str) -> None:
        super().__init__(f"unrecognised publish timestamp: {value!r}")
        self.value = value


class FeedSerializationError(OkoFeedError):
    pass


class ListenerBindError(OkoFeedError):
    pass
