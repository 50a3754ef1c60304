import pytest

from linkshortener.models import ShortURLModel
from linkshortener.dao.base import ShortURLBaseDAO
from linkshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, TargetAlreadyShortenedError


class InMemoryShortURLDAO(ShortURLBaseDAO):
    """Dict-backed ShortURL DAO honoring the same insert contract as the Redis DAO."""

    def __init__(self):
        self.forward = {}  # target -> shortcode
        self.reverse = {}  # shortcode -> target
        self.inserts = 0

    def insert(self, short_url: ShortURLModel, **kwargs) -> 'InMemoryShortURLDAO':
        if short_url.target in self.forward:
            raise TargetAlreadyShortenedError(shortcode=self.forward[short_url.target])
        if short_url.shortcode in self.reverse:
            raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")
        self.forward[short_url.target] = short_url.shortcode
        self.reverse[short_url.shortcode] = short_url.target
        self.inserts += 1
        return self

    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        if shortcode not in self.reverse:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        return ShortURLModel(target=self.reverse[shortcode], shortcode=shortcode)

    def find(self, target: str, **kwargs) -> ShortURLModel | None:
        if target not in self.forward:
            return None
        return ShortURLModel(target=target, shortcode=self.forward[target])


@pytest.fixture
def dao():
    return InMemoryShortURLDAO()
