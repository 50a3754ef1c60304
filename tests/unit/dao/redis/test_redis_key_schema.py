"""Unit tests for the RedisKeySchema class in redis_key_schema.py.

Test coverage includes:

1. Reverse record key generation
2. Forward record key generation
3. Default prefix behavior
4. Invalid prefix types
"""

import pytest

from linkshortener.dao.redis.redis_key_schema import RedisKeySchema


# -------------------------------
# 1. Reverse record key generation
# -------------------------------


@pytest.mark.parametrize(
    'shortcode, expected',
    [
        ('abc123', 'linkshortener:test:urls:abc123'),
        ('XyZ789', 'linkshortener:test:urls:XyZ789'),
    ],
)
def test_link_url_key(shortcode, expected):
    """Ensure link_url_key() generates prefixed reverse record keys."""
    keys = RedisKeySchema(prefix='linkshortener:test')
    assert keys.link_url_key(shortcode) == expected


# -------------------------------
# 2. Forward record key generation
# -------------------------------


@pytest.mark.parametrize(
    'target, expected',
    [
        ('https://example.com', 'linkshortener:test:urls:target:https://example.com'),
        ('https://example.com/a?b=c:d', 'linkshortener:test:urls:target:https://example.com/a?b=c:d'),
    ],
)
def test_target_key(target, expected):
    """Ensure target_key() generates prefixed forward record keys."""
    keys = RedisKeySchema(prefix='linkshortener:test')
    assert keys.target_key(target) == expected


def test_forward_and_reverse_keys_never_clash():
    """A shortcode spelled 'target' must not share a key with any forward record."""
    keys = RedisKeySchema()
    assert keys.link_url_key('target') == 'urls:target'
    assert keys.target_key('') != keys.link_url_key('target')


# -------------------------------
# 3. Default prefix behavior
# -------------------------------


def test_keys_without_prefix():
    """Confirm keys are not prefixed when no prefix is provided."""
    keys = RedisKeySchema()
    assert keys.link_url_key('abc123') == 'urls:abc123'
    assert keys.target_key('https://example.com') == 'urls:target:https://example.com'


# -------------------------------
# 4. Invalid prefix types
# -------------------------------


@pytest.mark.parametrize('prefix', [123, ['a'], {'a': 1}])
def test_invalid_prefix_type(prefix):
    """Ensure improper prefix types raise TypeError."""
    with pytest.raises(TypeError, match='Prefix must be of type string'):
        RedisKeySchema(prefix=prefix)
