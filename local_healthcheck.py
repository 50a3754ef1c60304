"""Check that a Redis server is running on your local machine and usable by the DAO

Connection details:
- redis: 127.0.0.1:6379

Shortens and resolves a throwaway URL under the "linkshortener:healthcheck" prefix.
Expect to see "OK <shortcode> -> <url>" printed in your local console.
"""

from linkshortener.dao.redis import ShortURLRedisDAO
from linkshortener.service import ShortenerService


def main():
    dao = ShortURLRedisDAO(redis_host='localhost', redis_port=6379, redis_db=0, prefix='linkshortener:healthcheck')
    service = ShortenerService(dao)

    target = 'https://example.com/healthcheck'
    shortcode = service.shorten(target)
    assert service.shorten(target) == shortcode
    print(f'OK {shortcode} -> {service.resolve(shortcode)}')


if __name__ == '__main__':
    main()
