import base64
import binascii
import json
import logging
from typing import Any

from linkshortener.dao.redis import ShortURLRedisDAO
from linkshortener.dao.exceptions import DataStoreError
from linkshortener.exceptions import (
    AllocationExhaustedError,
    BadConfigurationError,
    InvalidInputError,
    StoreUnavailableError,
)
from linkshortener.service import ShortenerService
from linkshortener.utils import load_config, shortener_settings, get_short_url, request_domain, app_prefix
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.lambdas.responses import response_200, response_400, response_500, response_503
from linkshortener.lambdas.shorten_url.constants import (
    INVALID_JSON_BODY,
    MISSING_URL,
    INVALID_INPUT_ERROR_CODES,
    ALLOCATION_EXHAUSTED,
    STORE_UNAVAILABLE,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


def parse_body(event: dict[str, Any]) -> dict[str, Any]:
    """Decode the JSON request body of an API Gateway event

    Raises:
        ValueError: if the body isn't valid (base64-wrapped) JSON object
    """
    raw = event.get('body') or '{}'
    if event.get('isBase64Encoded'):
        try:
            raw = base64.b64decode(raw, validate=True).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValueError('body is not valid base64-encoded UTF-8') from e

    try:
        body = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError('body is not valid JSON') from e

    if not isinstance(body, dict):
        raise ValueError('body is not a JSON object')
    return body


@guarantee_500_response
def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract original URL from request body
    - Step 2: Reuse or allocate a shortcode (via ShortenerService)
    - Step 3: Respond to user with 200 success

    HTTP responses:
        200: Successful URL shortening
            shortId: shortcode of the long URL (reused if it was shortened before)
            shortUrl: full short URL
        400: Bad client request
            message: cause of bad request (invalid JSON, missing url, self-domain url)
            errorCode: machine readable cause
        500: Internal server error
            message: indicate the server experienced an internal error
        503: Service unavailable
            message: no free shortcode could be allocated, retry later

    Args:
        event (Dict[str, Any]):
            API Gateway event payload in Lambda Proxy format.
        context (Any):
            AWS Lambda context object containing runtime information.

    Returns:
        Dict[str, Any]:
            JSON-serializable response following API Gateway Lambda Proxy
            output format. Includes status code, headers, and response body.

    Example:
        >>> event = {'body': '{"url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['shortId']
        'a1b2c3d'
    """
    # 0- Get application's config
    try:
        app_config = load_config('shorten_url')
        settings = shortener_settings(app_config)
    except (KeyError, BadConfigurationError):
        logger.exception('Failed to load AppConfig for shorten URL function. Responding with 500.')
        return response_500()
    else:
        logger.debug('Assuming Redis as the backend database for short URLs')
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}

    # 1- Extract original URL from request body
    try:
        body = parse_body(event)
    except ValueError as e:
        logger.info('Invalid request body. Responding with 400.', extra={'event': INVALID_JSON_BODY, 'reason': str(e)})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)
    target_url = body.get('url')
    if target_url is None:
        logger.info("Missing 'url' in request body. Responding with 400.", extra={'event': MISSING_URL})
        return response_400(message="missing 'url' in JSON body", error_code=MISSING_URL)

    # 2- Reuse or allocate a shortcode
    try:
        short_url_dao = ShortURLRedisDAO(**redis_config, prefix=app_prefix())
        service = ShortenerService(
            short_url_dao,
            domain=settings.domain or request_domain(event),
            shortcode_length=settings.shortcode_length,
            max_attempts=settings.max_attempts,
        )
        shortcode = service.shorten(target_url)
    except InvalidInputError as e:
        error_code = INVALID_INPUT_ERROR_CODES.get(e.kind, MISSING_URL)
        logger.info('Rejected target URL. Responding with 400.', extra={'event': error_code, 'reason': str(e)})
        return response_400(message=str(e), error_code=error_code)
    except AllocationExhaustedError:
        logger.error('Shortcode allocation exhausted. Responding with 503.', extra={'event': ALLOCATION_EXHAUSTED})
        return response_503(retry_after=1, message='Could not allocate a short URL, try again', error_code=ALLOCATION_EXHAUSTED)
    except (StoreUnavailableError, DataStoreError):
        logger.exception('Data store unavailable. Responding with 500.', extra={'event': STORE_UNAVAILABLE})
        return response_500(error_code=STORE_UNAVAILABLE)

    # 3- Return successful response to user
    short_url = get_short_url(shortcode, event)
    logger.info('Shortened target URL. Responding with 200.', extra={'shortcode': shortcode, 'event': SHORTEN_SUCCESS})
    return response_200({'shortId': shortcode, 'shortUrl': short_url})
