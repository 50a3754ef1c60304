import json
from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from linkshortener.types import LambdaEvent, LambdaContext, LambdaConfiguration
from linkshortener.lambdas.redirect_url import app
from linkshortener.models import ShortURLModel
from linkshortener.dao.base import ShortURLBaseDAO
from linkshortener.dao.exceptions import DataStoreError, ShortURLNotFoundError


@pytest.fixture
def successful_event_302() -> LambdaEvent:
    return cast(LambdaEvent, {
        'resource': '/{shortId}',
        'pathParameters': {'shortId': 'abc123'},
        'httpMethod': 'GET',
        'path': '/abc123',
        'requestContext': {'resourcePath': '/{shortId}', 'httpMethod': 'GET', 'domainName': 'testhost:1000', 'stage': 'test'},
    })


@pytest.fixture
def bad_request_400() -> LambdaEvent:
    return cast(LambdaEvent, {
        'resource': '/{shortId}',
        'pathParameters': None,
        'httpMethod': 'GET',
        'path': '/',
        'requestContext': {'resourcePath': '/{shortId}', 'httpMethod': 'GET', 'domainName': 'testhost:1000', 'stage': 'test'},
    })


class TestRedirectUrlHandler:

    @pytest.fixture
    def context(self) -> LambdaContext:
        return cast(LambdaContext, {'function_name': 'redirect_url'})

    @pytest.fixture
    def config(self) -> LambdaConfiguration:
        return cast(LambdaConfiguration, {'redis': {'host': 'redis.test', 'port': 6379, 'db': 0}, 'shortener': {}})

    @pytest.fixture
    def short_url_dao(self) -> ShortURLBaseDAO:
        dao = MagicMock(spec=ShortURLBaseDAO)
        dao.get.return_value = ShortURLModel(
            target='https://example.com/blog/chuck-norris-is-awesome',
            shortcode='abc123',
        )
        return dao

    @pytest.fixture(autouse=True)
    def setup(
        self,
        monkeypatch: MonkeyPatch,
        context: LambdaContext,
        config: LambdaConfiguration,
        short_url_dao: ShortURLBaseDAO,
    ) -> None:
        # Patch Lambda dependencies
        monkeypatch.setattr(app, 'load_config', lambda *a, **kw: config)
        monkeypatch.setattr(app, 'ShortURLRedisDAO', lambda *a, **kw: short_url_dao)

        self.context = context
        self.config = config
        self.short_url_dao = short_url_dao

    def test_lambda_handler(self, successful_event_302: LambdaEvent) -> None:
        response = app.lambda_handler(successful_event_302, self.context)

        # Assert Lambda successfully redirects user to target URL
        assert response['statusCode'] == 302
        assert response['headers']['Location'] == 'https://example.com/blog/chuck-norris-is-awesome'
        assert response['body'] == ''
        self.short_url_dao.get.assert_called_once_with(shortcode='abc123')

    def test_lambda_handler_with_missing_path_parameters(self, bad_request_400: LambdaEvent) -> None:
        response = app.lambda_handler(bad_request_400, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['message'] == "Bad Request (missing 'shortId' in path)"
        assert body['errorCode'] == 'MISSING_SHORTCODE'
        self.short_url_dao.get.assert_not_called()

    def test_lambda_handler_with_unknown_shortcode(self, successful_event_302: LambdaEvent) -> None:
        self.short_url_dao.get.side_effect = ShortURLNotFoundError("Short URL with code 'abc123' not found.")

        response = app.lambda_handler(successful_event_302, self.context)

        assert response['statusCode'] == 404
        assert response['headers']['Content-Type'].startswith('text/plain')
        assert response['body'] == 'URL not found'

    def test_lambda_handler_with_empty_shortcode(self, successful_event_302: LambdaEvent) -> None:
        successful_event_302['pathParameters'] = {'shortId': ''}

        response = app.lambda_handler(successful_event_302, self.context)

        assert response['statusCode'] == 404
        assert response['body'] == 'URL not found'
        self.short_url_dao.get.assert_not_called()

    def test_lambda_handler_with_store_unavailable(self, successful_event_302: LambdaEvent) -> None:
        self.short_url_dao.get.side_effect = DataStoreError("Can't connect to Redis at redis.test:6379/0.")

        response = app.lambda_handler(successful_event_302, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body == {'message': 'Internal Server Error', 'errorCode': 'STORE_UNAVAILABLE'}

    def test_lambda_handler_with_missing_config(self, monkeypatch: MonkeyPatch, successful_event_302: LambdaEvent) -> None:
        def missing_config(*args, **kwargs):
            raise KeyError("Missing required environment variables: 'APPCONFIG_APP_ID'")

        monkeypatch.setattr(app, 'load_config', missing_config)

        response = app.lambda_handler(successful_event_302, self.context)

        assert response['statusCode'] == 500
        self.short_url_dao.get.assert_not_called()

    def test_lambda_handler_with_unexpected_error(self, monkeypatch: MonkeyPatch, successful_event_302: LambdaEvent) -> None:
        monkeypatch.setattr('linkshortener.utils.helpers.running_locally', lambda: False)
        self.short_url_dao.get.side_effect = RuntimeError('boom')

        response = app.lambda_handler(successful_event_302, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body['errorCode'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'
        assert 'boom' not in response['body']
