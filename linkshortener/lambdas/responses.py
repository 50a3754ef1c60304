"""API Gateway (Lambda proxy) response builders shared by the lambda handlers"""

import json


def response_200(body: dict) -> dict:
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body),
    }


def response_302(*, location: str) -> dict:
    return {
        'statusCode': 302,
        'headers': {'Location': location},
        'body': '',
    }


def response_400(message: str | None = None, error_code: str | None = None) -> dict:
    base = 'Bad Request'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 400,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body),
    }


def response_404_text(message: str = 'URL not found') -> dict:
    return {
        'statusCode': 404,
        'headers': {'Content-Type': 'text/plain; charset=utf-8'},
        'body': message,
    }


def response_500(message: str | None = None, error_code: str | None = None) -> dict:
    base = 'Internal Server Error'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 500,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body),
    }


def response_503(*, retry_after: int, message: str | None = None, error_code: str | None = None) -> dict:
    body = {'message': message or 'Service Unavailable'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 503,
        'headers': {
            'Content-Type': 'application/json',
            'Retry-After': str(retry_after),
        },
        'body': json.dumps(body),
    }
