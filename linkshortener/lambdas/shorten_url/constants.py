# Log events / error codes
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_URL = 'MISSING_URL'
INVALID_URL = 'INVALID_URL'
DOMAIN_LOOP = 'DOMAIN_LOOP'
ALLOCATION_EXHAUSTED = 'ALLOCATION_EXHAUSTED'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'

# InvalidInputError.kind -> error code
INVALID_INPUT_ERROR_CODES = {
    'missing-url': MISSING_URL,
    'invalid-url': INVALID_URL,
    'domain-loop': DOMAIN_LOOP,
}
