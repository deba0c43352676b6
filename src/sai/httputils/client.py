"""Issue GET, PUT, and DELETE requests against a `requests.Session`.

The GET functions return the live `requests.Response`, opened with
`stream=True`. Its body is a one-shot stream, and the caller **must** close
the response when done with it (it can be used as a context manager):

```python
with get_resource(session, 'https://pod.example/data/') as response:
    for chunk in response.iter_content(8192):
        ...
```

The PUT and DELETE functions consume and close the response before
returning, and return a `ClosedResponse` carrying only the status and headers.
"""

import logging
from http import HTTPStatus
from typing import NamedTuple, Optional

from requests import Response, Session
from requests.exceptions import RequestException
from requests.structures import CaseInsensitiveDict
from requests.utils import parse_header_links

from sai.httputils.content_types import ContentType
from sai.httputils.exceptions import ArgumentError, TransportError, RequestError, NotFoundError
from sai.httputils.headers import Headers, HeadersLike, set_http_header
from sai.httputils.protocol import HttpHeader, HttpMethod, reason_phrase
from sai.httputils.urls import Locator, uri_to_url

logger = logging.getLogger(__name__)


class ClosedResponse(NamedTuple):
    """Status and headers of a response whose body has already been consumed
    and whose connection has been released."""

    url: str
    """URL of the request"""

    method: str
    """HTTP method of the request"""

    status_code: int
    """Numeric HTTP status code"""

    reason: str
    """Reason phrase"""

    headers: CaseInsensitiveDict
    """Response headers"""

    @classmethod
    def from_response(cls, response: Response) -> 'ClosedResponse':
        return cls(
            url=response.url,
            method=response.request.method if response.request is not None else '',
            status_code=response.status_code,
            reason=reason_phrase(response.status_code, response.reason),
            headers=CaseInsensitiveDict(response.headers),
        )

    @property
    def ok(self) -> bool:
        """`True` if the status code is less than 400."""
        return self.status_code < 400

    @property
    def links(self) -> dict[str, dict[str, str]]:
        """Parsed `Link` header, keyed by `rel` (or by URL, if there is no
        `rel`), the same as `requests.Response.links`."""
        links = {}
        header = self.headers.get(HttpHeader.LINK.value)
        if header:
            for link in parse_header_links(header):
                links[link.get('rel') or link.get('url')] = link
        return links

    def close(self):
        """Does nothing; there is nothing left to release."""
        pass

    def __str__(self):
        return f'{self.status_code} {self.reason}'


def check_response(response: Optional[Response]) -> Response:
    """Check that the transport actually produced a response."""
    if response is None:
        raise ArgumentError('Do not expect to receive a null response to an HTTP client request')
    return response


def get_response_failure_message(response: Response | ClosedResponse) -> str:
    """Failure message for a response, e.g. "HTTP 404 Not Found"."""
    return f'HTTP {response.status_code} {reason_phrase(response.status_code, response.reason)}'


def _check_arguments(session: Session, uri: Locator):
    if session is None:
        raise ArgumentError('Must provide an http client to access resource')
    if uri is None:
        raise ArgumentError('Must provide a target URI to access resource')


def _execute(
        session: Session,
        method: HttpMethod,
        uri: Locator,
        headers: Optional[HeadersLike] = None,
        body: Optional[bytes] = None,
) -> Response:
    url = uri_to_url(uri)
    request_headers = Headers(headers).to_dict() if headers is not None else None
    logger.debug(f'{method} {url}')
    try:
        response = session.request(method.value, str(url), headers=request_headers, data=body, stream=True)
    except RequestException as e:
        message = ' '.join(str(arg) for arg in e.args)
        logger.error(f'Failed to {method} <{url}>: {message}')
        raise TransportError(f'Failed to {method} remote resource at <{url}>: {message}') from e
    check_response(response)
    logger.debug(f'{response.status_code} {reason_phrase(response.status_code, response.reason)}')
    return response


def _execute_and_close(
        session: Session,
        method: HttpMethod,
        uri: Locator,
        headers: Optional[HeadersLike] = None,
        body: Optional[bytes] = None,
) -> ClosedResponse:
    response = _execute(session, method, uri, headers, body)
    with response:
        try:
            # read the rest of the body, so the connection is released cleanly
            response.content
        except RequestException as e:
            logger.error(f'Failed to read response to {method} <{response.url}>: {e}')
            raise TransportError(f'Failed to {method} remote resource at <{response.url}>: {e}') from e
        return ClosedResponse.from_response(response)


def get_resource(session: Session, uri: Locator, headers: Optional[HeadersLike] = None) -> Response:
    """Send an HTTP GET request for the resource at `uri`, and return the
    response whether it is successful or not. The response **must** be
    closed by the caller.

    Raises a `TransportError` if the request cannot be completed."""
    _check_arguments(session, uri)
    return _execute(session, HttpMethod.GET, uri, headers)


def get_required_resource(session: Session, uri: Locator, headers: Optional[HeadersLike] = None) -> Response:
    """Send an HTTP GET request for the resource at `uri`, and return the
    response. The response **must** be closed by the caller.

    Raises a `NotFoundError` if the server responds with 404, or a
    `RequestError` for any other unsuccessful response. In either case
    the response is closed before raising."""
    response = get_resource(session, uri, headers)
    if not response.ok:
        response.close()
        if response.status_code == HTTPStatus.NOT_FOUND:
            logger.warning(f'No resource found at <{response.url}>')
            raise NotFoundError(response, f'No resource found at <{response.url}>')
        else:
            logger.error(f'HTTP {response.request.method} operation failed on <{response.url}>: '
                         f'{get_response_failure_message(response)}')
            raise RequestError(response, f'HTTP {response.request.method} operation failed on <{response.url}>')
    return response


def put_resource(
        session: Session,
        uri: Locator,
        headers: Optional[HeadersLike] = None,
        body: Optional[str] = None,
        content_type: ContentType = None,
) -> ClosedResponse:
    """Send an HTTP PUT request with `body` to the resource at `uri`. A
    missing `body` is sent as the empty string. The `Content-Type` header is
    always set from `content_type`, replacing any `Content-Type` in `headers`.

    Raises a `TransportError` if the request cannot be completed."""
    _check_arguments(session, uri)
    if content_type is None:
        raise ArgumentError('Must provide a content type to create resource')
    if body is None:
        body = ''
    request_headers = set_http_header(HttpHeader.CONTENT_TYPE, content_type.value, headers)
    return _execute_and_close(session, HttpMethod.PUT, uri, request_headers, body.encode('utf-8'))


def delete_resource(session: Session, uri: Locator, headers: Optional[HeadersLike] = None) -> ClosedResponse:
    """Send an HTTP DELETE request to the resource at `uri`.

    Raises a `TransportError` if the request cannot be completed."""
    _check_arguments(session, uri)
    return _execute_and_close(session, HttpMethod.DELETE, uri, headers)
