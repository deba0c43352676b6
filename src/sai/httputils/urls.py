"""Conversions between the string, URL (`urlobject.URLObject`), and URI
(`rdflib.URIRef`) forms of resource locators.

Every function raises an `ArgumentError` when given `None`, and a
`ConversionError` when given a locator that cannot be converted; no other
exception type escapes from this module.
"""

import logging
import re
from typing import Any, Union

from rdflib import URIRef
from urlobject import URLObject

from sai.httputils.exceptions import ArgumentError, ConversionError

logger = logging.getLogger(__name__)

URL_SCHEMES = frozenset(('http', 'https', 'ftp', 'file', 'jar', 'mailto'))
"""Schemes that can be used as URLs"""

NETWORK_SCHEMES = frozenset(('http', 'https', 'ftp'))
"""Schemes that require an authority (host) component"""

# characters that may never appear unescaped in a URI (RFC 3986, section 2),
# including C1 controls and Unicode whitespace such as NO-BREAK SPACE, and
# percent signs that do not begin a valid escape sequence
INVALID_URI_CHARACTERS = re.compile(r'[\x00-\x20\x7f-\x9f\s<>"{}|\\^`]|%(?![0-9A-Fa-f]{2})')

Locator = Union[URLObject, URIRef, str]


def _scheme(value: str) -> str:
    try:
        return URLObject(value).scheme.lower()
    except ValueError as e:
        raise ConversionError(f'Cannot parse <{value}>: {e}') from e


def _check_uri_syntax(value: str):
    match = INVALID_URI_CHARACTERS.search(value)
    if match:
        raise ConversionError(f'Illegal character {match.group()!r} at index {match.start()} in <{value}>')


def _check_url_syntax(value: str):
    scheme = _scheme(value)
    if not scheme:
        raise ConversionError(f'No scheme in <{value}>')
    if scheme not in URL_SCHEMES:
        raise ConversionError(f'Unknown protocol "{scheme}" in <{value}>')
    if scheme in NETWORK_SCHEMES:
        try:
            hostname = URLObject(value).hostname
        except ValueError as e:
            raise ConversionError(f'Cannot parse authority of <{value}>: {e}') from e
        if not hostname:
            raise ConversionError(f'No host in <{value}>')


def url_to_uri(url: Locator) -> URIRef:
    """Convert a URL to a URI, suitable for use as an identifier in a graph.

    Raises a `ConversionError` if the URL contains characters that are not
    permitted in a URI (e.g., an unescaped `<` in the query string).

    ```pycon
    >>> url_to_uri(URLObject('http://www.solidproject.org/'))
    rdflib.term.URIRef('http://www.solidproject.org/')
    ```
    """
    if url is None:
        raise ArgumentError('Must provide a URL to convert')
    value = str(url)
    _check_uri_syntax(value)
    if not _scheme(value):
        raise ConversionError(f'Cannot convert relative reference <{value}> to a URI')
    return URIRef(value)


def uri_to_url(uri: Locator) -> URLObject:
    """Convert a URI to a URL. Raises a `ConversionError` if the URI is
    not valid, or if its scheme is not one that can be used as a URL."""
    if uri is None:
        raise ArgumentError('Must provide a URI to convert')
    value = str(uri)
    _check_uri_syntax(value)
    _check_url_syntax(value)
    return URLObject(value)


def string_to_url(string: str) -> URLObject:
    """Parse a string as a URL. Raises a `ConversionError` if the string does
    not have a usable scheme, or lacks a host where its scheme requires one."""
    if string is None:
        raise ArgumentError('Must provide a string to convert')
    _check_url_syntax(str(string))
    return URLObject(string)


def request_url_to_uri(response: Any) -> URIRef:
    """The URL of the request that produced `response`, as a URI."""
    if response is None:
        raise ArgumentError('Must provide a response to get the request URL from')
    return url_to_uri(response.url)


def url_to_base(url: Locator) -> URLObject:
    """Returns the scheme, authority, and path of a URL, removing any query
    or fragment. A URL without query or fragment is returned as it is.

    ```pycon
    >>> url_to_base(URLObject('http://www.solidproject.org/folder/resource?something=value#frag'))
    URLObject('http://www.solidproject.org/folder/resource')
    ```
    """
    if url is None:
        raise ArgumentError('Must provide a URL to convert')
    url_to_uri(url)
    if not isinstance(url, URLObject):
        url = URLObject(url)
    try:
        # an empty query or fragment still counts, so look for the delimiters
        if '?' not in url and '#' not in url:
            return url
        return url.without_query().without_fragment()
    except ValueError as e:
        raise ConversionError(f'Unable to convert <{url}> to a base URL: {e}') from e


def _resolve_child(base: URLObject, child: str) -> URLObject:
    _check_uri_syntax(child)
    try:
        resolved = base.relative(child)
    except ValueError as e:
        raise ConversionError(f'Unable to append child "{child}" to URL path <{base}>: {e}') from e
    try:
        return uri_to_url(resolved)
    except ConversionError as e:
        raise ConversionError(f'Unable to append child "{child}" to URL path <{base}>: {e}') from e


def add_child_to_uri_path(base_uri: Locator, child: str) -> URIRef:
    """Resolve `child` against `base_uri` as a relative reference.

    ```pycon
    >>> add_child_to_uri_path(URIRef('http://example.org/'), 'child')
    rdflib.term.URIRef('http://example.org/child')
    ```
    """
    if base_uri is None:
        raise ArgumentError('Must provide a base URI to append to')
    if child is None:
        raise ArgumentError('Must provide a child to append')
    return url_to_uri(_resolve_child(uri_to_url(base_uri), child))


def add_child_to_url_path(base_url: Locator, child: str) -> URLObject:
    """Same as `add_child_to_uri_path()`, for the URL form."""
    if base_url is None:
        raise ArgumentError('Must provide a base URL to append to')
    if child is None:
        raise ArgumentError('Must provide a child to append')
    return _resolve_child(string_to_url(base_url), child)
