"""Building HTTP header sets, including
[RFC 8288](https://www.rfc-editor.org/rfc/rfc8288.html) `Link` headers.

None of the functions here modify the `Headers` they are given; each returns
a new `Headers` object.

```pycon
>>> headers = add_link_relation_header(LinkRelation.TYPE, 'http://www.w3.org/ns/ldp#BasicContainer')
>>> headers = add_link_relation_header(LinkRelation.ACL, 'https://pod.example/r.acl', headers)
>>> headers.get_all('link')
['<http://www.w3.org/ns/ldp#BasicContainer>; rel="type"', '<https://pod.example/r.acl>; rel="acl"']
```
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Optional, Union

from requests.utils import parse_header_links

from sai.httputils.exceptions import ArgumentError
from sai.httputils.protocol import HttpHeader, LinkRelation

logger = logging.getLogger(__name__)

HeaderName = Union[HttpHeader, str]
HeadersLike = Union['Headers', Mapping[str, str], Iterable[tuple[str, str]]]


def _name(name: HeaderName) -> str:
    return name.value if isinstance(name, HttpHeader) else str(name)


class Headers:
    """Immutable, ordered collection of HTTP header fields. A header name may
    appear more than once. Names are matched case-insensitively, and keep the
    case they were added with."""

    def __init__(self, fields: Optional[HeadersLike] = None):
        if fields is None:
            pairs = ()
        elif isinstance(fields, Headers):
            pairs = fields._fields
        elif isinstance(fields, Mapping):
            pairs = tuple((_name(k), str(v)) for k, v in fields.items())
        else:
            pairs = tuple((_name(k), str(v)) for k, v in fields)
        self._fields: tuple[tuple[str, str], ...] = pairs

    def __len__(self):
        return len(self._fields)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._fields)

    def __contains__(self, name):
        key = _name(name).lower()
        return any(n.lower() == key for n, _ in self._fields)

    def __eq__(self, other):
        if not isinstance(other, Headers):
            return NotImplemented
        return self._fields == other._fields

    def __hash__(self):
        return hash(self._fields)

    def __repr__(self):
        return f'{type(self).__name__}({list(self._fields)!r})'

    def get(self, name: HeaderName, default: Optional[str] = None) -> Optional[str]:
        """The last value for `name`, or `default` if there is none."""
        values = self.get_all(name)
        return values[-1] if values else default

    def get_all(self, name: HeaderName) -> list[str]:
        """Every value for `name`, in the order they were added."""
        key = _name(name).lower()
        return [v for n, v in self._fields if n.lower() == key]

    def names(self) -> list[str]:
        """Distinct header names, in order of first appearance."""
        seen = {}
        for n, _ in self._fields:
            seen.setdefault(n.lower(), n)
        return list(seen.values())

    def with_value(self, name: HeaderName, value: str) -> 'Headers':
        key = _name(name).lower()
        return Headers(tuple((n, v) for n, v in self._fields if n.lower() != key) + ((_name(name), value),))

    def with_added_value(self, name: HeaderName, value: str) -> 'Headers':
        return Headers(self._fields + ((_name(name), value),))

    def to_dict(self) -> dict[str, str]:
        """Header fields as a dictionary suitable for passing to `requests`.
        Multiple values for the same name are combined into one comma-separated
        field value, as permitted by
        [RFC 7230 §3.2.2](https://www.rfc-editor.org/rfc/rfc7230#section-3.2.2)."""
        return {name: ', '.join(self.get_all(name)) for name in self.names()}


def _headers(headers: Optional[HeadersLike]) -> Headers:
    return headers if isinstance(headers, Headers) else Headers(headers)


def set_http_header(name: HeaderName, value: str, headers: Optional[HeadersLike] = None) -> Headers:
    """Set the header `name` to `value`. If `headers` are given, they are
    included in the result, except for any existing values for `name`,
    which are replaced."""
    if name is None:
        raise ArgumentError('Must provide an http header to set')
    if value is None:
        raise ArgumentError('Must provide a value for http header')
    return _headers(headers).with_value(name, value)


def add_http_header(name: HeaderName, value: str, headers: Optional[HeadersLike] = None) -> Headers:
    """Add a `name` header with `value`. If `headers` are given, they are all
    included in the result, including any existing values for `name`."""
    if name is None:
        raise ArgumentError('Must provide an http header to add')
    if value is None:
        raise ArgumentError('Must provide a value for http header')
    return _headers(headers).with_added_value(name, value)


def get_link_relation_string(rel_type: Union[LinkRelation, str], target: str) -> str:
    """Format a link-value as `<target>; rel="type"`."""
    if rel_type is None:
        raise ArgumentError('Must provide a link relation type')
    if target is None:
        raise ArgumentError('Must provide a link relation target')
    rel = rel_type.value if isinstance(rel_type, LinkRelation) else rel_type
    return f'<{target}>; rel="{rel}"'


def add_link_relation_header(
        rel_type: Union[LinkRelation, str],
        target: str,
        headers: Optional[HeadersLike] = None,
) -> Headers:
    """Add a `Link` header with relation `rel_type` to `target`."""
    return add_http_header(HttpHeader.LINK, get_link_relation_string(rel_type, target), headers)


def parse_link_headers(link_headers: Iterable[str]) -> dict[str, list[str]]:
    """Parse one or more `Link` header values into a dictionary mapping each
    relation type to the list of its target URIs. Multiple `Link` headers are
    treated the same as comma-separated link-values in a single header.

    ```pycon
    >>> parse_link_headers(['<a>; rel="type", <b>; rel="acl"', '<c>; rel="type"'])
    {'type': ['a', 'c'], 'acl': ['b']}
    ```
    """
    links = {}
    for link_header in link_headers:
        for link in parse_header_links(link_header):
            if 'rel' in link and 'url' in link:
                targets = links.setdefault(link['rel'], [])
                if link['url'] not in targets:
                    targets.append(link['url'])
    return links
