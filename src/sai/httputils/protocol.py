"""Wire-level names for HTTP methods, headers, and link relations."""

from enum import Enum
from http import HTTPStatus
from typing import Optional

from sai.httputils.namespaces import ldp, solid

LDP_BASIC_CONTAINER = str(ldp.BasicContainer)
LDP_CONTAINER = str(ldp.Container)
LDP_RESOURCE = str(ldp.Resource)


class HttpMethod(Enum):
    GET = 'GET'
    HEAD = 'HEAD'
    POST = 'POST'
    PUT = 'PUT'
    PATCH = 'PATCH'
    DELETE = 'DELETE'
    OPTIONS = 'OPTIONS'

    def __str__(self):
        return self.value


class HttpHeader(Enum):
    """HTTP header names. Lookup by value ignores case:

    ```pycon
    >>> HttpHeader('content-type')
    <HttpHeader.CONTENT_TYPE: 'Content-Type'>
    ```
    """
    ACCEPT = 'Accept'
    AUTHORIZATION = 'Authorization'
    CONTENT_TYPE = 'Content-Type'
    DPOP = 'DPoP'
    IF_MATCH = 'If-Match'
    IF_NONE_MATCH = 'If-None-Match'
    LINK = 'Link'
    LOCATION = 'Location'
    SLUG = 'Slug'
    USER_AGENT = 'User-Agent'
    WWW_AUTHENTICATE = 'WWW-Authenticate'

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None

    def __str__(self):
        return self.value


class LinkRelation(Enum):
    """Relation types used in `Link` headers. See
    [RFC 8288](https://www.rfc-editor.org/rfc/rfc8288.html)."""
    TYPE = 'type'
    ACL = 'acl'
    DESCRIBED_BY = 'describedby'
    DESCRIBES = 'describes'
    MANAGED_BY = 'managedBy'
    MANAGES = 'manages'
    STORAGE_DESCRIPTION = str(solid.storageDescription)

    def __str__(self):
        return self.value


def reason_phrase(status_code: int, reason: Optional[str] = None) -> str:
    """Returns `reason` if it is set, otherwise the standard reason phrase for
    `status_code` (or the empty string for a nonstandard status code)."""
    if reason:
        return reason
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ''
