"""Registry of the content types recognized when negotiating HTTP resources,
and which of them are RDF serializations.

```pycon
>>> ContentType.resolve('text/turtle; charset=utf-8')
<ContentType.TEXT_TURTLE: 'text/turtle'>

>>> ContentType.resolve('cool/web')
<ContentType.OCTET_STREAM: 'application/octet-stream'>

>>> is_rdf_serialization(ContentType.LD_JSON)
True
```
"""

import logging
from enum import Enum
from typing import Optional

from sai.httputils.exceptions import ConversionError

logger = logging.getLogger(__name__)


class ContentType(Enum):
    TEXT_TURTLE = 'text/turtle'
    RDF_XML = 'application/rdf+xml'
    N_TRIPLES = 'application/n-triples'
    LD_JSON = 'application/ld+json'
    N_QUADS = 'application/n-quads'
    JSON = 'application/json'
    SPARQL_UPDATE = 'application/sparql-update'
    FORM_URL_ENCODED = 'application/x-www-form-urlencoded'
    TEXT_HTML = 'text/html'
    TEXT_PLAIN = 'text/plain'
    IMAGE_PNG = 'image/png'
    IMAGE_JPEG = 'image/jpeg'
    OCTET_STREAM = 'application/octet-stream'

    @classmethod
    def _missing_(cls, value):
        # media type names are case-insensitive, and parameters
        # (e.g., "; charset=utf-8") do not change the type
        if not isinstance(value, str):
            return None
        media_type = value.split(';', 1)[0].strip().lower()
        for member in cls:
            if member.value == media_type:
                return member
        return None

    @classmethod
    def resolve(cls, value: Optional[str]) -> 'ContentType':
        """Look up the member for a raw `Content-Type` header value. Never
        fails; anything unrecognized (including `None` or the empty string)
        resolves to `OCTET_STREAM`."""
        try:
            return cls(value)
        except ValueError:
            logger.debug(f'Unrecognized content type "{value}", treating as {cls.OCTET_STREAM.value}')
            return cls.OCTET_STREAM

    @property
    def is_rdf(self) -> bool:
        """Whether this content type is an RDF serialization."""
        return self in RDF_CONTENT_TYPES

    @property
    def rdflib_format(self) -> Optional[str]:
        """Name of the rdflib parser/serializer plugin for this content type,
        or `None` if it is not an RDF serialization."""
        return RDFLIB_FORMATS.get(self)

    def __str__(self):
        return self.value


RDFLIB_FORMATS = {
    ContentType.TEXT_TURTLE: 'turtle',
    ContentType.RDF_XML: 'xml',
    ContentType.N_TRIPLES: 'nt',
    ContentType.LD_JSON: 'json-ld',
}

RDF_CONTENT_TYPES = frozenset(RDFLIB_FORMATS)
"""Content types that are RDF serializations"""

DEFAULT_RDF_CONTENT_TYPE = ContentType.TEXT_TURTLE
"""Serialization used for writes when the caller does not specify one"""


def is_rdf_serialization(content_type: ContentType) -> bool:
    return content_type in RDF_CONTENT_TYPES


def get_rdflib_format(content_type: ContentType) -> str:
    """Returns the rdflib format name for an RDF content type. Raises a
    `ConversionError` if `content_type` is not an RDF serialization."""
    try:
        return RDFLIB_FORMATS[content_type]
    except KeyError as e:
        raise ConversionError(f'{content_type} is not an RDF serialization') from e
