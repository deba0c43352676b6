import pytest

from sai.httputils.content_types import (
    ContentType,
    DEFAULT_RDF_CONTENT_TYPE,
    RDF_CONTENT_TYPES,
    get_rdflib_format,
    is_rdf_serialization,
)
from sai.httputils.exceptions import ConversionError


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        ('text/turtle', ContentType.TEXT_TURTLE),
        ('application/rdf+xml', ContentType.RDF_XML),
        ('application/n-triples', ContentType.N_TRIPLES),
        ('application/ld+json', ContentType.LD_JSON),
        ('text/html', ContentType.TEXT_HTML),
        ('image/png', ContentType.IMAGE_PNG),
        # parameters and case are ignored
        ('text/turtle; charset=utf-8', ContentType.TEXT_TURTLE),
        ('Application/LD+JSON;profile="http://www.w3.org/ns/json-ld#compacted"', ContentType.LD_JSON),
        # anything unrecognized falls back to a generic binary type
        ('cool/web', ContentType.OCTET_STREAM),
        ('', ContentType.OCTET_STREAM),
        (None, ContentType.OCTET_STREAM),
    ]
)
def test_resolve(value, expected):
    assert ContentType.resolve(value) is expected


def test_lookup_by_value():
    assert ContentType('text/turtle') is ContentType.TEXT_TURTLE
    with pytest.raises(ValueError):
        ContentType('cool/web')


def test_values_are_unique():
    values = [member.value for member in ContentType]
    assert len(values) == len(set(values))


@pytest.mark.parametrize(
    ('content_type', 'expected'),
    [
        (ContentType.TEXT_TURTLE, True),
        (ContentType.RDF_XML, True),
        (ContentType.N_TRIPLES, True),
        (ContentType.LD_JSON, True),
        (ContentType.N_QUADS, False),
        (ContentType.JSON, False),
        (ContentType.TEXT_HTML, False),
        (ContentType.OCTET_STREAM, False),
    ]
)
def test_is_rdf_serialization(content_type, expected):
    assert is_rdf_serialization(content_type) is expected
    assert content_type.is_rdf is expected


def test_rdf_content_types():
    assert RDF_CONTENT_TYPES == {
        ContentType.TEXT_TURTLE,
        ContentType.RDF_XML,
        ContentType.N_TRIPLES,
        ContentType.LD_JSON,
    }


def test_default_rdf_content_type():
    assert DEFAULT_RDF_CONTENT_TYPE is ContentType.TEXT_TURTLE


def test_rdflib_format():
    assert get_rdflib_format(ContentType.TEXT_TURTLE) == 'turtle'
    assert get_rdflib_format(ContentType.LD_JSON) == 'json-ld'
    assert ContentType.N_TRIPLES.rdflib_format == 'nt'
    assert ContentType.TEXT_HTML.rdflib_format is None


def test_rdflib_format_not_rdf():
    with pytest.raises(ConversionError):
        get_rdflib_format(ContentType.IMAGE_PNG)


def test_str():
    assert str(ContentType.RDF_XML) == 'application/rdf+xml'
