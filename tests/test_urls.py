import pytest
from rdflib import URIRef
from urlobject import URLObject

from sai.httputils.exceptions import ArgumentError, ConversionError
from sai.httputils.urls import (
    add_child_to_uri_path,
    add_child_to_url_path,
    request_url_to_uri,
    string_to_url,
    uri_to_url,
    url_to_base,
    url_to_uri,
)

MALFORMED_URL = 'http://www.solidproject.org?q=something&something=<something+else>'


def test_convert_url_to_uri():
    url = URLObject('http://www.solidproject.org/')
    uri = url_to_uri(url)
    assert isinstance(uri, URIRef)
    assert uri == URIRef('http://www.solidproject.org/')
    assert uri_to_url(uri) == url


@pytest.mark.parametrize(
    'url',
    [
        MALFORMED_URL,
        'http://www.solidproject.org/some path',
        'http://www.solidproject.org/{template}',
        'http://www.solidproject.org/100%',
        'http://www.solidproject.org/no\xa0break',
        'http://www.solidproject.org/ideographic\u3000space',
        'http://www.solidproject.org/control\x85char',
        '/relative/path',
    ]
)
def test_fail_to_convert_url_to_uri(url):
    with pytest.raises(ConversionError):
        url_to_uri(URLObject(url))


@pytest.mark.parametrize(
    'url',
    [
        'http://www.solidproject.org/folder/resource?something=value&other=othervalue',
        'http://www.solidproject.org/folder/resource#somefragment',
        'http://www.solidproject.org/folder/resource#somefragment?something=value',
        'http://www.solidproject.org/folder/resource?something=value#somefragment',
        'http://www.solidproject.org/folder/resource',
        # empty query and fragment
        'http://www.solidproject.org/folder/resource?',
        'http://www.solidproject.org/folder/resource#',
        'http://www.solidproject.org/folder/resource?#',
    ]
)
def test_convert_url_to_base(url):
    expected = URLObject('http://www.solidproject.org/folder/resource')
    base = url_to_base(URLObject(url))
    assert base == expected
    assert url_to_base(base) == base


@pytest.mark.parametrize(
    'url',
    [
        'http://www.solidproject.org/',
        'https://localhost:8443/data/projects/',
        'https://user@pod.example.com/profile/card',
    ]
)
def test_url_to_base_without_query_or_fragment_is_unchanged(url):
    url = URLObject(url)
    assert url_to_base(url) is url


def test_url_to_base_keeps_port():
    assert url_to_base(URLObject('http://localhost:8080/data/?page=2')) == URLObject('http://localhost:8080/data/')


def test_url_to_base_accepts_string():
    assert url_to_base('http://www.solidproject.org/a#b') == URLObject('http://www.solidproject.org/a')


def test_fail_to_convert_url_to_base():
    with pytest.raises(ConversionError):
        url_to_base(URLObject(MALFORMED_URL))


def test_convert_string_to_url():
    url = string_to_url('http://www.solidproject.org')
    assert isinstance(url, URLObject)
    assert url == URLObject('http://www.solidproject.org')
    assert url.hostname == 'www.solidproject.org'


@pytest.mark.parametrize(
    'string',
    [
        'ddd:\\--solidproject_orgZq=something&something=<something+else>',
        'www.solidproject.org',
        'http://',
        'http://[::1/path',
        '',
    ]
)
def test_fail_to_convert_string_to_url(string):
    with pytest.raises(ConversionError):
        string_to_url(string)


def test_convert_uri_to_url():
    assert uri_to_url(URIRef('http://www.solidproject.org')) == URLObject('http://www.solidproject.org')


@pytest.mark.parametrize(
    'uri',
    [
        'somescheme://what/path',
        'urn:uuid:6e8bc430-9c3a-11d9-9669-0800200c9a66',
        MALFORMED_URL,
    ]
)
def test_fail_to_convert_uri_to_url(uri):
    with pytest.raises(ConversionError):
        uri_to_url(URIRef(uri))


@pytest.mark.parametrize(
    ('base', 'child', 'expected'),
    [
        ('http://www.solidproject.org/', 'child', 'http://www.solidproject.org/child'),
        ('http://www.solidproject.org/data/', 'child/', 'http://www.solidproject.org/data/child/'),
        ('http://www.solidproject.org/data/resource', 'sibling', 'http://www.solidproject.org/data/sibling'),
        ('http://www.solidproject.org/data/', '#fragment', 'http://www.solidproject.org/data/#fragment'),
    ]
)
def test_add_child_to_uri_path(base, child, expected):
    added = add_child_to_uri_path(URIRef(base), child)
    assert isinstance(added, URIRef)
    assert str(added) == expected


def test_add_child_to_url_path():
    added = add_child_to_url_path(URLObject('http://www.solidproject.org/'), 'child')
    assert isinstance(added, URLObject)
    assert added == URLObject('http://www.solidproject.org/child')


@pytest.mark.parametrize('child', ['somescheme://what/', 'child<with>brackets', 'a child', 'a\xa0child'])
def test_fail_to_add_child_to_uri_path(child):
    with pytest.raises(ConversionError):
        add_child_to_uri_path(URIRef('http://www.solidproject.org/'), child)
    with pytest.raises(ConversionError):
        add_child_to_url_path(URLObject('http://www.solidproject.org/'), child)


def test_request_url_to_uri(response_factory):
    response = response_factory('http://www.solidproject.org/resource')
    assert request_url_to_uri(response) == URIRef('http://www.solidproject.org/resource')


@pytest.mark.parametrize(
    'function',
    [url_to_uri, uri_to_url, string_to_url, url_to_base, request_url_to_uri]
)
def test_missing_argument(function):
    with pytest.raises(ArgumentError):
        function(None)


def test_add_child_missing_arguments():
    with pytest.raises(ArgumentError):
        add_child_to_uri_path(None, 'child')
    with pytest.raises(ArgumentError):
        add_child_to_uri_path(URIRef('http://www.solidproject.org/'), None)
