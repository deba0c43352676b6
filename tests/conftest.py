"""Common test fixtures"""

from http import HTTPStatus
from io import BytesIO
from typing import Any, Mapping

import pytest
import requests
from requests import Request, Response, Session
from requests.structures import CaseInsensitiveDict

RDF_BODY = '''
  PREFIX rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#>
  PREFIX xsd: <http://www.w3.org/2001/XMLSchema#>
  PREFIX ldp: <http://www.w3.org/ns/ldp#>
  PREFIX ex: <http://www.example.com/ns/ex#>

  <#project>
    ex:uri </data/projects/project-1/#project> ;
    ex:id 6 ;
    ex:name "Great Validations" ;
    ex:created_at "2021-04-04T20:15:47.000Z"^^xsd:dateTime ;
    ex:hasMilestone </data/projects/project-1/milestone-3/#milestone> .
'''

RDF_CONTAINER_BODY = '''
  PREFIX ldp: <http://www.w3.org/ns/ldp#>
  PREFIX ex: <http://www.example.com/ns/ex#>

  <> ldp:contains </data/projects/project-1/milestone-3/> .

  <#project>
    ex:uri </data/projects/project-1/#project> ;
    ex:name "Great Validations" .
'''

HTML_BODY = '<!DOCTYPE html><html><body><h1>Regular HTML Resource</h1></body></html>'


def build_response(
        url: str,
        status_code: int = 200,
        headers: Mapping[str, str] = None,
        body: bytes = b'',
        method: str = 'GET',
        raw: Any = None,
) -> Response:
    """Build a `requests.Response` without going through a socket."""
    response = Response()
    response.status_code = status_code
    response.reason = HTTPStatus(status_code).phrase
    response.headers = CaseInsensitiveDict(headers or {})
    response.url = url
    response.raw = raw if raw is not None else BytesIO(body)
    response.request = Request(method, url).prepare()
    return response


@pytest.fixture
def session() -> Session:
    return Session()


@pytest.fixture
def base_url() -> str:
    return 'http://pod.example.com'


@pytest.fixture
def monkeypatch_request(monkeypatch):
    def _monkeypatch_request(response):
        monkeypatch.setattr(requests.Session, 'request', lambda *args, **kwargs: response)
    return _monkeypatch_request


@pytest.fixture
def response_factory():
    return build_response


@pytest.fixture
def rdf_body() -> str:
    return RDF_BODY


@pytest.fixture
def rdf_container_body() -> str:
    return RDF_CONTAINER_BODY


@pytest.fixture
def html_body() -> str:
    return HTML_BODY
