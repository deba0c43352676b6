"""HTTP utilities for working with Linked Data resources: GET, PUT, and DELETE
of RDF and non-RDF resources, content type validation, header composition,
and URL/URI conversion."""

import importlib.metadata

from sai.httputils.client import (
    ClosedResponse,
    delete_resource,
    get_required_resource,
    get_resource,
    get_response_failure_message,
    put_resource,
)
from sai.httputils.content_types import (
    DEFAULT_RDF_CONTENT_TYPE,
    RDF_CONTENT_TYPES,
    ContentType,
    is_rdf_serialization,
)
from sai.httputils.exceptions import (
    ArgumentError,
    ContentValidationError,
    ConversionError,
    NotFoundError,
    RequestError,
    SaiHttpError,
    TransportError,
)
from sai.httputils.headers import (
    Headers,
    add_http_header,
    add_link_relation_header,
    get_link_relation_string,
    parse_link_headers,
    set_http_header,
)
from sai.httputils.protocol import LDP_BASIC_CONTAINER, LDP_CONTAINER, HttpHeader, HttpMethod, LinkRelation
from sai.httputils.rdf import (
    get_content_type,
    get_rdf_graph_from_response,
    get_rdf_resource,
    get_required_rdf_resource,
    put_rdf_container,
    put_rdf_resource,
)
from sai.httputils.urls import (
    add_child_to_uri_path,
    add_child_to_url_path,
    request_url_to_uri,
    string_to_url,
    uri_to_url,
    url_to_base,
    url_to_uri,
)

__version__ = importlib.metadata.version('sai-httputils')
