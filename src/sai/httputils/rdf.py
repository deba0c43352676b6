"""Access RDF resources over HTTP, converting between response and request
bodies and `rdflib.Graph` objects."""

import json
import logging
from typing import Any, Optional, Union

from rdflib import Graph
from rdflib.resource import Resource
from requests import Response, Session
from requests.exceptions import RequestException

from sai.httputils.client import (
    ClosedResponse,
    check_response,
    get_resource,
    get_required_resource,
    put_resource,
)
from sai.httputils.content_types import ContentType, DEFAULT_RDF_CONTENT_TYPE, get_rdflib_format
from sai.httputils.exceptions import ArgumentError, ContentValidationError, ConversionError
from sai.httputils.headers import HeadersLike, add_link_relation_header
from sai.httputils.namespaces import get_manager
from sai.httputils.protocol import HttpHeader, LinkRelation, LDP_BASIC_CONTAINER
from sai.httputils.urls import Locator, request_url_to_uri

logger = logging.getLogger(__name__)

GraphResource = Union[Graph, Resource]


def get_content_type(response: Response | ClosedResponse) -> ContentType:
    """Get the `ContentType` of the response.

    Raises a `ContentValidationError` if the response has no `Content-Type`
    header. A header with an unrecognized value is **not** an error, and
    resolves to `ContentType.OCTET_STREAM`."""
    if response is None:
        raise ArgumentError('Must provide a response to get content type for')
    value = response.headers.get(HttpHeader.CONTENT_TYPE.value)
    if value is None:
        raise ContentValidationError(f'Content-Type header is missing from response for <{response.url}>')
    return ContentType.resolve(value)


def check_rdf_response(response: Response) -> Response:
    """Check that a successful `response` represents an RDF resource. Unsuccessful
    responses are returned as-is; it is up to the caller to decide whether that
    is an error.

    Raises a `ContentValidationError` (after closing the response) if the
    response has a missing or non-RDF `Content-Type`."""
    check_response(response)
    if not response.ok:
        return response
    try:
        content_type = get_content_type(response)
        if not content_type.is_rdf:
            raise ContentValidationError(f'Invalid Content-Type for RDF resource: {content_type}')
    except ContentValidationError as e:
        logger.error(f'<{response.url}> is not an RDF resource: {e}')
        response.close()
        raise
    return response


def get_rdf_resource(session: Session, uri: Locator, headers: Optional[HeadersLike] = None) -> Response:
    """Send an HTTP GET request for the RDF resource at `uri`. The response
    **must** be closed by the caller.

    Raises a `ContentValidationError` if the response is successful but is not
    an RDF resource."""
    return check_rdf_response(get_resource(session, uri, headers))


def get_required_rdf_resource(session: Session, uri: Locator, headers: Optional[HeadersLike] = None) -> Response:
    """Same as `get_rdf_resource()`, except that it raises a `NotFoundError`
    or `RequestError` if the resource cannot be retrieved."""
    return check_rdf_response(get_required_resource(session, uri, headers))


def get_graph_from_string(base_uri: Locator, body: str | bytes, content_type: ContentType) -> Graph:
    """Parse `body` as RDF in the serialization given by `content_type`,
    resolving relative URIs against `base_uri`."""
    rdf_format = get_rdflib_format(content_type)
    try:
        return Graph().parse(data=body, format=rdf_format, publicID=str(base_uri))
    except Exception as e:
        raise ConversionError(f'Failed to parse {content_type} for <{base_uri}>: {e}') from e


def _jsonld_context(jsonld_context: Optional[str]) -> Any:
    if not jsonld_context:
        return None
    if jsonld_context.lstrip().startswith(('{', '[')):
        try:
            context = json.loads(jsonld_context)
        except json.JSONDecodeError as e:
            raise ConversionError(f'Invalid JSON-LD context: {e}') from e
        # accept a whole context document as well as the bare context object
        if isinstance(context, dict) and '@context' in context:
            return context['@context']
        return context
    return jsonld_context


def get_string_from_graph(graph: Graph, content_type: ContentType, jsonld_context: Optional[str] = None) -> str:
    """Serialize `graph` in the serialization given by `content_type`. The
    `jsonld_context` is only used for JSON-LD, and may be either a JSON
    document (as a string) or the URL of one."""
    rdf_format = get_rdflib_format(content_type)
    if logger.isEnabledFor(logging.DEBUG):
        nsm = get_manager()
        logger.debug('Including statements:')
        for s, p, o in graph:
            logger.debug(f'  {s.n3(nsm)} {p.n3(nsm)} {o.n3(nsm)}')
    kwargs = {}
    if content_type is ContentType.LD_JSON:
        context = _jsonld_context(jsonld_context)
        if context is not None:
            kwargs['context'] = context
    try:
        return graph.serialize(format=rdf_format, **kwargs)
    except Exception as e:
        raise ConversionError(f'Unable to serialize graph as {content_type}: {e}') from e


def get_rdf_graph_from_response(response: Response) -> Graph:
    """Read the entire body of `response` and parse it into a graph, using the
    request URL as the base URI. The response is closed afterward.

    Raises a `ContentValidationError` if the response is not an RDF resource,
    or a `ConversionError` if the body cannot be read or parsed."""
    if response is None:
        raise ArgumentError('Must provide a response to get RDF graph from')
    with response:
        check_rdf_response(response)
        content_type = get_content_type(response)
        base_uri = request_url_to_uri(response)
        try:
            body = response.content
        except RequestException as e:
            logger.error(f'Failed to read response body from <{response.url}>: {e}')
            raise ConversionError(f'Failed to convert response body from <{response.url}> to rdf graph: {e}') from e
    return get_graph_from_string(base_uri, body, content_type)


def _graph_for(resource: Optional[GraphResource]) -> Optional[Graph]:
    if isinstance(resource, Resource):
        return resource.graph
    return resource


def put_rdf_resource(
        session: Session,
        uri: Locator,
        resource: Optional[GraphResource] = None,
        content_type: ContentType = DEFAULT_RDF_CONTENT_TYPE,
        jsonld_context: Optional[str] = None,
        headers: Optional[HeadersLike] = None,
) -> ClosedResponse:
    """Send an HTTP PUT request to `uri` with the serialized `resource` as its
    body. `resource` may be a `Graph`, or an rdflib `Resource` (in which case
    its entire graph is sent). If `resource` is `None`, the body is empty.

    Raises a `ConversionError` if the graph cannot be serialized."""
    if content_type is None:
        raise ArgumentError('Must provide a content-type for the PUT request on an RDF document')
    graph = _graph_for(resource)
    body = ''
    if graph is not None:
        body = get_string_from_graph(graph, content_type, jsonld_context)
    return put_resource(session, uri, headers, body, content_type)


def put_rdf_container(
        session: Session,
        uri: Locator,
        resource: Optional[GraphResource] = None,
        content_type: ContentType = DEFAULT_RDF_CONTENT_TYPE,
        jsonld_context: Optional[str] = None,
) -> ClosedResponse:
    """Same as `put_rdf_resource()`, but with a `Link` header declaring the
    resource to be an LDP Basic Container."""
    headers = add_link_relation_header(LinkRelation.TYPE, LDP_BASIC_CONTAINER)
    return put_rdf_resource(session, uri, resource, content_type, jsonld_context, headers)

