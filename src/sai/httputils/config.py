"""Building the `requests.Session` used as the transport from configuration,
and setting up logging. The request and RDF functions never read
configuration themselves; these helpers are for applications that keep
their HTTP settings in a YAML file:

```yaml
HTTP:
  USER_AGENT: my-app/1.0
  SERVER_CERT: /etc/ssl/certs/pod-ca.pem
  HEADERS:
    Authorization: Bearer ${POD_TOKEN}
```

`${NAME}` placeholders are replaced with the value of the environment
variable `NAME`.
"""

import logging
import logging.config
import os
import re
from typing import Any, Mapping, NamedTuple, Optional, Union

import yaml
from requests import Session

from sai.httputils.headers import Headers, HeadersLike, add_http_header, set_http_header
from sai.httputils.protocol import HttpHeader

logger = logging.getLogger(__name__)

ENV_PLACEHOLDER = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*)\}')

CONFIG_KEYS = frozenset(('USER_AGENT', 'SERVER_CERT', 'HEADERS'))


def logging_options(level: str = 'INFO', transport_level: str = 'WARNING') -> dict[str, Any]:
    """A `logging.config.dictConfig()` dictionary that sends this library's
    log messages at `level` and above to stderr. Connection pool messages from
    `urllib3` ("Starting new HTTPS connection ...") go to the same handler at
    `transport_level`."""
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'request': {
                'format': '%(levelname)s|%(name)s|%(message)s'
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': 'DEBUG',
                'formatter': 'request',
                'stream': 'ext://sys.stderr'
            },
        },
        'loggers': {
            'sai': {
                'level': level,
                'handlers': ['console'],
                'propagate': False
            },
            'urllib3': {
                'level': transport_level,
                'handlers': ['console'],
                'propagate': False
            },
        },
    }


def configure_logging(level: str = 'INFO', options: Optional[Mapping[str, Any]] = None):
    """Apply `options`, or `logging_options(level)` if none are given."""
    logging.config.dictConfig(options or logging_options(level))


def substitute_env(value: Any, env: Optional[Mapping[str, str]] = None) -> Any:
    """Replace `${NAME}` placeholders in the strings of `value` (a string, or
    a list or dict nested to any depth) with the values from `env`, which
    defaults to `os.environ`. Placeholders with no value in `env` are kept,
    and a warning is logged for each."""
    if env is None:
        env = os.environ

    def _replace(match: re.Match) -> str:
        name = match.group(1)
        if name not in env:
            logger.warning(f'Environment variable ${{{name}}} not found')
            return match.group(0)
        return env[name]

    if isinstance(value, str):
        return ENV_PLACEHOLDER.sub(_replace, value)
    elif isinstance(value, list):
        return [substitute_env(item, env) for item in value]
    elif isinstance(value, dict):
        return {key: substitute_env(item, env) for key, item in value.items()}
    return value


class HttpConfig(NamedTuple):
    """Settings for the transport session."""

    user_agent: Optional[str] = None
    """Value of the `User-Agent` header"""

    server_cert: Optional[Union[str, bool]] = None
    """Path of the CA bundle used to verify the server certificate, or `False`
    to skip verification"""

    headers: Headers = Headers()
    """Additional headers sent with every request"""

    @classmethod
    def from_mapping(cls, config: Optional[Mapping[str, Any]]) -> 'HttpConfig':
        """Build from a dictionary with the keys `USER_AGENT`, `SERVER_CERT`,
        and `HEADERS`. Other keys are ignored, with a warning."""
        if not config:
            return cls()
        for key in sorted(set(config) - CONFIG_KEYS):
            logger.warning(f'Ignoring unknown HTTP configuration key "{key}"')
        user_agent = config.get('USER_AGENT')
        return cls(
            user_agent=str(user_agent) if user_agent is not None else None,
            server_cert=config.get('SERVER_CERT'),
            headers=Headers(config.get('HEADERS') or {}),
        )

    def session_headers(self, headers: Optional[HeadersLike] = None) -> Headers:
        """The configured headers, added to `headers`. A configured user agent
        replaces any `User-Agent` header."""
        combined = Headers(headers)
        for name in self.headers.names():
            first, *rest = self.headers.get_all(name)
            combined = set_http_header(name, first, combined)
            for value in rest:
                combined = add_http_header(name, value, combined)
        if self.user_agent is not None:
            combined = set_http_header(HttpHeader.USER_AGENT, self.user_agent, combined)
        return combined


def load_config(filename: str, section: str = 'HTTP') -> HttpConfig:
    """Read an `HttpConfig` from the `section` of a YAML file, substituting
    environment variables. If the file has no such section, the whole file is
    used."""
    with open(filename) as file:
        config = substitute_env(yaml.safe_load(file)) or {}
    return HttpConfig.from_mapping(config.get(section, config))


def create_session(
        config: Optional[Union[HttpConfig, Mapping[str, Any]]] = None,
        session: Optional[Session] = None,
) -> Session:
    """Configure a `requests.Session` for use as the transport. `config` may
    be an `HttpConfig` or a dictionary accepted by `HttpConfig.from_mapping()`.
    If no `session` is given, a new one is created.

    Authentication is not configured here; set it on the session directly."""
    if not isinstance(config, HttpConfig):
        config = HttpConfig.from_mapping(config)
    if session is None:
        session = Session()
    headers = config.session_headers(session.headers)
    session.headers.clear()
    session.headers.update(headers.to_dict())
    if config.server_cert is not None:
        session.verify = config.server_cert
    logger.debug(f'Created HTTP session with headers {headers.names()}')
    return session
