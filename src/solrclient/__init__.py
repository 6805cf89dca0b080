# -*- coding: utf-8 -*-
#
# Copyright (C) 2015-2026 Dubalu LLC. All rights reserved.
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
# THE SOFTWARE.
#
"""Apache Solr Python client library.

Provides the ``Client`` class for talking to a Solr server over its HTTP
JSON API, and the ``Query`` builder for search parameters. Search-family
endpoints (select, terms, spell, mlt, suggest, ping) are sent as GET
requests with a URL query string; update, delete and commit operations are
sent as POST requests with a JSON body.

Every operation supports two calling conventions:

* Without a callback it returns an awaitable resolving to the parsed JSON
  response (or raising the error).
* With a ``callback(error, result)`` the request is run and the callback
  is invoked exactly once, error first. Inside a running event loop the
  request is scheduled as a task and the task is returned; otherwise the
  request runs to completion before the call returns.

Responses are returned as parsed, even when Solr answers with an error
status: the error body is data for the caller to inspect.

The request timeout (milliseconds) is resolved on every call from the
per-call ``timeout`` argument, then ``ClientConfig.timeout``, then the
``SOLR_TIMEOUT`` environment variable, then 20000. Setting
``SOLR_PERFORMANCE_LOGS=true`` logs the duration of every request.

Example:
    >>> from solrclient import Client
    >>> client = Client(core='books')
    >>> query = client.query().q({'title': 'solr'}).rows(10)
    >>> res = await client.search(query)
    >>> res.response.numFound
    42
"""
from __future__ import annotations

import os
import json
import time
import asyncio
import inspect
import logging
import dataclasses
from collections.abc import Awaitable, Callable, Mapping
from types import MappingProxyType
from typing import Any, TypeAlias

from .collections import to_dict_object
from .exceptions import (
    SolrArgumentError,
    SolrError,
    SolrResponseError,
    SolrTimeoutError,
    SolrTransportError,
)
from .query import Query
from .transport import HttpxTransport
from .utils import encode_params, join_clauses, resolve_options


__version__ = '1.0.0'
__all__ = [
    'Client',
    'ClientConfig',
    'Query',
    'HttpxTransport',
    'SolrError',
    'SolrArgumentError',
    'SolrTransportError',
    'SolrTimeoutError',
    'SolrResponseError',
    'QuerySpec',
    'Callback',
    'DEFAULT_TIMEOUT',
    'get_default_timeout',
    'performance_logs_enabled',
]

logger = logging.getLogger('solrclient')

DEFAULT_HOST = '127.0.0.1'
DEFAULT_PORT = '8983'
DEFAULT_ROOT_PATH = 'solr'
DEFAULT_PROTOCOL = 'http'
DEFAULT_REQUEST_HANDLER = 'select'
DEFAULT_TIMEOUT = 20000  # milliseconds

DEFAULT_QUERY = 'q=*:*'
COMMIT_OPTIONS = MappingProxyType({'commit': True})
JSON_CONTENT_TYPE = 'application/json; charset=utf-8'

PROTOCOLS = ('http', 'https')


QuerySpec: TypeAlias = Query | str | Mapping[str, Any] | None
Callback: TypeAlias = Callable[[BaseException | None, Any], Any]


def get_default_timeout() -> int:
    """Return the process-wide request timeout in milliseconds.

    Read from ``SOLR_TIMEOUT`` on every call so that changes take effect
    on the next request. Missing or malformed values yield
    ``DEFAULT_TIMEOUT``.
    """
    value = os.environ.get('SOLR_TIMEOUT')
    if not value:
        return DEFAULT_TIMEOUT
    try:
        timeout = int(value)
    except ValueError:
        timeout = 0
    if timeout <= 0:
        logger.debug(f"@@@>> INVALID SOLR_TIMEOUT: {value!r} (using {DEFAULT_TIMEOUT} ms)")
        return DEFAULT_TIMEOUT
    return timeout


def performance_logs_enabled() -> bool:
    """Whether the environment asks for request timing lines.

    ``SOLR_PERFORMANCE_LOGS`` is checked first, then the older
    ``SOLR_NODE_PERFORMANCE_LOGS``.
    """
    value = os.environ.get('SOLR_PERFORMANCE_LOGS') or os.environ.get('SOLR_NODE_PERFORMANCE_LOGS', 'false')
    return value.lower() == 'true'


@dataclasses.dataclass(frozen=True)
class ClientConfig:
    """Connection settings of a ``Client``.

    ``None`` or an empty string for ``host``, ``root_path``, ``protocol``
    or ``request_handler`` means "use the default". ``None`` for ``port``
    means the default port, while an empty or zero ``port`` leaves the
    port out of the URL. Basic authentication is only applied when both
    ``user`` and ``password`` are set.

    Attributes:
        host: Solr server hostname. Defaults to ``'127.0.0.1'``.
        port: Solr server port. Defaults to ``'8983'``.
        core: Core (collection) name. May be empty for server-wide calls.
        root_path: Path Solr is mounted under. Defaults to ``'solr'``.
        protocol: ``'http'`` or ``'https'``. Defaults to ``'http'``.
        request_handler: Handler used by ``search``. Defaults to
            ``'select'``.
        user: Basic-auth user name.
        password: Basic-auth password.
        timeout: Request timeout in milliseconds. ``None`` defers to the
            ``SOLR_TIMEOUT`` environment variable.
        performance_logs: Log request durations. ``None`` defers to the
            ``SOLR_PERFORMANCE_LOGS`` environment variable.
    """

    host: str | None = DEFAULT_HOST
    port: str | int | None = DEFAULT_PORT
    core: str | None = ''
    root_path: str | None = DEFAULT_ROOT_PATH
    protocol: str | None = DEFAULT_PROTOCOL
    request_handler: str | None = DEFAULT_REQUEST_HANDLER
    user: str | None = None
    password: str | None = None
    timeout: int | None = None
    performance_logs: bool | None = None

    def __post_init__(self) -> None:
        defaults = dict(
            host=DEFAULT_HOST,
            root_path=DEFAULT_ROOT_PATH,
            protocol=DEFAULT_PROTOCOL,
            request_handler=DEFAULT_REQUEST_HANDLER,
        )
        for name, default in defaults.items():
            if not getattr(self, name):
                object.__setattr__(self, name, default)
        if self.core is None:
            object.__setattr__(self, 'core', '')
        # only None defaults the port; '' and 0 leave it out of the URL
        if self.port is None:
            object.__setattr__(self, 'port', DEFAULT_PORT)
        if self.protocol not in PROTOCOLS:
            raise SolrArgumentError(f"protocol must be one of {', '.join(PROTOCOLS)}, not {self.protocol!r}")
        if self.timeout is not None and self.timeout <= 0:
            raise SolrArgumentError(f"timeout must be a positive number of milliseconds, not {self.timeout!r}")

    @property
    def auth(self) -> tuple[str, str] | None:
        """The ``(user, password)`` pair, or ``None`` unless both are set."""
        if self.user and self.password:
            return self.user, self.password
        return None


# keeps scheduled callback tasks alive until they finish
_background_tasks: set[asyncio.Task] = set()


async def _complete(request: Awaitable[Any], callback: Callback) -> None:
    try:
        result = await request
    except Exception as exc:
        callback(exc, None)
    else:
        callback(None, result)


class Client:
    """Client for the HTTP API of a Solr server.

    The client only holds read-only configuration; it keeps no connection
    state, so one instance can serve any number of concurrent calls.

    Completion callbacks are called as ``callback(None, result)`` on
    success and ``callback(exc, None)`` on failure: the exception itself
    is passed rather than only its message, ``str(exc)`` gives the message.

    Attributes:
        config: The ``ClientConfig`` in use.
        transport: Async callable performing the HTTP requests.
        paths: Read-only mapping from operation name to URL path segment.

    Example:
        >>> client = Client(host='solr.local', core='books')
        >>> await client.update({'id': '1', 'title': 'Solr in Action'})
        >>> client.search('q=title:solr', lambda err, res: print(err or res))
    """

    _paths = dict(
        terms='terms',
        spell='spell',
        mlt='mlt',
        update='update',
        update_extract='update/extract',
        ping='admin/ping',
        suggest='suggest',
    )

    def __init__(self, config: ClientConfig | None = None,
            transport: Callable[..., Awaitable[Any]] | None = None,
            **options) -> None:
        """Initialize the client.

        Args:
            config: Connection settings. If omitted, one is built from
                ``options``.
            transport: Async callable ``(url, options, timeout)`` returning
                a response with a ``json()`` method. Defaults to an
                ``HttpxTransport``.
            **options: ``ClientConfig`` fields. Applied on top of
                ``config`` when both are given.
        """
        if config is None:
            config = ClientConfig(**options)
        elif options:
            config = dataclasses.replace(config, **options)
        self.config = config
        self.transport = HttpxTransport() if transport is None else transport
        self.paths = MappingProxyType(dict(search=config.request_handler, **self._paths))

    def __repr__(self) -> str:
        return f'<Client {self._make_host_url()}/{self.config.root_path}/{self.config.core}>'

    def _make_host_url(self) -> str:
        """Build ``{protocol}://[user:password@]{host}[:port]``."""
        config = self.config
        auth = ''
        if config.auth:
            user, password = config.auth
            auth = f'{user}:{password}@'
        if config.port:
            return f'{config.protocol}://{auth}{config.host}:{config.port}'
        return f'{config.protocol}://{auth}{config.host}'

    def _make_url(self, path: str, params: str) -> str:
        """Build the full request URL for an endpoint path.

        The root path, core and endpoint path are joined with ``/`` as
        given, so an empty core yields ``/solr//admin/ping``.
        """
        segments = '/'.join((self.config.root_path, self.config.core, path))
        return f'{self._make_host_url()}/{segments}?{params}'

    def _render_query(self, query: QuerySpec) -> str:
        if isinstance(query, Query):
            return str(query)
        if isinstance(query, str):
            return query
        if query is None:
            return DEFAULT_QUERY
        if isinstance(query, Mapping):
            return encode_params(query)
        raise SolrArgumentError(f"query must be a Query, a query string or a mapping, not {type(query).__name__}")

    def _render_options(self, options: Mapping[str, Any] | str | None) -> str:
        if isinstance(options, str):
            return options
        if isinstance(options, Mapping):
            return encode_params(options)
        if options is None:
            return ''
        raise SolrArgumentError(f"options must be a mapping or a query string, not {type(options).__name__}")

    def _resolve_timeout(self, timeout: int | None) -> int:
        if timeout is not None:
            if timeout <= 0:
                raise SolrArgumentError(f"timeout must be a positive number of milliseconds, not {timeout!r}")
            return timeout
        if self.config.timeout is not None:
            return self.config.timeout
        return get_default_timeout()

    def _call_solr_server(self, url: str, options: dict[str, Any],
            callback: Callback | None = None, timeout: int | None = None) -> Any:
        """Dispatch a request through the transport.

        Both calling conventions wrap the same coroutine: without a
        callback it is returned to be awaited, with a callback it is run
        and its outcome handed to ``callback(error, result)``.

        Args:
            url: Full request URL.
            options: ``method``, ``headers`` and optional ``body``.
            callback: Optional error-first completion function.
            timeout: Per-call timeout in milliseconds.

        Returns:
            A coroutine without callback; the scheduled ``asyncio.Task``
            with a callback inside a running loop; ``None`` otherwise.
        """
        timeout = self._resolve_timeout(timeout)
        show_logs = self.config.performance_logs
        if show_logs is None:
            show_logs = performance_logs_enabled()
        request = self._fetch(url, options, timeout, show_logs)
        if callback is None:
            return request

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(_complete(request, callback))
            return None
        task = loop.create_task(_complete(request, callback))
        _background_tasks.add(task)
        task.add_done_callback(_background_tasks.discard)
        return task

    async def _fetch(self, url: str, options: dict[str, Any], timeout: int,
            show_logs: bool = False) -> Any:
        """Await the transport within ``timeout`` and decode the JSON body.

        Raises:
            SolrTimeoutError: If the request does not finish in time.
            SolrTransportError: If the transport fails.
            SolrResponseError: If the body is not valid JSON.
        """
        t0 = time.perf_counter()
        try:
            try:
                res = await asyncio.wait_for(self.transport(url, options, timeout), timeout / 1000)
            except TimeoutError as exc:
                raise SolrTimeoutError(f"Request to {url} timed out after {timeout} ms") from exc
            try:
                # the whole body is returned, even for error statuses
                content = res.json()
                if inspect.isawaitable(content):
                    content = await content
            except Exception as exc:
                logger.debug(f"@@@RES>> {exc}")
                raise SolrResponseError(f"Invalid JSON response from Solr: {exc}") from exc
            return to_dict_object(content)
        finally:
            if show_logs:
                elapsed = (time.perf_counter() - t0) * 1000
                logger.info(f"solrclient:_call_solr_server performance time {elapsed:.3f} ms :: {options['method']} {url}")

    def _request_get(self, path: str, query: QuerySpec,
            callback: Callback | None = None, timeout: int | None = None) -> Any:
        params = self._render_query(query)
        url = self._make_url(path, params)
        logger.debug(f"@@@>> GET URL: {url}")
        options = dict(
            method='GET',
            headers={'accept': JSON_CONTENT_TYPE},
        )
        return self._call_solr_server(url, options, callback, timeout)

    def _request_post(self, path: str, data: Any,
            options: Mapping[str, Any] | str | None = None,
            callback: Callback | None = None, timeout: int | None = None) -> Any:
        params = self._render_options(options)
        url = self._make_url(path, params)
        try:
            body = json.dumps(data)
        except (TypeError, ValueError) as exc:
            raise SolrArgumentError(f"data is not JSON serializable: {exc}") from exc
        logger.debug(f"@@@>> POST URL: {url}  ::  BODY: {body}")
        fetch_options = dict(
            method='POST',
            body=body,
            headers={
                'accept': JSON_CONTENT_TYPE,
                'content-type': JSON_CONTENT_TYPE,
            },
        )
        return self._call_solr_server(url, fetch_options, callback, timeout)

    def query(self) -> Query:
        """Return a new, empty ``Query`` builder."""
        return Query()

    def search(self, query: QuerySpec = None, callback: Callback | None = None,
            *, timeout: int | None = None) -> Any:
        """Search the core through the configured request handler.

        Args:
            query: A ``Query``, a raw query string, or a mapping of
                parameters. Defaults to ``q=*:*``.
            callback: Optional ``callback(error, result)``.
            timeout: Per-call timeout in milliseconds.

        Returns:
            An awaitable resolving to the parsed response when no
            callback is given.
        """
        return self._request_get(self.paths['search'], query, callback, timeout)

    def terms(self, query: QuerySpec = None, callback: Callback | None = None,
            *, timeout: int | None = None) -> Any:
        """Query the terms component (``/terms``)."""
        return self._request_get(self.paths['terms'], query, callback, timeout)

    def mlt(self, query: QuerySpec = None, callback: Callback | None = None,
            *, timeout: int | None = None) -> Any:
        """Find documents similar to a reference document (``/mlt``)."""
        return self._request_get(self.paths['mlt'], query, callback, timeout)

    def spell(self, query: QuerySpec = None, callback: Callback | None = None,
            *, timeout: int | None = None) -> Any:
        """Ask the spell-check handler for suggestions (``/spell``)."""
        return self._request_get(self.paths['spell'], query, callback, timeout)

    def suggest(self, query: QuerySpec = None, callback: Callback | None = None,
            *, timeout: int | None = None) -> Any:
        """Query the suggester component (``/suggest``)."""
        return self._request_get(self.paths['suggest'], query, callback, timeout)

    def ping(self, callback: Callback | None = None, *, timeout: int | None = None) -> Any:
        """Check that the server and core are up (``/admin/ping``)."""
        return self._request_get(self.paths['ping'], '', callback, timeout)

    def update(self, data: Any, options: Mapping[str, Any] | str | Callback | None = None,
            callback: Callback | None = None, *, timeout: int | None = None) -> Any:
        """Add or replace a document, or send a list of update commands.

        Args:
            data: A document (sent as ``{"add": {"doc": data,
                "overwrite": true}}``) or a list, sent verbatim.
            options: URL parameters as a mapping or query string.
                Defaults to ``{'commit': True}``. A callable here is taken
                as the callback.
            callback: Optional ``callback(error, result)``.
            timeout: Per-call timeout in milliseconds.

        Returns:
            An awaitable resolving to the parsed response when no
            callback is given.
        """
        options, callback = resolve_options(options, callback, COMMIT_OPTIONS)
        if isinstance(data, (list, tuple)):
            body = list(data)
        else:
            body = {'add': {'doc': data, 'overwrite': True}}
        return self._request_post(self.paths['update'], body, options, callback, timeout)

    def update_extract(self, options: Mapping[str, Any] | str | Callback | None = None,
            callback: Callback | None = None, *, timeout: int | None = None) -> Any:
        """Trigger the extracting request handler (``/update/extract``).

        The content to extract is referenced through ``stream.*`` options
        (``stream.url``, ``stream.file``), together with ``literal.id``
        and the like; ``wt=json`` is always added.

        Args:
            options: URL parameters as a mapping or query string.
                Defaults to ``{'commit': True}``. Not modified.
            callback: Optional ``callback(error, result)``.
            timeout: Per-call timeout in milliseconds.
        """
        options, callback = resolve_options(options, callback, COMMIT_OPTIONS)
        if isinstance(options, Mapping):
            options = {**options, 'wt': 'json'}
        elif isinstance(options, str):
            options = f'{options}&wt=json' if options else 'wt=json'
        body = {'add': {'doc': None, 'overwrite': True}}
        return self._request_post(self.paths['update_extract'], body, options, callback, timeout)

    def delete(self, query: str | Mapping[str, Any] | None,
            options: Mapping[str, Any] | str | Callback | None = None,
            callback: Callback | None = None, *, timeout: int | None = None) -> Any:
        """Delete every document matching a query.

        Args:
            query: A query string, or a mapping rendered as ``field:value``
                clauses joined with ``AND``.
            options: URL parameters. Defaults to ``{'commit': True}``.
            callback: Optional ``callback(error, result)``.
            timeout: Per-call timeout in milliseconds.

        Raises:
            SolrArgumentError: If ``query`` is of any other type.
        """
        options, callback = resolve_options(options, callback, COMMIT_OPTIONS)
        if isinstance(query, str):
            body_query = query
        elif isinstance(query, Mapping):
            body_query = join_clauses(query)
        elif query is None:
            body_query = ''
        else:
            raise SolrArgumentError(f"query must be a string or a mapping, not {type(query).__name__}")
        body = {'delete': {'query': body_query}}
        return self._request_post(self.paths['update'], body, options, callback, timeout)

    def delete_by_ids(self, ids: list[str] | tuple[str, ...],
            options: Mapping[str, Any] | str | Callback | None = None,
            callback: Callback | None = None, *, timeout: int | None = None) -> Any:
        """Delete documents by unique key.

        Args:
            ids: List of document ids.
            options: URL parameters. Defaults to ``{'commit': True}``.
            callback: Optional ``callback(error, result)``.
            timeout: Per-call timeout in milliseconds.

        Raises:
            SolrArgumentError: If ``ids`` is not a list or tuple. Raised
                immediately, nothing is sent.
        """
        options, callback = resolve_options(options, callback, COMMIT_OPTIONS)
        if not isinstance(ids, (list, tuple)):
            raise SolrArgumentError("ids must be a list")
        body = {'delete': [{'id': id} for id in ids]}
        return self._request_post(self.paths['update'], body, options, callback, timeout)

    def commit(self, callback: Callback | None = None, *, timeout: int | None = None) -> Any:
        """Hard commit pending updates."""
        return self._request_post(self.paths['update'], {}, {'commit': True}, callback, timeout)

    def soft_commit(self, callback: Callback | None = None, *, timeout: int | None = None) -> Any:
        """Soft commit pending updates, making them visible to searches."""
        return self._request_post(self.paths['update'], {}, {'softCommit': True}, callback, timeout)
