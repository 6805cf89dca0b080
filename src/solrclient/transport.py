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
"""Default HTTP transport for the Solr client, built on ``httpx``.

A transport is any async callable with the signature::

    await transport(url, options, timeout) -> response

where ``options`` is a dict with ``method``, ``headers`` and (for POST)
``body`` keys, ``timeout`` is in milliseconds, and ``response`` exposes a
``json()`` method returning the decoded body (or an awaitable of it).
``httpx.Response`` satisfies that contract, so ``HttpxTransport`` returns
it untouched.

Retries, redirects and connection reuse are left to the transport;
``HttpxTransport`` does none of them and opens one connection per call.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

from .exceptions import SolrTimeoutError, SolrTransportError


logger = logging.getLogger('solrclient')


class HttpxTransport:
    """Send a single request with a fresh ``httpx.AsyncClient``.

    Attributes:
        verify: TLS verification setting passed to ``httpx``.
        trust_env: Whether ``httpx`` may read proxy settings from the
            environment.
    """

    def __init__(self, verify: bool | str = True, trust_env: bool = False) -> None:
        self.verify = verify
        self.trust_env = trust_env

    async def __call__(self, url: str, options: dict[str, Any], timeout: int) -> httpx.Response:
        """Perform the request described by ``options``.

        Raises:
            SolrTimeoutError: If ``httpx`` gives up waiting on the server.
            SolrTransportError: On connection, DNS or protocol failures.
        """
        async with httpx.AsyncClient(
            verify=self.verify,
            trust_env=self.trust_env,
            follow_redirects=False,
            timeout=timeout / 1000,
        ) as session:
            try:
                return await session.request(
                    options['method'],
                    url,
                    headers=options.get('headers'),
                    content=options.get('body'),
                )
            except httpx.TimeoutException as exc:
                logger.debug(f"@@@RES>> TIMEOUT {url} :: {exc}")
                raise SolrTimeoutError(f"Request to {url} timed out after {timeout} ms") from exc
            except httpx.HTTPError as exc:
                logger.debug(f"@@@RES>> {exc}")
                raise SolrTransportError(str(exc) or exc.__class__.__name__) from exc
