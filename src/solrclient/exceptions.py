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
"""Exceptions raised by the Solr client.

Application-level errors reported by Solr itself (a JSON body with an
``error`` key) are not raised: the parsed body is returned to the caller
like any other response.
"""
from __future__ import annotations


class SolrError(Exception):
    """Base class for all errors raised by the client."""


class SolrArgumentError(SolrError, ValueError):
    """Raised when an operation is called with malformed arguments.

    Always raised immediately, before a request is built or sent.
    """


class SolrTransportError(SolrError):
    """Raised when the HTTP request could not be completed."""


class SolrTimeoutError(SolrTransportError):
    """Raised when a request takes longer than its effective timeout."""


class SolrResponseError(SolrError):
    """Raised when the response body is not valid JSON."""
