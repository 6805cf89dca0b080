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
"""Helpers for rendering Solr request parameters.

Solr expects booleans spelled ``true``/``false`` and dotted parameter
names (``facet.field``, ``hl.simple.pre``). Python keyword arguments
cannot contain dots, so a double underscore in a name is rendered as a
dot, the same convention used for request params throughout the client.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any
from urllib.parse import urlencode

from .exceptions import SolrArgumentError


def param_value(value: Any) -> str:
    """Render a single parameter value the way Solr expects it.

    Example:
        >>> param_value(True)
        'true'
        >>> param_value(10)
        '10'
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def param_name(name: str, prefix: str | None = None) -> str:
    """Render a parameter name, optionally under a component prefix.

    Example:
        >>> param_name('simple__pre', 'hl')
        'hl.simple.pre'
    """
    name = name.replace('__', '.')
    if prefix:
        return f'{prefix}.{name}'
    return name


def param_pairs(params: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> list[tuple[str, str]]:
    """Flatten a mapping (or iterable of pairs) into rendered ``(name, value)`` pairs.

    List and tuple values produce one pair per element so that repeatable
    Solr parameters (``fq``, ``facet.field``) are kept as separate entries.
    """
    items = params.items() if isinstance(params, Mapping) else params
    pairs = []
    for name, value in items:
        name = param_name(name)
        if isinstance(value, (list, tuple)):
            pairs.extend((name, param_value(v)) for v in value)
        else:
            pairs.append((name, param_value(value)))
    return pairs


def encode_params(params: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> str:
    """Percent-encode parameters into a URL query string, preserving order.

    Example:
        >>> encode_params({'commit': True, 'fq': ['a:1', 'b:2']})
        'commit=true&fq=a%3A1&fq=b%3A2'
    """
    return urlencode(param_pairs(params))


def join_clauses(clauses: Mapping[str, Any], separator: str = ' AND ') -> str:
    """Join ``field:value`` clauses built from a mapping.

    Example:
        >>> join_clauses({'type': 'book', 'lang': 'en'})
        'type:book AND lang:en'
    """
    return separator.join(f'{k}:{param_value(v)}' for k, v in clauses.items())


def resolve_options(options: Any, callback: Callable | None,
        default: Mapping[str, Any]) -> tuple[Any, Callable | None]:
    """Resolve the ``(options, callback)`` pair of a write operation.

    A callable passed where the options are expected is taken as the
    callback. Missing options fall back to a copy of ``default``.

    Returns:
        tuple: ``(options, callback)``.

    Raises:
        SolrArgumentError: If options is callable and a callback was also
            given.
    """
    if callable(options):
        if callback is not None:
            raise SolrArgumentError("options must be a mapping or a query string, not a callable")
        return dict(default), options
    if options is None:
        return dict(default), callback
    return options, callback
