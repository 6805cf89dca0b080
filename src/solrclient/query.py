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
"""Chainable builder for Solr search parameters.

A ``Query`` collects parameters in insertion order and renders them as a
percent-encoded query string with ``str(query)``. Repeatable parameters
(``fq``, ``facet.field``, ``bq``...) are kept as separate entries. No
validation against the Solr schema is made; a bad query only shows up in
the server response.

Example:
    >>> query = Query().q({'title': 'solr'}).fq(['type:book']).rows(5)
    >>> str(query)
    'q=title%3Asolr&fq=type%3Abook&rows=5'
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import urlencode

from .utils import join_clauses, param_name, param_pairs, param_value


class Query:
    """Ordered collection of Solr query parameters.

    Every setter returns the same instance so calls can be chained.

    Attributes:
        params: List of rendered ``(name, value)`` pairs.
    """

    def __init__(self) -> None:
        self.params: list[tuple[str, str]] = []

    def __str__(self) -> str:
        return urlencode(self.params)

    def __repr__(self) -> str:
        return f'<Query {self}>'

    def _add(self, name: str, value: Any) -> Query:
        self.params.append((name, param_value(value)))
        return self

    def _add_component(self, prefix: str, params: Mapping[str, Any] | None,
            kwargs: dict[str, Any]) -> Query:
        """Add the parameters of a search component (``facet``, ``hl``...).

        The ``on`` key toggles the component itself (``facet=true``); every
        other key is rendered under the component prefix (``facet.field``).
        List values produce one entry per element.
        """
        merged = dict(params or {})
        merged.update(kwargs)
        for key, value in merged.items():
            name = prefix if key == 'on' else param_name(key, prefix)
            if isinstance(value, (list, tuple)):
                for v in value:
                    self._add(name, v)
            else:
                self._add(name, value)
        return self

    def add_params(self, params: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
            **kwargs) -> Query:
        """Add arbitrary parameters.

        Args:
            params: Mapping or iterable of ``(name, value)`` pairs.
            **kwargs: More parameters; ``__`` in a name is rendered as ``.``.
        """
        if params is not None:
            self.params.extend(param_pairs(params))
        self.params.extend(param_pairs(kwargs))
        return self

    def q(self, params: str | Mapping[str, Any]) -> Query:
        """Set the main query.

        A mapping is rendered as ``field:value`` clauses joined with ``AND``.
        """
        if isinstance(params, Mapping):
            params = join_clauses(params)
        return self._add('q', params)

    def def_type(self, type: str) -> Query:
        return self._add('defType', type)

    def dismax(self) -> Query:
        return self.def_type('dismax')

    def edismax(self) -> Query:
        return self.def_type('edismax')

    def sort(self, params: str | Mapping[str, str]) -> Query:
        """Set the sort order, e.g. ``{'price': 'desc', 'score': 'asc'}``."""
        if isinstance(params, Mapping):
            params = ','.join(f'{field} {order}' for field, order in params.items())
        return self._add('sort', params)

    def start(self, start: int) -> Query:
        return self._add('start', start)

    def rows(self, rows: int) -> Query:
        return self._add('rows', rows)

    def cursor_mark(self, mark: str = '*') -> Query:
        return self._add('cursorMark', mark)

    def fl(self, fields: str | Iterable[str]) -> Query:
        if not isinstance(fields, str):
            fields = ','.join(fields)
        return self._add('fl', fields)

    def df(self, field: str) -> Query:
        return self._add('df', field)

    def wt(self, type: str) -> Query:
        return self._add('wt', type)

    def fq(self, params: str | Mapping[str, Any] | Iterable[str | tuple[str, Any]]) -> Query:
        """Add filter queries, one ``fq`` entry per filter.

        Accepts a raw filter string, a mapping (one ``field:value`` filter
        per key), or a list of filter strings and ``(field, value)`` pairs.
        """
        if isinstance(params, str):
            return self._add('fq', params)
        if isinstance(params, Mapping):
            params = params.items()
        for item in params:
            if isinstance(item, str):
                self._add('fq', item)
            else:
                field, value = item
                self._add('fq', f'{field}:{param_value(value)}')
        return self

    def _boosted_fields(self, name: str, params: str | Mapping[str, Any]) -> Query:
        if isinstance(params, Mapping):
            params = ' '.join(f'{field}^{boost}' for field, boost in params.items())
        return self._add(name, params)

    def qf(self, params: str | Mapping[str, Any]) -> Query:
        """Set query fields, e.g. ``{'title': 2, 'body': 1}`` -> ``title^2 body^1``."""
        return self._boosted_fields('qf', params)

    def pf(self, params: str | Mapping[str, Any]) -> Query:
        return self._boosted_fields('pf', params)

    def mm(self, minimum: int | str) -> Query:
        return self._add('mm', minimum)

    def ps(self, slop: int) -> Query:
        return self._add('ps', slop)

    def qs(self, slop: int) -> Query:
        return self._add('qs', slop)

    def tie(self, tie: float) -> Query:
        return self._add('tie', tie)

    def bq(self, params: str | Mapping[str, Any] | Iterable[str]) -> Query:
        """Add boost queries; a mapping renders one ``field:value`` entry per key."""
        if isinstance(params, str):
            return self._add('bq', params)
        if isinstance(params, Mapping):
            params = [f'{field}:{param_value(value)}' for field, value in params.items()]
        for item in params:
            self._add('bq', item)
        return self

    def bf(self, function: str) -> Query:
        return self._add('bf', function)

    def boost(self, function: str) -> Query:
        return self._add('boost', function)

    def facet_query(self, params: Mapping[str, Any] | None = None, **kwargs) -> Query:
        """Add faceting parameters.

        Example:
            >>> str(Query().facet_query(on=True, field=['cat', 'type'], mincount=1))
            'facet=true&facet.field=cat&facet.field=type&facet.mincount=1'
        """
        return self._add_component('facet', params, kwargs)

    def mlt_query(self, params: Mapping[str, Any] | None = None, **kwargs) -> Query:
        return self._add_component('mlt', params, kwargs)

    def spellcheck_query(self, params: Mapping[str, Any] | None = None, **kwargs) -> Query:
        return self._add_component('spellcheck', params, kwargs)

    def terms_query(self, params: Mapping[str, Any] | None = None, **kwargs) -> Query:
        return self._add_component('terms', params, kwargs)

    def hl_query(self, params: Mapping[str, Any] | None = None, **kwargs) -> Query:
        return self._add_component('hl', params, kwargs)

    def suggest_query(self, params: Mapping[str, Any] | None = None, **kwargs) -> Query:
        return self._add_component('suggest', params, kwargs)

    def group_query(self, params: Mapping[str, Any] | None = None, **kwargs) -> Query:
        return self._add_component('group', params, kwargs)
