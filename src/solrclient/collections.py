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
"""Dict subclass with attribute-style access for Solr responses.

Every object in the JSON returned by Solr is turned into a ``DictObject``
by ``to_dict_object``, so nested response sections can be reached with dot
notation as well as with keys.

Example:
    >>> res = DictObject(responseHeader=DictObject(status=0, QTime=1))
    >>> res.responseHeader.status
    0
    >>> res['responseHeader']['QTime']
    1
"""
from __future__ import annotations


class DictObject(dict):
    """Dictionary with attribute-style access.

    The instance ``__dict__`` is the dictionary itself, so keys and
    attributes are the same namespace. Keys that are not valid Python
    identifiers (``facet_counts`` is, ``spellcheck.collation`` is not)
    remain reachable through item access.
    """

    def __init__(self, *args, **kwargs):
        dict.__init__(self, *args, **kwargs)
        self.__dict__ = self


def to_dict_object(value):
    """Recursively convert decoded JSON so that every object is a ``DictObject``.

    Lists are converted element by element; other values are returned
    unchanged.

    Example:
        >>> to_dict_object({'response': {'docs': [{'id': '1'}]}}).response.docs[0].id
        '1'
    """
    if isinstance(value, dict):
        return DictObject((k, to_dict_object(v)) for k, v in value.items())
    if isinstance(value, list):
        return [to_dict_object(v) for v in value]
    return value
