"""Tests for solrclient.collections — DictObject."""
from __future__ import annotations

import json

from solrclient.collections import DictObject, to_dict_object


# ── DictObject ─────────────────────────────────────────────────────────

class TestDictObject:
    """Tests for DictObject attribute-style dict access."""

    def test_init_kwargs(self):
        obj = DictObject(a=1, b=2)
        assert obj["a"] == 1
        assert obj.b == 2

    def test_init_pairs(self):
        obj = DictObject([("numFound", 3), ("start", 0)])
        assert obj.numFound == 3
        assert obj["start"] == 0

    def test_set_via_attr(self):
        obj = DictObject()
        obj.key = "val"
        assert obj["key"] == "val"

    def test_delete_via_attr(self):
        obj = DictObject(a=1)
        del obj.a
        assert "a" not in obj

    def test_dict_identity(self):
        obj = DictObject(a=1)
        assert obj.__dict__ is obj

    def test_equals_plain_dict(self):
        assert DictObject(a=1) == {"a": 1}

    def test_json_object_pairs_hook(self):
        body = b'{"responseHeader": {"status": 0}, "response": {"numFound": 1, "docs": [{"id": "1"}]}}'
        res = json.loads(body, object_pairs_hook=DictObject)
        assert res.responseHeader.status == 0
        assert res.response.docs[0].id == "1"

    def test_dotted_keys_through_items(self):
        res = json.loads('{"spellcheck.collation": "solr"}', object_pairs_hook=DictObject)
        assert res["spellcheck.collation"] == "solr"

    def test_serializes_back(self):
        obj = DictObject(a=DictObject(b=[1, 2]))
        assert json.loads(json.dumps(obj)) == {"a": {"b": [1, 2]}}


# ── to_dict_object ─────────────────────────────────────────────────────

class TestToDictObject:
    def test_nested(self):
        res = to_dict_object({"response": {"docs": [{"id": "1"}, {"id": "2"}]}})
        assert isinstance(res, DictObject)
        assert isinstance(res.response, DictObject)
        assert [doc.id for doc in res.response.docs] == ["1", "2"]

    def test_top_level_list(self):
        res = to_dict_object([{"a": 1}, [{"b": 2}], 3])
        assert res[0].a == 1
        assert res[1][0].b == 2
        assert res[2] == 3

    def test_scalars_unchanged(self):
        assert to_dict_object("solr") == "solr"
        assert to_dict_object(None) is None
        assert to_dict_object(1.5) == 1.5

    def test_existing_dict_object(self):
        res = to_dict_object(DictObject(a=DictObject(b=1)))
        assert res == {"a": {"b": 1}}
        assert res.a.b == 1
