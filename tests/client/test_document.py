"""Tests for settee.client.document.

Covers:
- body() read/write/delete primitive and dirty tracking
- load/save/destroy against a mock HTTP server
- request paths for plain and design ids
"""

import pytest

from settee.client.document import Document, document_path
from settee.core.errors import ConfigError, ConflictError, InvalidDocumentIdError


class TestBodyPrimitive:
    def test_read_whole_body(self):
        doc = Document("d1", body={"title": "Soup"})
        assert doc.body() == {"title": "Soup"}

    def test_write_section_returns_document(self):
        doc = Document("d1")
        assert doc.body("title", "Soup") is doc
        assert doc.body("title") == "Soup"

    def test_write_entry(self):
        doc = Document("d1")
        doc.body("tags", "main", "soup")
        assert doc.body("tags") == {"main": "soup"}

    def test_none_deletes(self):
        doc = Document("d1", body={"title": "Soup", "tags": {"main": "soup"}})
        doc.body("title", None)
        doc.body("tags", "main", None)
        assert doc.body() == {"tags": {}}

    def test_writes_mark_dirty(self):
        doc = Document("d1")
        assert doc.is_dirty is False
        doc.body("title", "Soup")
        assert doc.is_dirty is True

    def test_reads_keep_clean(self):
        doc = Document("d1", body={"title": "Soup"})
        doc.body()
        doc.body("title")
        assert doc.is_dirty is False

    def test_to_dict_includes_identity(self):
        doc = Document("d1", "2-b", body={"title": "Soup"})
        assert doc.to_dict() == {"_id": "d1", "_rev": "2-b", "title": "Soup"}


class TestDocumentPath:
    def test_plain_id_is_quoted(self):
        assert document_path("recipes", "a/b c") == "recipes/a%2Fb%20c"

    def test_design_id_keeps_prefix_slash(self):
        assert document_path("recipes", "_design/app") == "recipes/_design/app"


class TestLoad:
    def test_load_replaces_body(self, server, connection):
        server.on("GET", "/recipes/d1", body={"_id": "d1", "_rev": "3-c", "title": "Stew"})
        doc = connection.database("recipes").document("d1")
        doc.body("draft", True)

        result = doc.load()

        assert result.unwrap() is doc
        assert doc.body() == {"title": "Stew"}
        assert doc.revision == "3-c"
        assert doc.is_dirty is False

    def test_load_missing_reports_error(self, server, connection, callback_log):
        calls, callback = callback_log
        doc = connection.database("recipes").document("nope")

        result = doc.load(callback)

        assert result.is_err()
        assert len(calls) == 1
        assert calls[0][0].status == 404

    def test_load_without_id(self, connection):
        result = connection.database("recipes").document().load()
        assert isinstance(result.error, InvalidDocumentIdError)

    def test_unbound_document(self):
        result = Document("d1").load()
        assert isinstance(result.error, ConfigError)


class TestSave:
    def test_put_with_id(self, server, connection):
        server.on("PUT", "/recipes/d1", status=201, body={"ok": True, "id": "d1", "rev": "1-a"})
        doc = connection.database("recipes").document("d1")
        doc.body("title", "Soup")

        doc.save()

        assert server.last.method == "PUT"
        assert server.last_json() == {"_id": "d1", "title": "Soup"}
        assert doc.revision == "1-a"
        assert doc.is_dirty is False

    def test_post_without_id(self, server, connection):
        server.on("POST", "/recipes", status=201, body={"ok": True, "id": "generated", "rev": "1-a"})
        doc = connection.database("recipes").document()

        doc.save()

        assert doc.id == "generated"

    def test_sends_revision(self, server, connection):
        server.on("PUT", "/recipes/d1", status=201, body={"ok": True, "id": "d1", "rev": "2-b"})
        doc = connection.database("recipes").document("d1", "1-a")
        doc.save()
        assert server.last_json()["_rev"] == "1-a"

    def test_conflict_keeps_dirty(self, server, connection, callback_log):
        calls, callback = callback_log
        server.on(
            "PUT", "/recipes/d1", status=409,
            body={"error": "conflict", "reason": "Document update conflict."},
        )
        doc = connection.database("recipes").document("d1")
        doc.body("title", "Soup")

        result = doc.save(callback)

        assert isinstance(result.error, ConflictError)
        assert calls == [(result.error, None)]
        assert doc.is_dirty is True


class TestDestroy:
    def test_delete_with_revision(self, server, connection):
        server.on("DELETE", "/recipes/d1", body={"ok": True, "id": "d1", "rev": "2-x"})
        doc = connection.database("recipes").document("d1", "1-a")

        doc.destroy()

        assert server.last.url.params["rev"] == "1-a"
        assert doc.revision == "2-x"

    @pytest.mark.parametrize("doc_id,rev", [(None, "1-a"), ("d1", None)])
    def test_requires_id_and_revision(self, server, connection, doc_id, rev):
        result = connection.database("recipes").document(doc_id, rev).destroy()
        assert isinstance(result.error, InvalidDocumentIdError)
        assert server.requests == []
