"""
Unit Tests for HeaderFooterStore
"""

import pytest

from formcraft.assembly.builder import create_questionnaire, resolve_header
from formcraft.core.models import HeaderFooterKind
from formcraft.stores.header_footer_store import HeaderFooterStore


class TestHeaderFooterCrud:
    """Tests for create/update/delete on both collections."""

    def test_create_header_when_called_then_tagged_and_stamped(self, header_footer_store):
        header = header_footer_store.create_header("Logo", "<p>ACME</p>")

        assert header.type is HeaderFooterKind.HEADER
        assert header.created_at == header.updated_at
        assert header_footer_store.headers == (header,)
        assert header_footer_store.footers == ()

    def test_create_footer_when_called_then_only_footers_change(self, header_footer_store):
        footer = header_footer_store.create_footer("Legal", "<p>(c)</p>")

        assert footer.type is HeaderFooterKind.FOOTER
        assert header_footer_store.footers == (footer,)
        assert header_footer_store.headers == ()

    def test_update_when_type_given_then_type_kept(self, header_footer_store):
        header = header_footer_store.create_header("Logo", "<p>ACME</p>")

        updated = header_footer_store.update_header(header.id, {"content": "<p>New</p>", "type": "footer"})

        assert updated.content == "<p>New</p>"
        assert updated.type is HeaderFooterKind.HEADER
        assert updated.updated_at > header.updated_at
        assert updated.created_at == header.created_at

    def test_update_when_id_in_other_collection_then_none(self, header_footer_store):
        header = header_footer_store.create_header("Logo", "<p>ACME</p>")

        assert header_footer_store.update_footer(header.id, {"name": "X"}) is None

    def test_delete_when_present_then_removed(self, header_footer_store):
        a = header_footer_store.create_footer("A", "")
        b = header_footer_store.create_footer("B", "")

        assert header_footer_store.delete_footer(a.id) is True
        assert header_footer_store.footers == (b,)

    def test_delete_when_missing_then_false(self, header_footer_store, signal_spy):
        calls = signal_spy(header_footer_store.changed)

        assert header_footer_store.delete_header("missing") is False
        assert calls == []

    def test_changed_when_created_then_emits_kind_and_collection(self, header_footer_store, signal_spy):
        calls = signal_spy(header_footer_store.changed)

        footer = header_footer_store.create_footer("Legal", "")

        assert calls == [(HeaderFooterKind.FOOTER, (footer,))]

    def test_items_when_raw_kind_then_resolved(self, header_footer_store):
        header = header_footer_store.create_header("Logo", "")

        assert header_footer_store.items("header") == (header,)
        assert header_footer_store.find("header", header.id) == header

    def test_items_when_unknown_kind_then_raises_error(self, header_footer_store):
        with pytest.raises(ValueError):
            header_footer_store.items("sidebar")


class TestDanglingReferences:
    """Deleting a header never touches questionnaires that reference it."""

    def test_delete_header_when_referenced_then_questionnaire_keeps_id(self, header_footer_store, clock, ids):
        header = header_footer_store.create_header("Logo", "<p>ACME</p>")
        questionnaire = create_questionnaire("Survey", header_id=header.id, clock=clock, id_factory=ids)

        header_footer_store.delete_header(header.id)

        assert questionnaire.header_id == header.id
        assert resolve_header(questionnaire, header_footer_store.headers) is None


class TestHeaderFooterPersistence:
    """Tests for write-through persistence."""

    def test_reload_when_new_instance_then_both_collections_restored(self, header_footer_store, header_footer_slot):
        header_footer_store.create_header("Logo", "<p>ACME</p>")
        header_footer_store.create_footer("Legal", "<p>(c)</p>")

        reloaded = HeaderFooterStore(header_footer_slot, strict=True)

        assert reloaded.headers == header_footer_store.headers
        assert reloaded.footers == header_footer_store.footers

    def test_reset_when_called_then_both_empty(self, header_footer_store, header_footer_slot):
        header_footer_store.create_header("Logo", "")
        header_footer_store.reset()

        assert HeaderFooterStore(header_footer_slot).headers == ()
