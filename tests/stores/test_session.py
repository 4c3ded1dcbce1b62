"""
Unit Tests for StoreSession
"""

from formcraft.stores.session import StoreSession


class TestStoreSession:
    """Tests for session lifecycle."""

    def test_open_when_fresh_dir_then_empty_stores(self, store_config):
        with StoreSession(store_config) as session:
            assert session.libraries.libraries == ()
            assert session.headers_footers.headers == ()
            assert session.questionnaires.questionnaires == ()
            assert session.load_errors == {}

    def test_reopen_when_data_written_then_restored(self, store_config):
        with StoreSession(store_config) as session:
            session.libraries.create_library("Kept")
            session.headers_footers.create_footer("Legal", "<p>(c)</p>")
            session.questionnaires.create("Not kept")

        with StoreSession(store_config) as session:
            assert [lib.name for lib in session.libraries.libraries] == ["Kept"]
            assert [f.name for f in session.headers_footers.footers] == ["Legal"]
            assert session.questionnaires.questionnaires == ()

    def test_load_errors_when_slot_corrupted_then_reported(self, store_config):
        store_config.data_dir.mkdir(parents=True)
        store_config.slot_path(store_config.header_footer_slot).write_text("nope", encoding="utf-8")

        with StoreSession(store_config) as session:
            assert list(session.load_errors) == [store_config.header_footer_slot]

    def test_reset_when_called_then_every_store_cleared(self, store_config, clock, ids):
        session = StoreSession(store_config, clock=clock, id_factory=ids)
        session.libraries.create_library("A")
        session.headers_footers.create_header("H", "")
        session.questionnaires.create("Q")

        session.reset()

        assert session.libraries.libraries == ()
        assert session.headers_footers.headers == ()
        assert session.questionnaires.questionnaires == ()
        session.close()

    def test_close_when_called_then_signals_blocked(self, store_config, signal_spy):
        session = StoreSession(store_config)
        calls = signal_spy(session.libraries.changed)

        session.close()
        session.libraries.create_library("Quiet")

        assert session.closed
        assert calls == []
        assert len(session.libraries.libraries) == 1
