"""
Tests for chunked bulk import against a store.
"""

import pytest

from realty_csv.storage import import_properties


class RecordingStore:
    def __init__(self, fail_on_call=None):
        self.calls = []
        self.fail_on_call = fail_on_call

    def create_bulk(self, records):
        self.calls.append(len(records))
        if self.fail_on_call == len(self.calls):
            raise RuntimeError('store unavailable')
        return len(records)


class TestImportProperties:

    def test_records_sent_in_chunks(self):
        store = RecordingStore()
        records = [{'title': f'P{i}'} for i in range(250)]
        assert import_properties(store, records) == 250
        assert store.calls == [100, 100, 50]

    def test_custom_chunk_size(self):
        store = RecordingStore()
        assert import_properties(store, [{}] * 5, chunk_size=2) == 5
        assert store.calls == [2, 2, 1]

    def test_nothing_to_send(self):
        store = RecordingStore()
        assert import_properties(store, []) == 0
        assert store.calls == []

    def test_store_errors_propagate(self):
        store = RecordingStore(fail_on_call=2)
        with pytest.raises(RuntimeError):
            import_properties(store, [{}] * 5, chunk_size=2)
        assert store.calls == [2, 2]

    def test_chunk_size_must_be_positive(self):
        with pytest.raises(ValueError):
            import_properties(RecordingStore(), [{}], chunk_size=0)
