"""
test_store_concurrency.py
-------------------------
Tests for single-writer access to the store from several threads.
"""
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date

from reading_roundup.dataclasses.reading_entry import ReadState


class TestStoreConcurrency:
    """Operations from many threads are serialized on the store lock."""

    def test_parallel_creates(self, test_db):
        """Every concurrent create should land exactly once."""
        bodies = [f"item [{i}](https://parallel{i}.example/)" for i in range(40)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(lambda body: test_db.create_entry(body, today=date(2024, 3, 1)), bodies))

        assert len(set(ids)) == 40
        assert test_db.count_entries() == 40

    def test_parallel_updates_are_atomic(self, test_db, entry_factory):
        """Each ingest_update should see a count no other mutation interleaved with."""
        batches = [
            [entry_factory(f"https://batch{b}-{i}.example/") for i in range(5)]
            for b in range(10)
        ]

        with ThreadPoolExecutor(max_workers=5) as pool:
            results = list(pool.map(test_db.ingest_update, batches))

        assert all(after - before == 5 for before, after in results)
        assert sorted(before for before, _ in results) == list(range(0, 50, 5))
        assert test_db.count_entries() == 50

    def test_scope_blocks_other_threads(self, test_db):
        """A second thread should wait while a scope is open."""
        entered = threading.Event()
        finished = threading.Event()

        def other():
            entered.set()
            test_db.count_entries()
            finished.set()

        with test_db.session_scope():
            worker = threading.Thread(target=other)
            worker.start()
            assert entered.wait(timeout=5)
            assert not finished.wait(timeout=0.2)

        worker.join(timeout=5)
        assert finished.is_set()

    def test_roundup_replacement_never_partial(self, test_db, entry_factory):
        """Readers should see either the old or the new membership."""
        test_db.bulk_ingest([entry_factory(f"https://m{i}.example/") for i in range(6)])
        ids = [row.id for row in test_db.list_entries()]
        old, new = set(ids[:3]), set(ids[3:])
        test_db.set_roundup("2024-03-01", sorted(old))

        observed = []

        def reader():
            for _ in range(20):
                rows = test_db.get_roundup("2024-03-01")
                observed.append({r.id for r in rows if r.included})

        def writer():
            for i in range(20):
                test_db.set_roundup("2024-03-01", sorted(new if i % 2 == 0 else old))

        threads = [threading.Thread(target=reader), threading.Thread(target=writer)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert observed
        assert all(seen in (old, new) for seen in observed)

    def test_concurrent_edits_keep_each_field(self, test_db):
        """A body edit should never write back a stale read state."""
        entry_id = test_db.create_entry("[x](https://x.example/)", today=date(2024, 3, 1))
        halfway = threading.Event()

        def edit_bodies():
            for i in range(100):
                test_db.edit_entry(entry_id, body_text=f"body {i}")
                if i == 10:
                    halfway.set()

        def mark_read():
            halfway.wait(timeout=5)
            test_db.edit_entry(entry_id, read="read")

        threads = [threading.Thread(target=edit_bodies), threading.Thread(target=mark_read)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        row = test_db.get_entry(entry_id)
        assert row.entry.read is ReadState.READ
        assert row.entry.body_text == "body 99"
