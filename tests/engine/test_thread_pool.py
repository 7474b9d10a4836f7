from __future__ import annotations

from datetime import timedelta

from headline_tracker.engine import ChangeDetector, RetentionSweeper, ThreadPoolManager


def test_thread_pool_manager_reuses_executor() -> None:
    manager = ThreadPoolManager(workers=2)
    first = manager.get()
    assert manager.get() is first
    manager.shutdown(wait=True)
    assert manager.get() is not first
    manager.shutdown(wait=True)


def test_concurrent_detection_and_sweeps_keep_keys_unique(store, observer, make_item, now) -> None:
    detector = ChangeDetector(store, observer)
    sweeper = RetentionSweeper(store, observer)
    manager = ThreadPoolManager(workers=8)
    executor = manager.get()

    def feed(round_number: int) -> None:
        for index in range(50):
            age = timedelta(hours=72 if index % 5 == 0 else 1)
            detector.process(
                make_item(f"id-{index}", f"title-{round_number}", published_at=now - age), "Tech"
            )

    futures = [executor.submit(feed, round_number) for round_number in range(6)]
    futures += [executor.submit(sweeper.sweep, now) for _ in range(4)]
    for future in futures:
        future.result()
    manager.shutdown(wait=True)

    keys = [article.key for article in store.snapshot()]
    assert len(keys) == len(set(keys))
    assert store.count() <= 50
