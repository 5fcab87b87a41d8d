import gc
import threading
import time
from notestash.locks import LockTable


def test_same_key_same_lock():
    table = LockTable()
    lock = table.lock_for('a')
    assert table.lock_for('a') is lock
    assert table.lock_for('b') is not lock


def test_unused_locks_are_reclaimed():
    table = LockTable()
    with table.hold('a'):
        table.lock_for('b')
        gc.collect()
        assert len(table) == 1
    gc.collect()
    assert len(table) == 0


def test_hold_is_exclusive_per_key():
    table = LockTable()
    active = []
    overlaps = []

    def work(key):
        with table.hold(key):
            active.append(key)
            if active.count(key) > 1:
                overlaps.append(key)
            time.sleep(0.001)
            active.remove(key)

    threads = [threading.Thread(target=work, args=(k,)) for k in ['x', 'y'] * 20]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert not overlaps


def test_different_keys_do_not_block():
    table = LockTable()
    acquired = threading.Event()

    def other():
        with table.hold('b'):
            acquired.set()

    with table.hold('a'):
        thread = threading.Thread(target=other)
        thread.start()
        assert acquired.wait(5)
        thread.join()
