import threading
import time

from confdb.timer import Timer


def test_wait_expires():
    timer = Timer()
    assert timer.wait(10) is True
    assert timer.is_expired() is True
    assert timer.is_waiting() is False


def test_second_wait_refused_until_cleared():
    timer = Timer()
    assert timer.wait(5) is True
    assert timer.wait(5) is False
    timer.clear()
    assert timer.is_expired() is False
    assert timer.wait(5) is True


def test_clear_from_other_thread_cancels_wait():
    timer = Timer()
    results = []
    worker = threading.Thread(target=lambda: results.append(timer.wait(5000)))
    start = time.monotonic()
    worker.start()
    while not timer.is_waiting():
        time.sleep(0.001)
    timer.clear()
    worker.join(2)
    assert results == [False]
    assert time.monotonic() - start < 4
    assert timer.is_expired() is False


def test_wait_while_waiting_is_refused():
    timer = Timer()
    worker = threading.Thread(target=timer.wait, args=(5000,))
    worker.start()
    while not timer.is_waiting():
        time.sleep(0.001)
    assert timer.wait(10) is False
    timer.clear()
    worker.join(2)
    assert timer.is_waiting() is False