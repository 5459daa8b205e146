import threading

from live_logreg.mailbox import FrameMailbox


def test_take_on_empty_mailbox_returns_none():
    mailbox = FrameMailbox()
    assert mailbox.take() is None
    assert not mailbox.has_frame


def test_latest_publish_wins():
    mailbox = FrameMailbox()
    mailbox.publish("first")
    mailbox.publish("second")
    assert mailbox.take() == "second"
    assert mailbox.take() is None


def test_peek_does_not_consume():
    mailbox = FrameMailbox()
    mailbox.publish("frame")
    assert mailbox.peek() == "frame"
    assert mailbox.has_frame
    assert mailbox.take() == "frame"
    assert not mailbox.has_frame


def test_publish_does_not_wait_for_consumer():
    mailbox = FrameMailbox()
    done = threading.Event()

    def producer():
        for i in range(1000):
            mailbox.publish(i)
        done.set()

    thread = threading.Thread(target=producer)
    thread.start()
    thread.join(timeout=5)
    assert done.is_set()
    assert mailbox.take() == 999


def test_concurrent_consumer_sees_increasing_frames():
    mailbox = FrameMailbox()
    seen = []

    def producer():
        for i in range(5000):
            mailbox.publish(i)

    thread = threading.Thread(target=producer)
    thread.start()
    while thread.is_alive():
        frame = mailbox.take()
        if frame is not None:
            seen.append(frame)
    thread.join()
    leftover = mailbox.take()
    if leftover is not None:
        seen.append(leftover)

    assert seen
    assert seen == sorted(set(seen))
    assert seen[-1] == 4999
