import unittest

from engine.timers import TimerQueue


class TestTimerQueue(unittest.TestCase):
    def test_fires_in_due_order(self):
        q = TimerQueue()
        out = []
        q.call_later(0.5, lambda: out.append("b"))
        q.call_later(0.1, lambda: out.append("a"))
        q.call_later(0.5, lambda: out.append("c"))   # tie keeps scheduling order
        self.assertEqual(q.update(1.0), 3)
        self.assertEqual(out, ["a", "b", "c"])

    def test_zero_delay_waits_for_next_update(self):
        q = TimerQueue()
        out = []
        q.call_later(0, lambda: out.append(1))
        self.assertEqual(out, [])
        q.update(0)
        self.assertEqual(out, [1])

    def test_not_due_yet(self):
        q = TimerQueue()
        out = []
        q.call_later(1.0, lambda: out.append(1))
        q.update(0.5)
        self.assertEqual(out, [])
        q.update(0.5)
        self.assertEqual(out, [1])

    def test_cancelled_timer_never_fires(self):
        q = TimerQueue()
        out = []
        t = q.call_later(0.1, lambda: out.append(1))
        t.cancel()
        self.assertFalse(t.pending)
        q.update(1.0)
        self.assertEqual(out, [])
        self.assertEqual(q.pending_count, 0)

    def test_chained_timers_fire_within_one_update(self):
        q = TimerQueue()
        stamps = []

        def tick():
            stamps.append(q.now)
            if len(stamps) < 4:
                q.call_later(0.25, tick)

        q.call_later(0.25, tick)
        q.update(2.0)
        self.assertEqual(stamps, [0.25, 0.5, 0.75, 1.0])
        self.assertEqual(q.now, 2.0)

    def test_clear(self):
        q = TimerQueue()
        out = []
        q.call_later(0.1, lambda: out.append(1))
        q.call_later(0.2, lambda: out.append(2))
        self.assertEqual(q.pending_count, 2)
        q.clear()
        q.update(1.0)
        self.assertEqual(out, [])


if __name__ == "__main__":
    unittest.main()
