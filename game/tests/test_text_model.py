import unittest

from engine.timers import TimerQueue
from engine.ui.text_model import RevealParams, RevealState, TextModel

TICK = 0.25


class TestTextModel(unittest.TestCase):
    def setUp(self):
        self.timers = TimerQueue()
        self.seen = []
        self.done = []
        self.model = TextModel(self.timers, RevealParams(tick_s=TICK), on_text=self.seen.append)

    def test_one_char_per_tick(self):
        self.model.reveal("abc", on_complete=lambda: self.done.append(1))
        self.assertEqual(self.model.state, RevealState.REVEALING)
        self.assertEqual(self.model.shown_text, "a")
        self.timers.update(TICK)
        self.assertEqual(self.model.shown_text, "ab")
        self.timers.update(TICK)
        self.assertEqual(self.model.shown_text, "abc")
        self.assertTrue(self.model.revealing)
        self.assertEqual(self.done, [])
        self.timers.update(TICK)
        self.assertEqual(self.model.state, RevealState.DONE)
        self.assertEqual(self.done, [1])
        self.assertEqual(self.seen, ["", "a", "ab", "abc"])

    def test_skip_to_end_completes_once(self):
        self.model.reveal("hello", on_complete=lambda: self.done.append(1))
        self.timers.update(TICK)
        self.assertTrue(self.model.skip_to_end())
        self.assertEqual(self.seen[-1], "hello")
        self.assertEqual(self.model.state, RevealState.DONE)
        self.assertEqual(self.done, [1])
        self.timers.update(10.0)
        self.assertEqual(self.done, [1])
        self.assertEqual(self.timers.pending_count, 0)

    def test_skip_only_while_revealing(self):
        self.assertFalse(self.model.skip_to_end())
        self.model.reveal("x", on_complete=lambda: self.done.append(1))
        self.timers.update(1.0)
        self.assertFalse(self.model.skip_to_end())
        self.assertEqual(self.done, [1])

    def test_cancel_never_completes(self):
        self.model.reveal("hello", on_complete=lambda: self.done.append(1))
        self.model.cancel()
        self.assertEqual(self.model.state, RevealState.IDLE)
        self.timers.update(10.0)
        self.assertEqual(self.done, [])

    def test_new_reveal_replaces_old(self):
        self.model.reveal("first", on_complete=lambda: self.done.append("first"))
        self.timers.update(TICK)
        self.model.reveal("go", on_complete=lambda: self.done.append("second"))
        self.timers.update(10.0)
        self.assertEqual(self.done, ["second"])
        self.assertEqual(self.model.shown_text, "go")

    def test_empty_text_completes_immediately(self):
        self.model.reveal("", on_complete=lambda: self.done.append(1))
        self.assertEqual(self.model.state, RevealState.DONE)
        self.assertEqual(self.done, [1])


if __name__ == "__main__":
    unittest.main()
