import unittest

from engine.notifications import ThoughtPopup, Toast
from engine.timers import TimerQueue


class TestToast(unittest.TestCase):
    def setUp(self):
        self.timers = TimerQueue()
        self.events = []
        self.toast = Toast(self.timers, 2.5,
                           on_show=lambda m: self.events.append(("show", m)),
                           on_hide=lambda: self.events.append(("hide",)))

    def test_auto_hides(self):
        self.toast.show("hi")
        self.assertTrue(self.toast.visible)
        self.timers.update(2.0)
        self.assertTrue(self.toast.visible)
        self.timers.update(0.5)
        self.assertFalse(self.toast.visible)
        self.assertEqual(self.events, [("show", "hi"), ("hide",)])

    def test_show_again_restarts_duration(self):
        self.toast.show("one")
        self.timers.update(2.0)
        self.toast.show("two")
        self.timers.update(2.0)
        self.assertTrue(self.toast.visible)
        self.assertEqual(self.toast.message, "two")
        self.timers.update(0.5)
        self.assertFalse(self.toast.visible)
        self.assertEqual(self.events.count(("hide",)), 1)

    def test_hide_cancels_timer(self):
        self.toast.show("hi")
        self.toast.hide()
        self.assertFalse(self.toast.visible)
        self.assertEqual(self.timers.pending_count, 0)
        self.toast.hide()
        self.assertEqual(self.events, [("show", "hi"), ("hide",)])


class TestThoughtPopup(unittest.TestCase):
    def setUp(self):
        self.timers = TimerQueue()
        self.shown = []
        self.popup = ThoughtPopup(self.timers, 1.0, on_show=self.shown.append)

    def test_shows_after_delay(self):
        self.popup.schedule("Did I turn off the stove?")
        self.assertTrue(self.popup.scheduled)
        self.timers.update(0.5)
        self.assertFalse(self.popup.visible)
        self.timers.update(0.5)
        self.assertTrue(self.popup.visible)
        self.assertEqual(self.shown, ["Did I turn off the stove?"])

    def test_schedule_without_text_hides(self):
        self.popup.schedule("a")
        self.timers.update(1.0)
        self.popup.schedule(None)
        self.assertFalse(self.popup.visible)
        self.assertFalse(self.popup.scheduled)

    def test_reschedule_cancels_pending(self):
        self.popup.schedule("old")
        self.timers.update(0.5)
        self.popup.schedule("new")
        self.timers.update(0.25)
        self.assertFalse(self.popup.visible)
        self.timers.update(0.75)
        self.assertEqual(self.shown, ["new"])

    def test_hide_cancels_pending(self):
        self.popup.schedule("a")
        self.popup.hide()
        self.timers.update(5.0)
        self.assertEqual(self.shown, [])
        self.assertEqual(self.timers.pending_count, 0)


if __name__ == "__main__":
    unittest.main()
