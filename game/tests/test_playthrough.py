import unittest
from pathlib import Path

from engine.narrative.loader import load_story_file
from engine.narrative.presenter import ScenePresenter
from game.tests.recording_sink import RecordingSink

STORY_PATH = Path(__file__).resolve().parents[1] / "content" / "story.yaml"


class TestShippedStory(unittest.TestCase):
    """ Walk the sample story start to finish with the default timings, skipping every reveal. """

    def setUp(self):
        self.sink = RecordingSink()
        self.p = ScenePresenter(load_story_file(str(STORY_PATH)), self.sink)
        self.p.start()
        self.p.update(0)
        self.assertTrue(self.p.skip())
        self.p.update(0.31)

    def choose(self, index, expect):
        self.assertTrue(self.p.click_choice(index))
        self.p.update(0.3)
        self.p.skip()
        self.p.update(0.3)
        self.assertEqual(self.p.progress.current_scene_id, expect)
        self.assertFalse(self.p.transitioning)

    def test_full_route(self):
        self.assertEqual(self.sink.chapter_label, "Chapter 1")
        self.choose(0, "1.1_boy")
        self.choose(0, "2.0")
        self.assertTrue(self.sink.text.startswith("He counts the buses"))

        self.choose(0, "2.1_wrong")
        self.assertEqual(self.sink.toast, "Это решение ни на что не повлияет")
        self.choose(0, "2.0")
        self.assertIsNone(self.sink.toast)
        self.choose(1, "2.2")
        self.p.update(1.0)
        self.assertEqual(self.sink.thought, "Did I turn off the stove?")

        self.choose(0, "4.0")
        self.assertIsNone(self.sink.thought)
        self.assertEqual(self.p.progress.chapter, 4)
        self.assertFalse(self.p.click_choice(0))
        self.assertEqual(self.sink.choices[0].hint, "Look around the flat a little first")
        self.p.click_object("photo")
        self.p.click_object("letter")
        self.choose(0, "4.1")
        self.assertIn("door", self.p.progress.visited_objects)

        self.choose(0, "5.0")
        self.assertFalse(self.p.click_choice(4))
        for i, name in enumerate(["5.shrimp", "5.bunny", "5.monkey", "5.psycho"]):
            self.choose(i, name)
            self.choose(0, "5.0")
        self.choose(4, "6.0")
        self.assertEqual(self.sink.chapter_label, "Epilogue")

        self.choose(0, "1.0")
        pr = self.p.progress
        self.assertIsNone(pr.perspective)
        self.assertEqual(pr.visited_objects, set())
        self.assertEqual(pr.daughter_scenes, set())
        self.assertEqual(pr.chapter, 1)


if __name__ == "__main__":
    unittest.main()
