import unittest

from engine.narrative.gate import ChoiceAction, ChoiceGate, ChoiceView, ObjectView
from engine.narrative.types import Choice, InteractiveObject, Scene
from engine.progress import PlayerProgress


def flat_scene():
    return Scene(
        id="4.0",
        text="Flat",
        objects=[InteractiveObject("photo", "Photo", "A beach."),
                 InteractiveObject("kettle", "Kettle", "Still warm.")],
        choices=[Choice("Leave", next="4.1", requires_visited_objects_at_least=2)],
    )


class TestObjects(unittest.TestCase):
    def test_visited_flag(self):
        progress = PlayerProgress()
        gate = ChoiceGate(progress)
        progress.mark_visited("kettle")
        self.assertEqual(gate.build_objects(flat_scene()), [
            ObjectView("photo", "Photo", False),
            ObjectView("kettle", "Kettle", True),
        ])

    def test_visit_unknown_object(self):
        progress = PlayerProgress()
        gate = ChoiceGate(progress)
        self.assertIsNone(gate.visit_object(flat_scene(), "sofa"))
        self.assertIsNone(gate.visit_object(None, "photo"))
        self.assertEqual(progress.visited_objects, set())

    def test_visit_twice(self):
        progress = PlayerProgress()
        gate = ChoiceGate(progress)
        gate.visit_object(flat_scene(), "photo")
        gate.visit_object(flat_scene(), "photo")
        self.assertEqual(progress.visited_count, 1)


class TestEligibility(unittest.TestCase):
    def setUp(self):
        self.progress = PlayerProgress()
        self.gate = ChoiceGate(self.progress)

    def test_min_visited_objects(self):
        choice = Choice("Leave", next="4.1", requires_visited_objects_at_least=2)
        self.progress.mark_visited("photo")
        self.assertEqual(self.gate.eligibility(choice), (False, "Explore at least 2 things first"))
        self.progress.mark_visited("kettle")
        self.assertEqual(self.gate.eligibility(choice), (True, None))

    def test_locked_hint_wins(self):
        choice = Choice("Leave", next="4.1", requires_visited_objects_at_least=1, locked_hint="Look around first")
        self.assertEqual(self.gate.eligibility(choice), (False, "Look around first"))

    def test_daughter_scenes(self):
        choice = Choice("Say goodbye", next="6.0", requires_all_daughter_scenes=True)
        self.assertEqual(self.gate.eligibility(choice),
                         (False, "Listen to all of her stories before moving on"))
        for name in ("monkey", "bunny", "psycho", "shrimp"):
            self.assertFalse(self.gate.eligibility(choice)[0])
            self.progress.daughter_scenes.add(name)
        self.assertTrue(self.gate.eligibility(choice)[0])

    def test_both_unmet_reports_daughter_hint(self):
        choice = Choice("Go", next="x", requires_visited_objects_at_least=3, requires_all_daughter_scenes=True)
        eligible, hint = self.gate.eligibility(choice)
        self.assertFalse(eligible)
        self.assertEqual(hint, "Listen to all of her stories before moving on")

    def test_build_choices(self):
        scene = Scene(id="1.0", choices=[
            Choice("", next="1.1"),
            Choice("Back", next="1.0", style="secondary"),
            Choice("Leave", next="4.1", requires_visited_objects_at_least=1),
        ])
        self.assertEqual(self.gate.build_choices(scene), [
            ChoiceView(0, "Continue", "primary", True, None),
            ChoiceView(1, "Back", "secondary", True, None),
            ChoiceView(2, "Leave", "primary", False, "Explore at least 1 things first"),
        ])


class TestResolve(unittest.TestCase):
    def setUp(self):
        self.gate = ChoiceGate(PlayerProgress())

    def test_restart_tag_and_sentinel(self):
        self.assertEqual(self.gate.resolve(Choice("Again", restart=True)), (ChoiceAction.RESTART, None))
        self.assertEqual(self.gate.resolve(Choice("Again", next="restart")), (ChoiceAction.RESTART, None))

    def test_wrong_and_correct_follow_next(self):
        self.assertEqual(self.gate.resolve(Choice("9", next="2.1_wrong", wrong=True)),
                         (ChoiceAction.GOTO, "2.1_wrong"))
        self.assertEqual(self.gate.resolve(Choice("14", next="2.2", correct=True)),
                         (ChoiceAction.GOTO, "2.2"))

    def test_dead_end(self):
        self.assertEqual(self.gate.resolve(Choice("...")), (ChoiceAction.NONE, None))


if __name__ == "__main__":
    unittest.main()
