import unittest

from rnb.battle import Move, MoveAction, SwitchAction
from rnb.strategy.explainer import explain_action
from rnb.strategy.move_evaluator import (
    ActionEvaluation,
    assess_threat,
    classify_move,
    evaluate_all_actions,
    type_advantage_score,
)
from tests.factories import CROSS_CHOP, GROWL, TACKLE, THUNDER_WAVE, _mk_geodude, _mk_machamp, _mk_rattata, _mk_state


class TestExplainAction(unittest.TestCase):
    def test_guaranteed_ko(self):
        state = _mk_state([_mk_machamp()], [_mk_rattata()])
        self.assertEqual(
            "GUARANTEED KO - Cross-chop deals 1688-1986 damage vs 19 HP",
            explain_action(state, MoveAction(0, CROSS_CHOP), True),
        )

    def test_likely_and_possible_ko(self):
        state = _mk_state([_mk_machamp(moves=[TACKLE])], [_mk_geodude()])

        state.enemy_active.current_hp = 23
        self.assertEqual("LIKELY KO - Tackle averages 24 damage vs 23 HP", explain_action(state, MoveAction(0, TACKLE), True))

        state.enemy_active.current_hp = 25
        self.assertEqual("POSSIBLE KO - Tackle max rolls 26 vs 25 HP", explain_action(state, MoveAction(0, TACKLE), True))

    def test_chip_damage(self):
        state = _mk_state([_mk_rattata()], [_mk_machamp()])
        self.assertEqual("Chip damage - Tackle deals ~1% (2 damage)", explain_action(state, MoveAction(0, TACKLE), True))

    def test_switches(self):
        state = _mk_state([_mk_rattata(), _mk_machamp()], [_mk_rattata(name="foe")])
        self.assertEqual(
            "Switching to Machamp for a favorable matchup (faster and can 2HKO+)",
            explain_action(state, SwitchAction(1, "machamp"), True),
        )

        state = _mk_state([_mk_machamp(), _mk_rattata()], [_mk_machamp(name="foe")])
        self.assertEqual("Defensive switch to Rattata to avoid OHKO", explain_action(state, SwitchAction(1, "rattata"), True))

    def test_status_moves(self):
        state = _mk_state([_mk_rattata(moves=[THUNDER_WAVE, GROWL])], [_mk_rattata(name="foe")])
        self.assertEqual(
            "Status move - Paralyzing Foe (25% full paralysis chance)",
            explain_action(state, MoveAction(0, THUNDER_WAVE), True),
        )
        self.assertEqual("Using Growl", explain_action(state, MoveAction(1, GROWL), True))

    def test_opponent_actions_are_not_explained(self):
        state = _mk_state([_mk_rattata()], [_mk_machamp()])
        self.assertEqual("", explain_action(state, MoveAction(0, CROSS_CHOP), False))


def _evaluation(score):
    return ActionEvaluation(action=MoveAction(0, TACKLE), score=score)


class TestMoveEvaluator(unittest.TestCase):
    def test_threat_bands(self):
        self.assertEqual(100, assess_threat(_mk_machamp(), _mk_rattata()))
        self.assertEqual(30, assess_threat(_mk_rattata(), _mk_machamp()))
        self.assertEqual(30, assess_threat(_mk_rattata(moves=[GROWL]), _mk_machamp()))

    def test_type_advantage(self):
        water_gun = Move(name="water-gun", type="water", power=40, damage_class="special")
        self.assertEqual(50, type_advantage_score(_mk_machamp(), _mk_rattata(moves=[])))
        self.assertEqual(50, type_advantage_score(_mk_machamp(), _mk_rattata()))
        self.assertEqual(35, type_advantage_score(_mk_geodude(), _mk_machamp()))
        self.assertEqual(20, type_advantage_score(_mk_geodude(), _mk_rattata(moves=[water_gun])))
        self.assertEqual(70, type_advantage_score(_mk_geodude(), _mk_rattata()))
        self.assertEqual(90, type_advantage_score(_mk_geodude(), _mk_rattata(moves=[Move(name="thunder-shock", type="electric", power=40)])))

    def test_actions_ranked_best_first(self):
        state = _mk_state([_mk_machamp(moves=[CROSS_CHOP, GROWL]), _mk_rattata()], [_mk_rattata(name="foe")])

        evaluations = evaluate_all_actions(state, True)

        self.assertEqual(3, len(evaluations))
        self.assertEqual("cross-chop", evaluations[0].action.move.name)
        self.assertEqual("growl", evaluations[1].action.move.name)
        self.assertIsInstance(evaluations[2].action, SwitchAction)
        self.assertEqual(sorted((e.score for e in evaluations), reverse=True), [e.score for e in evaluations])
        self.assertIn("Guaranteed KO (1837 damage)", evaluations[0].reasons)
        self.assertIn("Loses tempo", evaluations[2].reasons)

    def test_classification_bands(self):
        evaluations = [_evaluation(80)]
        expected = [
            (80, "Best Move", "!!"),
            (77, "Best Move", "!!"),
            (75, "Excellent Move", "!"),
            (65, "Good Move", ""),
            (50, "Inaccuracy", "?!"),
            (35, "Mistake", "?"),
            (29, "Blunder", "??"),
        ]
        for score, name, symbol in expected:
            classification = classify_move(_evaluation(score), evaluations)
            self.assertEqual(name, classification.classification)
            self.assertEqual(symbol, classification.symbol)
            self.assertEqual(80 - score, classification.score_diff)
            self.assertEqual(80, classification.best_score)

    def test_classify_without_evaluations(self):
        self.assertIsNone(classify_move(_evaluation(50), []))
