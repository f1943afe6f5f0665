import random
import unittest

import constants
from rnb.battle import Move, MoveAction
from rnb.search.enemy_ai import (
    MoveScore,
    dies_to,
    pick_best_score,
    roll_damage,
    score_enemy_moves,
    select_enemy_action,
)
from rnb.strategy.damage import DamageResult
from tests.factories import (
    CROSS_CHOP,
    GROWL,
    QUICK_ATTACK,
    TACKLE,
    THUNDER_WAVE,
    _mk_geodude,
    _mk_machamp,
    _mk_rattata,
    _mk_state,
)

BODY_SLAM = Move(name="body-slam", type="normal", power=85, accuracy=100, damage_class="physical")
STONE_EDGE = Move(name="stone-edge", type="rock", power=100, accuracy=80, damage_class="physical")
ROCK_SLIDE = Move(name="rock-slide", type="rock", power=75, accuracy=90, damage_class="physical")


def _score_of(scores, name):
    return next(s.score for s in scores if s.move.name == name)


class TestRollDamage(unittest.TestCase):
    def test_rolls_stay_within_range(self):
        rng = random.Random(3)
        damage = DamageResult(min=85, max=100, average=92)
        rolls = {roll_damage(damage, rng) for _ in range(500)}
        self.assertEqual(85, min(rolls))
        self.assertEqual(100, max(rolls))

    def test_flat_range(self):
        self.assertEqual(7, roll_damage(DamageResult(min=7, max=7, average=7), random.Random(0)))


class TestScoreEnemyMoves(unittest.TestCase):
    def test_status_moves_score_six(self):
        scores = score_enemy_moves(_mk_rattata(moves=[GROWL, THUNDER_WAVE]), _mk_machamp(), rng=random.Random(0))
        self.assertEqual([6, 6], [s.score for s in scores])

    def test_fast_kill_beats_status(self):
        for seed in range(20):
            scores = score_enemy_moves(_mk_machamp(moves=[GROWL, CROSS_CHOP]), _mk_rattata(), rng=random.Random(seed))
            self.assertEqual(6, _score_of(scores, "growl"))
            self.assertIn(_score_of(scores, "cross-chop"), (12, 14))

    def test_slow_kill_bonus(self):
        for seed in range(20):
            target = _mk_machamp(moves=[GROWL])
            target.current_hp = 2
            scores = score_enemy_moves(_mk_rattata(moves=[TACKLE]), target, rng=random.Random(seed))
            self.assertIn(scores[0].score, (9, 11))

    def test_boost_on_ko_ability_adds_one(self):
        for seed in range(20):
            attacker = _mk_machamp(moves=[CROSS_CHOP], ability="moxie")
            scores = score_enemy_moves(attacker, _mk_rattata(), rng=random.Random(seed))
            self.assertIn(scores[0].score, (13, 15))

    def test_priority_when_slower_and_in_danger(self):
        for seed in range(20):
            attacker = _mk_rattata(moves=[BODY_SLAM, QUICK_ATTACK])
            scores = score_enemy_moves(attacker, _mk_machamp(), rng=random.Random(seed))
            self.assertGreaterEqual(_score_of(scores, "quick-attack"), 11)
            self.assertLessEqual(_score_of(scores, "body-slam"), 8)

    def test_no_priority_bonus_when_not_in_danger(self):
        for seed in range(20):
            attacker = _mk_rattata(moves=[BODY_SLAM, QUICK_ATTACK])
            scores = score_enemy_moves(attacker, _mk_machamp(moves=[GROWL]), rng=random.Random(seed))
            self.assertLessEqual(_score_of(scores, "quick-attack"), 8)

    def test_high_crit_bonus_on_super_effective_hit(self):
        seen = set()
        for seed in range(200):
            target = _mk_machamp(moves=[GROWL])
            target.types = ["fire"]
            scores = score_enemy_moves(_mk_geodude(moves=[STONE_EDGE]), target, rng=random.Random(seed))
            seen.add(scores[0].score)
        self.assertEqual({6, 7, 8, 9}, seen)

    def test_no_high_crit_bonus_without_both_conditions(self):
        for attacker_move, target_types in ((ROCK_SLIDE, ["fire"]), (STONE_EDGE, ["normal"])):
            seen = set()
            for seed in range(200):
                target = _mk_machamp(moves=[GROWL])
                target.types = target_types
                scores = score_enemy_moves(_mk_geodude(moves=[attacker_move]), target, rng=random.Random(seed))
                seen.add(scores[0].score)
            self.assertEqual({6, 8}, seen)

    def test_highest_damage_bonus_split(self):
        lucky = 0
        for seed in range(400):
            scores = score_enemy_moves(_mk_geodude(moves=[TACKLE]), _mk_machamp(moves=[GROWL]), rng=random.Random(seed))
            if scores[0].score == constants.AI_HIGHEST_DAMAGE_LUCKY_SCORE:
                lucky += 1
        # about one in five
        self.assertTrue(40 <= lucky <= 120)

    def test_dies_to(self):
        self.assertTrue(dies_to(_mk_machamp(), _mk_rattata()))
        self.assertFalse(dies_to(_mk_rattata(), _mk_machamp()))
        self.assertFalse(dies_to(_mk_machamp(moves=[GROWL]), _mk_rattata()))


class TestPickBestScore(unittest.TestCase):
    def test_empty(self):
        self.assertIsNone(pick_best_score([]))

    def test_ties_are_broken_at_random(self):
        scores = [
            MoveScore(action=MoveAction(0, GROWL), score=6),
            MoveScore(action=MoveAction(1, THUNDER_WAVE), score=6),
            MoveScore(action=MoveAction(2, TACKLE), score=2),
        ]
        rng = random.Random(7)
        picked = {pick_best_score(scores, rng).move.name for _ in range(100)}
        self.assertEqual({"growl", "thunder-wave"}, picked)


class TestSelectEnemyAction(unittest.TestCase):
    def test_never_switches(self):
        for seed in range(20):
            state = _mk_state([_mk_machamp()], [_mk_rattata(moves=[TACKLE]), _mk_geodude()])
            action = select_enemy_action(state, random.Random(seed))
            self.assertEqual(constants.MOVE_ACTION, action.type)
            self.assertEqual("tackle", action.move.name)

    def test_picks_the_priority_move_in_danger(self):
        for seed in range(20):
            state = _mk_state([_mk_machamp()], [_mk_rattata(moves=[BODY_SLAM, QUICK_ATTACK])])
            self.assertEqual("quick-attack", select_enemy_action(state, random.Random(seed)).move.name)

    def test_no_moves(self):
        state = _mk_state([_mk_machamp()], [_mk_rattata(moves=[]), _mk_geodude()])
        self.assertIsNone(select_enemy_action(state, random.Random(0)))
