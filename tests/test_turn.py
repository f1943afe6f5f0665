import random
import unittest

import constants
from rnb.battle import Move, MoveAction, SwitchAction
from rnb.search.actions import generate_possible_actions
from rnb.simulation.switch_handler import resolve_faints
from rnb.simulation.turn import order_actions, simulate_turn, simulate_turn_worst_case
from tests.factories import (
    CONFUSE_RAY,
    CROSS_CHOP,
    GROWL,
    HYPNOSIS,
    TACKLE,
    THUNDER_WAVE,
    _mk_geodude,
    _mk_machamp,
    _mk_rattata,
    _mk_state,
)

ZERO_SPREAD = {"hp": 0, "atk": 0, "def": 0, "spa": 0, "spd": 0, "spe": 0}


def _use(move, index=0):
    return MoveAction(move_index=index, move=move)


def _events_of(result, event_type):
    return [e for e in result.events if e.type == event_type]


class TestOrderActions(unittest.TestCase):
    def test_faster_side_goes_first(self):
        state = _mk_state([_mk_rattata()], [_mk_machamp()])
        order = order_actions(state, _use(TACKLE), _use(CROSS_CHOP))
        self.assertEqual([False, True], [is_player for _, is_player in order])

    def test_priority_beats_speed(self):
        state = _mk_state([_mk_rattata()], [_mk_machamp()])
        quick = MoveAction(0, Move(name="quick-attack", type="normal", power=40, damage_class="physical", priority=1))
        order = order_actions(state, quick, _use(CROSS_CHOP))
        self.assertTrue(order[0][1])

    def test_switch_beats_priority_moves(self):
        state = _mk_state([_mk_rattata(), _mk_geodude()], [_mk_rattata()])
        quick = MoveAction(0, Move(name="extreme-speed", type="normal", power=80, damage_class="physical", priority=2))
        order = order_actions(state, quick, SwitchAction(1, "geodude"))
        self.assertFalse(order[0][1])

    def test_speed_tie_player_first_normally_and_last_in_worst_case(self):
        state = _mk_state([_mk_rattata()], [_mk_rattata(name="other")])
        self.assertTrue(order_actions(state, _use(TACKLE), _use(TACKLE))[0][1])
        self.assertFalse(order_actions(state, _use(TACKLE), _use(TACKLE), worst_case=True)[0][1])


class TestSimulateTurn(unittest.TestCase):
    def test_faster_opponent_knocks_out_before_player_moves(self):
        state = _mk_state([_mk_rattata()], [_mk_machamp()])

        result = simulate_turn(state, _use(TACKLE), _use(CROSS_CHOP), rng=random.Random(1))

        self.assertEqual(1, state.turn)
        self.assertTrue(state.player_active.fainted)
        self.assertEqual(0, state.player_active.current_hp)
        self.assertEqual(165, state.enemy_active.current_hp)
        move_uses = _events_of(result, constants.EVENT_MOVE_USE)
        self.assertEqual([False], [e.is_player for e in move_uses])
        self.assertEqual(1, len(_events_of(result, constants.EVENT_FAINT)))

    def test_switch_takes_the_incoming_hit(self):
        state = _mk_state([_mk_rattata(), _mk_geodude()], [_mk_machamp()])

        result = simulate_turn(state, SwitchAction(1, "geodude"), _use(CROSS_CHOP), rng=random.Random(1))

        self.assertEqual(constants.EVENT_SWITCH, result.events[0].type)
        self.assertEqual(1, state.player_active_index)
        self.assertEqual(19, state.player_team[0].current_hp)
        self.assertTrue(state.player_team[1].fainted)
        self.assertIn("super effective", _events_of(result, constants.EVENT_MOVE)[0].text)

    def test_switch_to_fainted_member_fails(self):
        state = _mk_state([_mk_rattata(), _mk_rattata(name="raticate")], [_mk_rattata(name="other", moves=[GROWL])])
        state.player_team[1].take_damage(100)

        result = simulate_turn(state, SwitchAction(1, "raticate"), _use(GROWL), rng=random.Random(1))

        self.assertEqual(0, state.player_active_index)
        self.assertEqual([constants.EVENT_SWITCH_FAIL], [e.type for e in result.events if e.is_player])

    def test_switch_to_active_or_out_of_range_fails(self):
        for index in (0, 5, -1):
            state = _mk_state([_mk_rattata(), _mk_geodude()], [_mk_rattata(name="other", moves=[GROWL])])
            result = simulate_turn(state, SwitchAction(index, "rattata"), _use(GROWL), rng=random.Random(1))
            self.assertEqual(0, state.player_active_index)
            self.assertEqual(1, len(_events_of(result, constants.EVENT_SWITCH_FAIL)))

    def test_average_damage_speed_tie(self):
        state = _mk_state([_mk_rattata()], [_mk_rattata(name="other")])

        result = simulate_turn(state, _use(TACKLE), _use(TACKLE), rng=random.Random(1))

        self.assertTrue(_events_of(result, constants.EVENT_MOVE_USE)[0].is_player)
        self.assertEqual(19 - 6, state.player_active.current_hp)
        self.assertEqual(19 - 6, state.enemy_active.current_hp)

    def test_worst_case_rolls_and_speed_tie(self):
        state = _mk_state([_mk_rattata()], [_mk_rattata(name="other")])

        result = simulate_turn_worst_case(state, _use(TACKLE), _use(TACKLE))

        self.assertFalse(_events_of(result, constants.EVENT_MOVE_USE)[0].is_player)
        self.assertEqual(19 - 10, state.player_active.current_hp)
        self.assertEqual(19 - 6, state.enemy_active.current_hp)

    def test_burn_halves_physical_damage_and_chips(self):
        burned = _mk_rattata(level=100, ivs=ZERO_SPREAD, evs=ZERO_SPREAD)
        burned.status = constants.BURN
        state = _mk_state([burned], [_mk_rattata(level=100, ivs=ZERO_SPREAD, evs=ZERO_SPREAD, name="other", moves=[GROWL])])

        result = simulate_turn(state, _use(TACKLE), _use(GROWL), rng=random.Random(1))

        player_hits = [e for e in _events_of(result, constants.EVENT_MOVE) if e.is_player]
        self.assertEqual(37, player_hits[0].damage)
        self.assertEqual(170 - 37, state.enemy_active.current_hp)
        self.assertEqual(170 - 10, state.player_active.current_hp)

    def test_worst_case_flags_inaccurate_player_moves(self):
        state = _mk_state([_mk_machamp()], [_mk_geodude()])
        result = simulate_turn_worst_case(state, _use(CROSS_CHOP), _use(TACKLE))
        risks = _events_of(result, constants.EVENT_ACCURACY_RISK)
        self.assertEqual(1, len(risks))
        self.assertIn("80% accuracy", risks[0].text)

        average = simulate_turn(_mk_state([_mk_machamp()], [_mk_geodude()]), _use(CROSS_CHOP), _use(TACKLE))
        self.assertEqual([], _events_of(average, constants.EVENT_ACCURACY_RISK))

    def test_worst_case_player_sleep_lasts_one_turn(self):
        state = _mk_state([_mk_machamp(moves=[HYPNOSIS])], [_mk_rattata()])

        result = simulate_turn_worst_case(state, _use(HYPNOSIS), _use(TACKLE))

        self.assertIsNone(state.enemy_active.status)
        self.assertEqual(
            [constants.EVENT_STATUS, constants.EVENT_STATUS_PREVENT, constants.EVENT_STATUS_CURE],
            [e.type for e in result.events if e.type.startswith("status")],
        )
        self.assertEqual([True], [e.is_player for e in _events_of(result, constants.EVENT_MOVE_USE)])

    def test_worst_case_opponent_confusion_lasts_four_turns(self):
        state = _mk_state([_mk_rattata()], [_mk_machamp(moves=[CONFUSE_RAY])])

        result = simulate_turn_worst_case(state, _use(TACKLE), _use(CONFUSE_RAY))

        self.assertEqual(3, state.player_active.confusion)
        self.assertEqual(19 - 1, state.player_active.current_hp)
        self.assertEqual(1, len(_events_of(result, constants.EVENT_CONFUSION_DAMAGE)))

    def test_worst_case_paralysis_never_stops_the_opponent(self):
        for seed in range(20):
            machamp = _mk_machamp(moves=[TACKLE])
            machamp.status = constants.PARALYSIS
            state = _mk_state([_mk_geodude()], [machamp])

            result = simulate_turn_worst_case(state, _use(TACKLE), _use(TACKLE), rng=random.Random(seed))

            self.assertEqual([False, True], [e.is_player for e in _events_of(result, constants.EVENT_MOVE_USE)])
            self.assertEqual([], _events_of(result, constants.EVENT_STATUS_PREVENT))

    def test_action_against_a_fainted_target_is_skipped(self):
        machamp = _mk_machamp()
        machamp.current_hp = 1
        machamp.confusion = 2
        state = _mk_state([machamp], [_mk_rattata()])

        result = simulate_turn_worst_case(state, _use(CROSS_CHOP), _use(TACKLE))

        self.assertTrue(state.player_active.fainted)
        self.assertEqual(1, len(_events_of(result, constants.EVENT_FAINT)))
        self.assertEqual([], _events_of(result, constants.EVENT_MOVE_USE))
        self.assertEqual([], _events_of(result, constants.EVENT_MOVE))

    def test_status_move_against_a_fainted_target_is_skipped(self):
        machamp = _mk_machamp()
        machamp.current_hp = 1
        machamp.confusion = 2
        state = _mk_state([machamp], [_mk_rattata(moves=[THUNDER_WAVE])])

        result = simulate_turn_worst_case(state, _use(CROSS_CHOP), _use(THUNDER_WAVE))

        self.assertIsNone(state.player_active.status)
        self.assertEqual([], _events_of(result, constants.EVENT_STATUS))

    def test_normal_sleep_length_is_rolled(self):
        for seed in range(10):
            state = _mk_state([_mk_machamp(moves=[HYPNOSIS])], [_mk_rattata(moves=[GROWL])])
            simulate_turn(state, _use(HYPNOSIS), _use(GROWL), rng=random.Random(seed))
            # the sleeper already spent one turn of its counter
            self.assertIn(state.enemy_active.status_counter, (0, 1, 2))

    def test_hp_stays_consistent_through_random_battles(self):
        for seed in range(25):
            rng = random.Random(seed)
            state = _mk_state(
                [_mk_rattata(moves=[TACKLE, GROWL]), _mk_geodude(), _mk_machamp(level=20)],
                [_mk_geodude(name="graveler"), _mk_rattata(name="raticate", moves=[TACKLE, HYPNOSIS])],
            )
            for _ in range(30):
                if state.is_over():
                    break
                player_action = rng.choice(generate_possible_actions(state, True))
                enemy_action = rng.choice(generate_possible_actions(state, False))
                if rng.random() < 0.5:
                    simulate_turn(state, player_action, enemy_action, rng=rng)
                else:
                    simulate_turn_worst_case(state, player_action, enemy_action, rng=rng)
                resolve_faints(state)

                for pokemon in state.player_team + state.enemy_team:
                    self.assertGreaterEqual(pokemon.current_hp, 0)
                    self.assertLessEqual(pokemon.current_hp, pokemon.max_hp)
                    self.assertEqual(pokemon.current_hp == 0, pokemon.fainted)

    def test_simulating_a_clone_leaves_the_original_untouched(self):
        state = _mk_state([_mk_rattata()], [_mk_machamp()])
        clone = state.clone()
        simulate_turn(clone, _use(TACKLE), _use(CROSS_CHOP))
        self.assertEqual(0, state.turn)
        self.assertFalse(state.player_active.fainted)
