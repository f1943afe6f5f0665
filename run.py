import logging
import random

from config import PlannerConfig, PlannerModes, init_logging
from rnb.battle import BattleState
from rnb.search.lookahead import find_best_action_with_lookahead
from rnb.search.main import find_optimal_strategy
from rnb.search.tiered import find_tiered_strategy
from rnb.simulation.scenario import calculate_worst_case_strategy
from rnb.strategy.risk import calculate_action_risk
from teams.load_team import load_team

logger = logging.getLogger(__name__)


def log_steps(steps):
    for step in steps:
        logger.info("Turn {}: {}".format(step.turn, step.action.describe()))
        if step.reasoning:
            logger.info("    {}".format(step.reasoning))
        if step.risk is not None:
            logger.info("    {}".format(step.risk.summary()))
            for hint in step.risk.ai_move_odds.influence:
                logger.info("    AI: {}".format(hint))
        for event in step.events:
            logger.info("    - {}".format(event.text))
        logger.info(
            "    {} {}/{} HP vs {} {}/{} HP".format(
                step.player_active.display_name,
                step.player_active.current_hp,
                step.player_active.max_hp,
                step.enemy_active.display_name,
                step.enemy_active.current_hp,
                step.enemy_active.max_hp,
            )
        )


def run_planner(state: BattleState, rng: random.Random):
    mode = PlannerConfig.mode

    if mode == PlannerModes.tiered:
        strategy = find_tiered_strategy(
            state, PlannerConfig.max_depth, rng=rng, timeout_s=PlannerConfig.search_timeout_s
        )
        log_steps(strategy.steps)
        logger.info("Risk tier: {}".format(strategy.risk_tier))
        logger.info(
            "Average deaths: {}, worst case deaths: {}".format(strategy.average_deaths, strategy.worst_case_deaths)
        )
        return strategy

    if mode == PlannerModes.optimal:
        steps = find_optimal_strategy(state, PlannerConfig.max_depth, rng=rng, lookahead_depth=PlannerConfig.lookahead_depth)
        log_steps(steps)
        return steps

    if mode == PlannerModes.worst_case:
        report = calculate_worst_case_strategy(
            state, PlannerConfig.max_depth, rng=rng, lookahead_depth=PlannerConfig.lookahead_depth
        )
        log_steps(report.steps)
        logger.info("Risk tier: {}".format(report.risk_tier))
        logger.info("Your deaths: {}, enemy deaths: {}".format(report.player_deaths, report.enemy_deaths))
        return report

    result = find_best_action_with_lookahead(state, True, PlannerConfig.lookahead_depth, rng=rng)
    if result.action is None:
        logger.info("No action available")
        return result
    logger.info("Best action: {} (score: {})".format(result.action.describe(), result.score))
    logger.info(calculate_action_risk(state, result.action, True, rng=rng).summary())
    return result


def main():
    PlannerConfig.configure()
    init_logging(PlannerConfig.log_level, PlannerConfig.log_to_file)

    rng = random.Random(PlannerConfig.seed)
    player_team, player_team_name = load_team(PlannerConfig.player_team)
    enemy_team, enemy_team_name = load_team(PlannerConfig.enemy_team)
    logger.info("Planning {} vs {} ({} mode)".format(player_team_name, enemy_team_name, PlannerConfig.mode.name))

    state = BattleState(player_team, enemy_team, PlannerConfig.player_lead, PlannerConfig.enemy_lead)
    run_planner(state, rng)


if __name__ == "__main__":
    main()
