"""
底池计算器单元测试
"""

import pytest

from poker_chips.core import (
    PlayerStatus, PotType, Pot,
    calculate_pots, get_total_pot_amount, format_pot_display, merge_round_pots,
)
from tests.helpers import make_state

ACTIVE = PlayerStatus.ACTIVE
FOLDED = PlayerStatus.FOLDED
ALL_IN = PlayerStatus.ALL_IN


@pytest.mark.unit
@pytest.mark.fast
class TestCalculatePots:
    """测试主池/边池切分"""

    def test_no_bets_gives_no_pots(self):
        state = make_state([0, 0, 0])
        assert calculate_pots(state) == []

    def test_equal_bets_give_single_main_pot(self):
        state = make_state([200, 200, 200, 200])
        pots = calculate_pots(state)

        assert len(pots) == 1
        assert pots[0].pot_type == PotType.MAIN
        assert pots[0].amount == 800
        assert set(pots[0].eligible_players) == {"player-0", "player-1", "player-2", "player-3"}

    def test_short_all_in_creates_one_side_pot(self):
        state = make_state([500, 1000, 1000], statuses=[ALL_IN, ACTIVE, ACTIVE], chips=[0, 1000, 1000])
        pots = calculate_pots(state)

        assert len(pots) == 2
        assert pots[0].pot_type == PotType.MAIN
        assert pots[0].amount == 1500
        assert set(pots[0].eligible_players) == {"player-0", "player-1", "player-2"}
        assert pots[1].pot_type == PotType.SIDE
        assert pots[1].amount == 1000
        assert set(pots[1].eligible_players) == {"player-1", "player-2"}

    def test_identical_all_in_levels_collapse_into_one_tier(self):
        state = make_state(
            [300, 300, 800, 800],
            statuses=[ALL_IN, ALL_IN, ACTIVE, ACTIVE],
            chips=[0, 0, 500, 500],
        )
        pots = calculate_pots(state)

        assert [p.amount for p in pots] == [1200, 1000]
        assert [p.pot_type for p in pots] == [PotType.MAIN, PotType.SIDE]

    def test_multiple_all_in_levels_in_ascending_order(self):
        state = make_state(
            [100, 300, 600, 600],
            statuses=[ALL_IN, ALL_IN, ACTIVE, ACTIVE],
            chips=[0, 0, 100, 100],
        )
        pots = calculate_pots(state)

        assert [p.amount for p in pots] == [400, 600, 600]
        assert set(pots[0].eligible_players) == {"player-0", "player-1", "player-2", "player-3"}
        assert set(pots[1].eligible_players) == {"player-1", "player-2", "player-3"}
        assert set(pots[2].eligible_players) == {"player-2", "player-3"}

    def test_folded_chips_counted_but_never_eligible(self):
        state = make_state([200, 600, 600], statuses=[FOLDED, ACTIVE, ACTIVE])
        pots = calculate_pots(state)

        assert get_total_pot_amount(pots) == 1400
        for pot in pots:
            assert "player-0" not in pot.eligible_players

    def test_folded_only_top_tier_goes_to_last_pot(self):
        # 最高档只有弃牌玩家，差额并入最后一个底池
        state = make_state([500, 200, 200], statuses=[FOLDED, ACTIVE, ACTIVE])
        pots = calculate_pots(state)

        assert len(pots) == 1
        assert pots[0].amount == 900
        assert set(pots[0].eligible_players) == {"player-1", "player-2"}

    def test_sum_of_pots_equals_sum_of_bets(self):
        bets = [50, 1000, 250, 1000, 700]
        statuses = [ALL_IN, ACTIVE, FOLDED, ACTIVE, ALL_IN]
        state = make_state(bets, statuses=statuses)

        assert get_total_pot_amount(calculate_pots(state)) == sum(bets)

    def test_players_without_bets_are_not_eligible(self):
        state = make_state([0, 400, 400])
        pots = calculate_pots(state)

        assert pots[0].eligible_players == ["player-1", "player-2"]


@pytest.mark.unit
@pytest.mark.fast
class TestPotHelpers:
    """测试金额合计和显示文本"""

    def test_total_of_empty_list_is_zero(self):
        assert get_total_pot_amount([]) == 0

    def test_format_empty(self):
        assert format_pot_display([]) == "0"

    def test_format_main_only(self):
        assert format_pot_display([Pot(800, ["a", "b"], PotType.MAIN)]) == "主池: 800"

    def test_format_main_and_sides(self):
        pots = [
            Pot(1500, ["a", "b", "c"], PotType.MAIN),
            Pot(1000, ["b", "c"], PotType.SIDE),
            Pot(400, ["c"], PotType.SIDE),
        ]
        assert format_pot_display(pots) == "主池: 1500 | 边池: 1000, 400"


@pytest.mark.unit
@pytest.mark.fast
class TestMergeRoundPots:
    """测试阶段推进时的底池合并"""

    def test_same_eligibility_merges_regardless_of_order(self):
        accumulated = [Pot(600, ["a", "b", "c"], PotType.MAIN)]
        round_pots = [Pot(300, ["c", "a", "b"], PotType.MAIN)]

        merged = merge_round_pots(accumulated, round_pots)

        assert len(merged) == 1
        assert merged[0].amount == 900

    def test_new_eligibility_is_appended_as_side_pot(self):
        accumulated = [Pot(600, ["a", "b", "c"], PotType.MAIN)]
        round_pots = [Pot(400, ["b", "c"], PotType.MAIN)]

        merged = merge_round_pots(accumulated, round_pots)

        assert [p.amount for p in merged] == [600, 400]
        assert merged[1].pot_type == PotType.SIDE

    def test_first_pot_is_main(self):
        merged = merge_round_pots([], [Pot(300, ["a", "b"], PotType.MAIN)])
        assert merged[0].pot_type == PotType.MAIN

    def test_inputs_are_not_modified(self):
        accumulated = [Pot(600, ["a", "b"], PotType.MAIN)]
        merge_round_pots(accumulated, [Pot(200, ["a", "b"], PotType.MAIN)])
        assert accumulated[0].amount == 600

    def test_later_folds_are_pruned_from_accumulated_pots(self):
        accumulated = [Pot(600, ["a", "b", "c"], PotType.MAIN)]
        round_pots = [Pot(400, ["b", "c"], PotType.MAIN)]

        merged = merge_round_pots(accumulated, round_pots, in_hand_ids=["b", "c"])

        assert len(merged) == 1
        assert merged[0].amount == 1000
        assert set(merged[0].eligible_players) == {"b", "c"}

    def test_pruning_collapses_pots_with_same_remaining_players(self):
        accumulated = [
            Pot(900, ["a", "b", "c"], PotType.MAIN),
            Pot(400, ["b", "c"], PotType.SIDE),
        ]

        merged = merge_round_pots(accumulated, [], in_hand_ids=["b", "c"])

        assert len(merged) == 1
        assert merged[0].amount == 1300
        assert merged[0].pot_type == PotType.MAIN
