"""
数据传输对象单元测试
"""

import pytest
from pydantic import ValidationError

from poker_chips.controller import ActionInput, PotWinnerInput, SettingsInput
from poker_chips.core import Action, ActionType, GameSettings, PotWinner


@pytest.mark.unit
@pytest.mark.fast
class TestActionInput:
    """测试行动输入"""

    def test_from_camel_case(self):
        action = ActionInput.from_dict({"type": "raise", "playerId": "player-1", "amount": 300})
        assert action.action_type == ActionType.RAISE
        assert action.to_core() == Action(ActionType.RAISE, "player-1", 300)

    def test_from_snake_case(self):
        action = ActionInput.from_dict({"action_type": "allIn", "player_id": "player-2"})
        assert action.to_core() == Action(ActionType.ALL_IN, "player-2")

    def test_amount_dropped_for_non_raise(self):
        action = ActionInput(action_type=ActionType.CALL, player_id="player-0", amount=500)
        assert action.to_core().amount is None

    def test_raise_requires_amount(self):
        with pytest.raises(ValidationError):
            ActionInput.from_dict({"type": "raise", "playerId": "player-1"})

    def test_raise_requires_positive_amount(self):
        with pytest.raises(ValidationError):
            ActionInput.from_dict({"type": "raise", "playerId": "player-1", "amount": 0})

    def test_unknown_action_type(self):
        with pytest.raises(ValidationError):
            ActionInput.from_dict({"type": "bet", "playerId": "player-1"})

    def test_empty_player_id(self):
        with pytest.raises(ValidationError):
            ActionInput.from_dict({"type": "fold", "playerId": ""})


@pytest.mark.unit
@pytest.mark.fast
class TestPotWinnerInput:
    """测试赢家输入"""

    def test_to_core(self):
        entry = PotWinnerInput.from_dict({"potIndex": 1, "winners": ["player-2", "player-0"]})
        assert entry.to_core() == PotWinner(1, ("player-2", "player-0"))

    def test_negative_index(self):
        with pytest.raises(ValidationError):
            PotWinnerInput(pot_index=-1, winners=["player-0"])

    def test_winners_required(self):
        with pytest.raises(ValidationError):
            PotWinnerInput(pot_index=0, winners=[])

    def test_duplicate_winners(self):
        with pytest.raises(ValidationError):
            PotWinnerInput(pot_index=0, winners=["player-0", "player-0"])


@pytest.mark.unit
@pytest.mark.fast
class TestSettingsInput:
    """测试设置输入"""

    def test_defaults_match_game_settings(self):
        assert SettingsInput().to_core() == GameSettings()

    def test_from_camel_case(self):
        settings = SettingsInput.from_dict({
            "playerCount": 3,
            "playerNames": [" Alice ", "Bob"],
            "startingChips": 5000,
            "smallBlind": 50,
            "bigBlind": 100,
            "autoIncreaseBlind": True,
        }).to_core()

        assert settings.player_count == 3
        assert settings.player_names == ["Alice", "Bob", "Player 3"]
        assert settings.starting_chips == 5000
        assert (settings.small_blind, settings.big_blind) == (50, 100)
        assert settings.auto_increase_blind is True

    @pytest.mark.parametrize("player_count", [1, 11])
    def test_player_count_range(self, player_count):
        with pytest.raises(ValidationError):
            SettingsInput(player_count=player_count)

    def test_big_blind_below_small_blind(self):
        with pytest.raises(ValidationError):
            SettingsInput(small_blind=200, big_blind=100)

    def test_non_positive_chips(self):
        with pytest.raises(ValidationError):
            SettingsInput(starting_chips=0)
