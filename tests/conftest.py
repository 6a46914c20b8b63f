"""
测试配置 - pytest配置文件

提供确定性的牌局状态fixture。
"""

import pytest

from poker_chips.core import GameState
from tests.helpers import new_game


@pytest.fixture
def four_player_game() -> GameState:
    """4名玩家、10000筹码、盲注100/200、庄家在0号位"""
    return new_game()


@pytest.fixture
def heads_up_game() -> GameState:
    """2名玩家，庄家在0号位"""
    return new_game(player_count=2)
