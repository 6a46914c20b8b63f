"""
游戏状态管理模块.

包含底池结算单元Pot和聚合根GameState.
GameState可完整序列化为纯dict（camelCase键）并无损还原.
"""

import copy
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any, Iterable

from .config import GameSettings
from .enums import GameStage, PlayerStatus, PotType
from .player import Player


@dataclass
class Pot:
    """
    底池结算单元.

    Attributes:
        amount: 此档位收集的筹码
        eligible_players: 有资格赢取此池的玩家ID，顺序仅用于显示
        pot_type: 最低档为主池，其余为边池
    """

    amount: int
    eligible_players: List[str] = field(default_factory=list)
    pot_type: PotType = PotType.MAIN

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"底池金额不能为负数: {self.amount}")

    def has_same_eligibility(self, other_ids: Iterable[str]) -> bool:
        """资格集合是否完全一致（与顺序无关）."""
        return set(self.eligible_players) == set(other_ids)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "amount": self.amount,
            "eligiblePlayers": list(self.eligible_players),
            "type": self.pot_type.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Pot':
        return cls(
            amount=data["amount"],
            eligible_players=list(data.get("eligiblePlayers", [])),
            pot_type=PotType(data.get("type", PotType.MAIN.value)),
        )


@dataclass
class GameState:
    """
    游戏状态聚合根.

    引擎从不原地修改传入的状态，每个操作都先clone()再修改副本.
    """

    settings: GameSettings
    players: List[Player] = field(default_factory=list)
    game_number: int = 1
    stage: GameStage = GameStage.PRE_FLOP
    pots: List[Pot] = field(default_factory=list)
    total_pot: int = 0
    current_player_index: int = 0
    dealer_button_index: int = 0
    small_blind_index: int = 0
    big_blind_index: int = 0
    community_cards: int = 0
    current_bet: int = 0
    min_raise: int = 0
    last_raise_amount: int = 0
    betting_round: int = 0

    def __post_init__(self):
        if self.game_number < 1:
            raise ValueError(f"局数必须从1开始: {self.game_number}")
        if self.total_pot < 0:
            raise ValueError(f"底池总额不能为负数: {self.total_pot}")

    def clone(self) -> 'GameState':
        """
        深拷贝当前状态.

        Returns:
            GameState: 与当前状态完全独立的副本
        """
        return copy.deepcopy(self)

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def get_player_index(self, player_id: str) -> int:
        """返回玩家座位索引，不存在时返回-1."""
        for i, player in enumerate(self.players):
            if player.id == player_id:
                return i
        return -1

    def get_current_player(self) -> Optional[Player]:
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    def get_active_players(self) -> List[Player]:
        """仍可主动行动的玩家."""
        return [p for p in self.players if p.status == PlayerStatus.ACTIVE]

    def get_players_in_hand(self) -> List[Player]:
        """未弃牌、未出局的玩家（包括全押）."""
        return [p for p in self.players if p.in_hand]

    @property
    def is_betting_stage(self) -> bool:
        return self.stage.is_betting_stage

    def total_chips(self) -> int:
        """
        系统内筹码总量.

        total_pot已包含各玩家本轮的current_bet，因此不再重复累加.
        """
        return sum(p.chips for p in self.players) + self.total_pot

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gameNumber": self.game_number,
            "stage": self.stage.value,
            "players": [p.to_dict() for p in self.players],
            "pots": [pot.to_dict() for pot in self.pots],
            "totalPot": self.total_pot,
            "currentPlayerIndex": self.current_player_index,
            "dealerButtonIndex": self.dealer_button_index,
            "smallBlindIndex": self.small_blind_index,
            "bigBlindIndex": self.big_blind_index,
            "communityCards": self.community_cards,
            "currentBet": self.current_bet,
            "minRaise": self.min_raise,
            "lastRaiseAmount": self.last_raise_amount,
            "bettingRound": self.betting_round,
            "settings": self.settings.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameState':
        return cls(
            settings=GameSettings.from_dict(data["settings"]),
            players=[Player.from_dict(p) for p in data["players"]],
            game_number=data.get("gameNumber", 1),
            stage=GameStage(data["stage"]),
            pots=[Pot.from_dict(p) for p in data.get("pots", [])],
            total_pot=data.get("totalPot", 0),
            current_player_index=data.get("currentPlayerIndex", 0),
            dealer_button_index=data.get("dealerButtonIndex", 0),
            small_blind_index=data.get("smallBlindIndex", 0),
            big_blind_index=data.get("bigBlindIndex", 0),
            community_cards=data.get("communityCards", 0),
            current_bet=data.get("currentBet", 0),
            min_raise=data.get("minRaise", 0),
            last_raise_amount=data.get("lastRaiseAmount", 0),
            betting_round=data.get("bettingRound", 0),
        )

    def __str__(self) -> str:
        return (
            f"GameState(game={self.game_number}, stage={self.stage.value}, "
            f"players={len(self.players)}, pot={self.total_pot})"
        )
