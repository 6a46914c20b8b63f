"""
牌局会话.

会话持有权威的当前状态，通过引擎的纯函数推进状态，维护有上限的撤销历史，
并在每次变更后保存到持久化层、推送给观战频道。
会话是唯一的写入者，调用方需要保证同一时间只有一个操作在执行。
"""

import logging
import random
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Deque, Dict, Iterable, List, Optional, Protocol

from ..core import (
    Action, ActionType, GameSettings, GameStage, GameState, PotWinner, RaiseValidation,
    GameStateHealthChecker, HealthIssueSeverity,
    initialize_game, process_action, distribute_chips, start_next_game,
    get_available_actions, get_call_amount, validate_raise_amount,
)
from ..storage import SessionRepository, SessionSnapshot
from .decorators import atomic, logged_action

MAX_UNDO_HISTORY = 20


class BroadcastChannel(Protocol):
    """观战频道接口，接收序列化后的完整状态"""

    def publish(self, state: Dict[str, Any]) -> None:
        ...


@dataclass(frozen=True)
class ActionRecord:
    """行动记录.

    Attributes:
        game_number: 第几手牌
        stage: 行动时所处的阶段
        player_id: 玩家ID
        player_name: 行动时的玩家名称
        action_type: 行动类型
        amount: 加注增量，其它行动为None
        timestamp: 记录时间
    """

    game_number: int
    stage: GameStage
    player_id: str
    player_name: str
    action_type: ActionType
    amount: Optional[int] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gameNumber": self.game_number,
            "stage": self.stage.value,
            "playerId": self.player_id,
            "playerName": self.player_name,
            "action": self.action_type.value,
            "amount": self.amount,
            "timestamp": self.timestamp.isoformat(),
        }


class GameSession:
    """牌局会话.

    负责：
    - 保存设置和当前状态
    - 在每次行动前压入撤销快照（最多20个，最旧的先丢弃）
    - 记录行动日志
    - 同步到持久化层和观战频道

    会话采用依赖注入设计，持久化、广播、随机数源和日志记录器都可以替换。
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        repository: Optional[SessionRepository] = None,
        channel: Optional[BroadcastChannel] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """初始化会话.

        Args:
            settings: 下一次start_game使用的设置
            repository: 会话仓库，为None时不持久化
            channel: 观战频道，为None时不广播
            rng: 随机数源，用于开局选择庄家位
            logger: 日志记录器，为None时使用模块记录器
        """
        self._settings = settings
        self._state: Optional[GameState] = None
        self._history: Deque[GameState] = deque(maxlen=MAX_UNDO_HISTORY)
        self._action_log: List[ActionRecord] = []
        self._repository = repository
        self._channel = channel
        self._rng = rng
        self._logger = logger or logging.getLogger(__name__)

    @property
    def settings(self) -> Optional[GameSettings]:
        return self._settings

    @property
    def state(self) -> Optional[GameState]:
        return self._state

    @property
    def undo_depth(self) -> int:
        return len(self._history)

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    @property
    def action_log(self) -> List[ActionRecord]:
        return list(self._action_log)

    @atomic
    @logged_action("配置")
    def configure(self, settings: GameSettings) -> None:
        self._settings = settings
        self._sync()

    @atomic
    @logged_action("开局")
    def start_game(self) -> bool:
        """按当前设置开始新的一局.

        Returns:
            是否开局成功（没有设置时为False）
        """
        if self._settings is None:
            self._logger.info("尚未配置，无法开局")
            return False

        self._state = initialize_game(self._settings, self._rng)
        self._history.clear()
        self._action_log.clear()
        self._logger.info(
            f"开局: {len(self._state.players)}名玩家, "
            f"庄家位 {self._state.dealer_button_index}"
        )
        self._sync()
        return True

    @atomic
    @logged_action("玩家行动")
    def perform_action(self, action: Action) -> bool:
        """执行玩家行动.

        行动前的状态会被深拷贝压入撤销历史。引擎拒绝的行动同样会压入历史，
        撤销它得到的是等值的状态。

        Returns:
            是否有进行中的牌局
        """
        if self._state is None:
            return False

        previous = self._state
        self._history.append(previous.clone())

        player = previous.get_player(action.player_id)
        self._action_log.append(ActionRecord(
            game_number=previous.game_number,
            stage=previous.stage,
            player_id=action.player_id,
            player_name=player.name if player else action.player_id,
            action_type=action.action_type,
            amount=action.amount,
        ))

        self._state = process_action(previous, action)
        self._logger.info(
            f"{action.player_id} {action.action_type.value}"
            + (f" {action.amount}" if action.amount is not None else "")
            + f" -> {self._state.stage.value}, 底池 {self._state.total_pot}"
        )
        self._check_health(GameStateHealthChecker.for_state(previous))
        self._sync()
        return True

    @atomic
    @logged_action("撤销")
    def undo_last_action(self) -> bool:
        """撤销上一个行动.

        Returns:
            是否撤销了行动（历史为空时为False）
        """
        if not self._history:
            return False

        self._state = self._history.pop()
        if self._action_log:
            self._action_log.pop()
        self._sync()
        return True

    @atomic
    @logged_action("分配底池")
    def select_winners(self, pot_winners: Iterable[PotWinner]) -> bool:
        """在摊牌阶段分配底池，不压入撤销历史.

        只有一名有资格玩家的底池可以省略，自动分给该玩家。

        Returns:
            是否执行了分配（不在摊牌阶段或赢家声明有误时为False）
        """
        if self._state is None or self._state.stage != GameStage.SHOWDOWN:
            return False

        entries = list(pot_winners)
        errors = self.pot_winner_errors(entries)
        if errors:
            self._logger.info(f"拒绝分配底池: {'; '.join(errors)}")
            return False

        declared = {entry.pot_index for entry in entries}
        for index, pot in enumerate(self._state.pots):
            if index not in declared:
                entries.append(PotWinner(index, tuple(pot.eligible_players)))

        self._state = distribute_chips(self._state, entries)
        self._sync()
        return True

    def pot_winner_errors(self, pot_winners: Iterable[PotWinner]) -> List[str]:
        """检查赢家声明，返回所有问题（为空表示可以分配）.

        每个底池最多声明一次，赢家必须来自该底池的eligible_players，
        有多名有资格玩家的底池必须声明。
        """
        if self._state is None or self._state.stage != GameStage.SHOWDOWN:
            return ["只能在摊牌阶段分配底池"]

        pots = self._state.pots
        errors = []
        seen = set()
        for entry in pot_winners:
            if not 0 <= entry.pot_index < len(pots):
                errors.append(f"底池 {entry.pot_index} 不存在")
                continue
            if entry.pot_index in seen:
                errors.append(f"底池 {entry.pot_index} 重复声明")
                continue
            seen.add(entry.pot_index)
            if not entry.winners:
                errors.append(f"底池 {entry.pot_index} 没有赢家")
            for winner_id in entry.winners:
                if winner_id not in pots[entry.pot_index].eligible_players:
                    errors.append(f"玩家 {winner_id} 没有资格赢得底池 {entry.pot_index}")

        for index, pot in enumerate(pots):
            if index not in seen and len(pot.eligible_players) != 1:
                errors.append(f"底池 {index} 需要指定赢家")
        return errors

    @atomic
    @logged_action("下一手")
    def next_game(self) -> bool:
        """本手结束后进入下一手牌并清空撤销历史.

        Returns:
            是否进入了下一手（本手未结束或幸存玩家不足2人时为False）
        """
        if self._state is None or self._state.stage != GameStage.GAME_OVER:
            return False

        new_state = start_next_game(self._state)
        if new_state is self._state:
            self._logger.info("幸存玩家不足2人，牌局结束")
            return False

        self._state = new_state
        self._history.clear()
        self._logger.info(
            f"第{new_state.game_number}手, 盲注 "
            f"{new_state.settings.small_blind}/{new_state.settings.big_blind}"
        )
        self._sync()
        return True

    @atomic
    @logged_action("重置")
    def reset(self) -> None:
        """清空会话，并删除已保存的会话."""
        self._state = None
        self._settings = None
        self._history.clear()
        self._action_log.clear()
        if self._repository is not None:
            self._repository.clear()

    def available_actions(self) -> List[ActionType]:
        if self._state is None:
            return []
        return get_available_actions(self._state)

    def call_amount(self, player_id: str) -> int:
        if self._state is None:
            return 0
        return get_call_amount(self._state, player_id)

    def validate_raise(self, player_id: str, amount: int) -> RaiseValidation:
        if self._state is None:
            return RaiseValidation.fail("没有进行中的牌局")
        player = self._state.get_player(player_id)
        if player is None:
            return RaiseValidation.fail(f"玩家不存在: {player_id}")
        return validate_raise_amount(self._state, player, amount)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            settings=self._settings,
            state=self._state,
            undo_history=list(self._history),
        )

    def restore(self, snapshot: SessionSnapshot) -> None:
        """用保存的会话替换当前内容（不触发同步）"""
        self._settings = snapshot.settings
        self._state = snapshot.state
        self._history = deque(snapshot.undo_history, maxlen=MAX_UNDO_HISTORY)
        self._action_log = []

    def to_dict(self) -> Dict[str, Any]:
        return self.snapshot().to_dict()

    @classmethod
    def from_dict(cls, data: Dict[str, Any], **kwargs) -> 'GameSession':
        session = cls(**kwargs)
        session.restore(SessionSnapshot.from_dict(data))
        return session

    @classmethod
    def load(cls, repository: SessionRepository, **kwargs) -> 'GameSession':
        """从仓库恢复会话，没有保存过时返回空会话.

        Raises:
            DeserializationError: 保存的数据损坏时抛出
        """
        session = cls(repository=repository, **kwargs)
        snapshot = repository.load()
        if snapshot is not None:
            session.restore(snapshot)
        return session

    def _capture(self):
        # 状态对象从不被原地修改，保存引用即可
        return self._settings, self._state, list(self._history), list(self._action_log)

    def _rollback(self, memento) -> None:
        settings, state, history, action_log = memento
        self._settings = settings
        self._state = state
        self._history = deque(history, maxlen=MAX_UNDO_HISTORY)
        self._action_log = action_log

    def _sync(self) -> None:
        if self._repository is not None:
            self._repository.save(self.snapshot())
        if self._channel is not None and self._state is not None:
            self._channel.publish(self._state.to_dict())

    def _check_health(self, checker: GameStateHealthChecker) -> None:
        result = checker.check_health(self._state)
        for issue in result.issues:
            level = logging.ERROR if issue.severity == HealthIssueSeverity.CRITICAL else logging.WARNING
            self._logger.log(level, f"状态检查: {issue.message}")
