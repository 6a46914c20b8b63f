"""
命令行集成测试

每个用例使用独立的状态文件，逐条调用命令，检查保存下来的会话。
"""

import pytest
from click.testing import CliRunner

from poker_chips.controller import GameSession
from poker_chips.core import GameStage
from poker_chips.storage import JsonFileStore, SessionRepository
from poker_chips.ui.cli.app import cli


@pytest.fixture
def state_file(tmp_path):
    return str(tmp_path / "table.json")


@pytest.fixture
def run(state_file):
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(cli, ['--state-file', state_file, *args])

    return _run


def load_session(state_file) -> GameSession:
    directory, name = state_file.rsplit('/', 1)
    repository = SessionRepository(JsonFileStore(directory), key=name[:-len('.json')])
    return GameSession.load(repository)


def current_player_id(state_file) -> str:
    return load_session(state_file).state.get_current_player().id


@pytest.mark.integration
class TestStartAndStatus:
    """测试开局和查看"""

    def test_start_saves_session(self, run, state_file):
        result = run('start', '--players', '3', '--names', 'Alice,Bob', '--seed', '1')

        assert result.exit_code == 0, result.output
        assert "第1手" in result.output
        assert "Alice" in result.output

        state = load_session(state_file).state
        assert [p.name for p in state.players] == ["Alice", "Bob", "Player 3"]
        assert state.total_pot == 300

    def test_status_without_game(self, run):
        result = run('status')
        assert result.exit_code == 1
        assert "没有进行中的牌局" in result.output

    def test_status_after_start(self, run):
        run('start', '--seed', '3')
        result = run('status')
        assert result.exit_code == 0
        assert "翻牌前" in result.output

    def test_preset(self, run, state_file):
        result = run('start', '--preset', 'home', '--seed', '2')
        assert result.exit_code == 0, result.output

        settings = load_session(state_file).settings
        assert settings.player_count == 6
        assert (settings.small_blind, settings.big_blind) == (10, 20)

    def test_invalid_settings(self, run):
        result = run('start', '--players', '11')
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_state_file_from_environment(self, state_file):
        runner = CliRunner()
        env = {'POKER_CHIPS_STATE_FILE': state_file}

        assert runner.invoke(cli, ['start', '--seed', '5'], env=env).exit_code == 0
        assert load_session(state_file).state is not None


@pytest.mark.integration
class TestActions:
    """测试行动命令"""

    def test_call_and_undo(self, run, state_file):
        run('start', '--seed', '4')
        player_id = current_player_id(state_file)

        result = run('act', 'call', player_id)
        assert result.exit_code == 0, result.output
        assert load_session(state_file).state.get_player(player_id).current_bet == 200

        result = run('undo')
        assert result.exit_code == 0, result.output
        assert load_session(state_file).state.get_player(player_id).current_bet == 0

        result = run('undo')
        assert "没有可撤销的行动" in result.output

    def test_raise_requires_amount(self, run, state_file):
        run('start', '--seed', '4')
        result = run('act', 'raise', current_player_id(state_file))
        assert result.exit_code == 1
        assert "加注必须指定数量" in result.output

    def test_raise_below_minimum(self, run, state_file):
        run('start', '--seed', '4')
        result = run('act', 'raise', current_player_id(state_file), '--amount', '50')
        assert result.exit_code == 1
        assert "最小加注额为 200" in result.output

    def test_check_facing_bet(self, run, state_file):
        run('start', '--seed', '4')
        result = run('act', 'check', current_player_id(state_file))
        assert result.exit_code == 1
        assert "无法过牌" in result.output

    def test_unknown_player(self, run):
        run('start', '--seed', '4')
        result = run('act', 'fold', 'player-99')
        assert result.exit_code == 1
        assert "玩家不存在" in result.output

    def test_out_of_turn_action(self, run, state_file):
        run('start', '--seed', '1')
        before = load_session(state_file).state
        current = before.get_current_player().id
        other = next(p.id for p in before.players if p.id != current and p.is_active)

        result = run('act', 'fold', other)

        assert result.exit_code == 1
        assert "还没轮到" in result.output
        after = load_session(state_file).state
        assert after.to_dict() == before.to_dict()

    def test_next_during_hand(self, run, state_file):
        run('start', '--seed', '4')
        total = load_session(state_file).state.total_chips()

        result = run('next')

        assert result.exit_code == 1
        assert "本手尚未结束" in result.output
        state = load_session(state_file).state
        assert state.game_number == 1
        assert state.total_chips() == total

    def test_winners_before_showdown(self, run):
        run('start', '--seed', '4')
        result = run('winners', '0:player-0')
        assert result.exit_code == 1
        assert "只能在摊牌阶段" in result.output


@pytest.mark.integration
class TestFullHand:
    """测试单挑全押到结算再到下一手"""

    def test_all_in_showdown_and_next_hand(self, run, state_file):
        run('start', '--players', '2', '--chips', '1000', '--seed', '9')
        assert run('act', 'allIn', current_player_id(state_file)).exit_code == 0
        result = run('act', 'call', current_player_id(state_file))
        assert result.exit_code == 0, result.output
        assert "摊牌" in result.output

        state = load_session(state_file).state
        assert state.stage == GameStage.SHOWDOWN
        assert state.pots[0].amount == 2000

        result = run('winners', '0:player-0,player-1')
        assert result.exit_code == 0, result.output
        state = load_session(state_file).state
        assert state.stage == GameStage.GAME_OVER
        assert [p.chips for p in state.players] == [1000, 1000]

        result = run('next')
        assert result.exit_code == 0, result.output
        assert load_session(state_file).state.game_number == 2

    def test_showdown_guards(self, run, state_file):
        run('start', '--players', '2', '--chips', '1000', '--seed', '9')
        run('act', 'allIn', current_player_id(state_file))
        run('act', 'call', current_player_id(state_file))

        result = run('winners', '0:player-0', '0:player-1')
        assert result.exit_code == 1
        assert "重复声明" in result.output

        result = run('winners')
        assert result.exit_code == 1
        assert "需要指定赢家" in result.output

        assert run('act', 'fold', 'player-0').exit_code == 1
        assert run('next').exit_code == 1

        state = load_session(state_file).state
        assert state.stage == GameStage.SHOWDOWN
        assert state.total_chips() == 2000

    def test_bad_winner_format(self, run, state_file):
        run('start', '--players', '2', '--chips', '1000', '--seed', '9')
        run('act', 'allIn', current_player_id(state_file))
        run('act', 'call', current_player_id(state_file))

        result = run('winners', 'player-0')
        assert result.exit_code != 0
        assert load_session(state_file).state.stage == GameStage.SHOWDOWN

    def test_reset(self, run, state_file):
        run('start', '--seed', '1')
        result = run('reset')
        assert result.exit_code == 0
        assert "已重置" in result.output
        assert run('status').exit_code == 1
