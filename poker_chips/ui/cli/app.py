"""筹码管理命令行.

每个命令从状态文件读取会话、执行一次操作并保存，适合主持人在牌桌旁逐步输入。
"""

import logging
import os
import random
from typing import Optional, Tuple

import click
from pydantic import ValidationError

from ...controller import ActionInput, GameSession, PotWinnerInput, SettingsInput
from ...core import GameStage, PokerChipsError, SessionError, can_check, get_preset, get_preset_names
from ...storage import JsonFileStore, SessionRepository
from .render import render_state

DEFAULT_STATE_FILE = ".poker_chips_state.json"


def _open_session(state_file: str, seed: Optional[int] = None) -> GameSession:
    directory = os.path.dirname(os.path.abspath(state_file))
    key = os.path.splitext(os.path.basename(state_file))[0]
    repository = SessionRepository(JsonFileStore(directory), key=key)
    rng = random.Random(seed) if seed is not None else None
    return GameSession.load(repository, rng=rng)


def _require_state(session: GameSession):
    if session.state is None:
        raise SessionError("没有进行中的牌局，请先使用 start 开局")
    return session.state


def _format_validation_error(error: ValidationError) -> str:
    return "; ".join(err.get("msg", str(err)) for err in error.errors())


class SessionCommand(click.Command):
    """把会话层和配置错误转换为命令行错误."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except ValidationError as e:
            raise click.ClickException(_format_validation_error(e)) from e
        except (PokerChipsError, ValueError) as e:
            raise click.ClickException(str(e)) from e


@click.group()
@click.option('--state-file', envvar='POKER_CHIPS_STATE_FILE', default=DEFAULT_STATE_FILE,
              show_default=True, help='会话保存位置')
@click.option('--log-level', default='WARNING', show_default=True,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='日志级别')
@click.pass_context
def cli(ctx: click.Context, state_file: str, log_level: str) -> None:
    """德州扑克筹码管理：记录下注、底池和结算，发牌和比牌在牌桌上完成。"""
    logging.basicConfig(level=getattr(logging, log_level.upper()), format='%(levelname)s %(name)s: %(message)s')
    ctx.ensure_object(dict)
    ctx.obj['state_file'] = state_file


@cli.command(cls=SessionCommand)
@click.option('--preset', type=click.Choice(get_preset_names()), default='default', show_default=True)
@click.option('--players', 'player_count', type=int, help='玩家数量')
@click.option('--names', help='逗号分隔的玩家名称')
@click.option('--chips', 'starting_chips', type=int, help='初始筹码')
@click.option('--small-blind', type=int, help='小盲注')
@click.option('--big-blind', type=int, help='大盲注')
@click.option('--bet-unit', type=int, help='下注单位')
@click.option('--no-blinds', is_flag=True, help='不使用盲注')
@click.option('--auto-increase', is_flag=True, help='每手牌后盲注×1.5')
@click.option('--seed', type=int, help='随机种子（决定庄家位）')
@click.pass_context
def start(ctx: click.Context, preset: str, player_count: Optional[int], names: Optional[str],
          starting_chips: Optional[int], small_blind: Optional[int], big_blind: Optional[int],
          bet_unit: Optional[int], no_blinds: bool, auto_increase: bool, seed: Optional[int]) -> None:
    """开始新的一局."""
    data = get_preset(preset).to_dict()
    overrides = {
        'playerCount': player_count,
        'startingChips': starting_chips,
        'smallBlind': small_blind,
        'bigBlind': big_blind,
        'betUnit': bet_unit,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})
    data['playerNames'] = names.split(',') if names else []
    if no_blinds:
        data['blindsEnabled'] = False
    if auto_increase:
        data['autoIncreaseBlind'] = True

    settings = SettingsInput.from_dict(data).to_core()
    session = _open_session(ctx.obj['state_file'], seed)
    session.configure(settings)
    session.start_game()
    click.echo(render_state(session.state))


@cli.command(cls=SessionCommand)
@click.pass_context
def status(ctx: click.Context) -> None:
    """显示当前牌桌."""
    session = _open_session(ctx.obj['state_file'])
    click.echo(render_state(_require_state(session)))


@cli.command(cls=SessionCommand)
@click.argument('action', type=click.Choice(['fold', 'check', 'call', 'raise', 'allIn']))
@click.argument('player_id')
@click.option('--amount', type=int, help='加注增量（跟注之上额外的数量）')
@click.pass_context
def act(ctx: click.Context, action: str, player_id: str, amount: Optional[int]) -> None:
    """为玩家执行一个行动."""
    session = _open_session(ctx.obj['state_file'])
    state = _require_state(session)
    if state.get_player(player_id) is None:
        raise SessionError(f"玩家不存在: {player_id}")
    if not state.is_betting_stage:
        raise SessionError("当前不在下注阶段")
    current = state.get_current_player()
    if current is None or current.id != player_id:
        expected = current.id if current else "无"
        raise SessionError(f"还没轮到 {player_id} 行动，当前行动玩家为 {expected}")

    action_input = ActionInput.from_dict({'type': action, 'playerId': player_id, 'amount': amount})
    if action == 'raise':
        validation = session.validate_raise(player_id, action_input.amount)
        if not validation.valid:
            raise click.ClickException(validation.error)
    if action == 'check' and not can_check(state, player_id):
        raise click.ClickException("当前无法过牌，需要跟注")

    session.perform_action(action_input.to_core())
    click.echo(render_state(session.state))


@cli.command(cls=SessionCommand)
@click.pass_context
def undo(ctx: click.Context) -> None:
    """撤销上一个行动."""
    session = _open_session(ctx.obj['state_file'])
    _require_state(session)
    if not session.undo_last_action():
        click.echo("没有可撤销的行动")
        return
    click.echo(render_state(session.state))


def _parse_pot_winners(text: str) -> PotWinnerInput:
    pot_index, sep, winners = text.partition(':')
    if not sep or not pot_index.strip().isdigit():
        raise click.BadParameter(f"格式应为 底池索引:玩家ID[,玩家ID...]，实际为 {text}")
    return PotWinnerInput.from_dict({
        'potIndex': int(pot_index),
        'winners': [w.strip() for w in winners.split(',') if w.strip()],
    })


@cli.command(cls=SessionCommand)
@click.argument('pot_winners', nargs=-1)
@click.pass_context
def winners(ctx: click.Context, pot_winners: Tuple[str, ...]) -> None:
    """摊牌时为底池指定赢家，例如 0:player-1 1:player-2,player-3

    只有一名有资格玩家的底池可以省略。
    """
    session = _open_session(ctx.obj['state_file'])
    _require_state(session)
    entries = [_parse_pot_winners(text).to_core() for text in pot_winners]
    errors = session.pot_winner_errors(entries)
    if errors:
        raise SessionError("; ".join(errors))
    session.select_winners(entries)
    click.echo(render_state(session.state))


@cli.command('next', cls=SessionCommand)
@click.pass_context
def next_hand(ctx: click.Context) -> None:
    """开始下一手牌."""
    session = _open_session(ctx.obj['state_file'])
    state = _require_state(session)
    if state.stage != GameStage.GAME_OVER:
        raise SessionError("本手尚未结束，请先完成下注或分配底池")
    if not session.next_game():
        click.echo("剩余玩家不足2人，牌局结束")
        return
    click.echo(render_state(session.state))


@cli.command(cls=SessionCommand)
@click.pass_context
def reset(ctx: click.Context) -> None:
    """清除当前牌局和设置."""
    session = _open_session(ctx.obj['state_file'])
    session.reset()
    click.echo("已重置")


def main() -> None:
    cli(obj={})


if __name__ == '__main__':
    main()
