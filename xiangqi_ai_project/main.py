#!/usr/bin/env python3
"""
Xiangqi AI 主入口文件

提供查看棋局、列出合法走法、电脑建议和终端对弈的命令行接口。
"""

import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from xiangqi_ai_project import __version__, __description__
from xiangqi_ai_project.src.xiangqi_engine.config import ConfigManager
from xiangqi_ai_project.src.xiangqi_engine.config.engine_config import (
    DEFAULT_EVALUATION_CONFIG, DEFAULT_GAME_CONFIG, DEFAULT_SEARCH_CONFIG, DEFAULT_SYSTEM_CONFIG
)
from xiangqi_ai_project.src.xiangqi_engine.game import (
    GameState, GameStatus, apply_move, computer_move, load_game, save_game, undo_move
)
from xiangqi_ai_project.src.xiangqi_engine.rules_engine import (
    BoardValidator, ChessBoard, Move, MoveRecord, Side, game_status, is_in_check, legal_moves,
    parse_fen, parse_square, square_name
)
from xiangqi_ai_project.src.xiangqi_engine.search_algorithm import Difficulty, evaluate, select_move
from xiangqi_ai_project.src.xiangqi_engine.utils import InvalidMoveError, XiangqiError, setup_logger

console = Console()
board_validator = BoardValidator()

DEFAULT_CONFIG_DIR = "configs/xiangqi_engine"
DIFFICULTY_CHOICES = ['easy', 'simple', 'medium', 'hard']

RESULT_TEXT = {
    GameStatus.RED_WIN: "红方胜",
    GameStatus.BLACK_WIN: "黑方胜",
    GameStatus.DRAW: "和棋",
    GameStatus.PLAYING: "对局进行中",
}


def print_banner():
    """打印项目横幅"""
    banner_text = Text()
    banner_text.append("Xiangqi AI\n", style="bold red")
    banner_text.append(f"版本: {__version__}\n", style="green")
    banner_text.append(__description__, style="white")

    panel = Panel(
        banner_text,
        title="中国象棋",
        title_align="center",
        border_style="red",
        padding=(1, 2)
    )
    console.print(panel)


def load_configs(config_dir: str) -> dict:
    """配置目录存在时从YAML读取，否则使用默认配置"""
    if Path(config_dir).is_dir():
        return ConfigManager(config_dir, create_defaults=False).get_all_configs()
    return {
        'search': replace(DEFAULT_SEARCH_CONFIG),
        'evaluation': replace(DEFAULT_EVALUATION_CONFIG),
        'game': replace(DEFAULT_GAME_CONFIG),
        'system': replace(DEFAULT_SYSTEM_CONFIG),
    }


def board_from_option(fen: Optional[str]):
    """解析 --fen 选项，未提供时返回初始局面和红方"""
    if not fen:
        return ChessBoard.initial(), Side.RED
    try:
        board, side = parse_fen(fen)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--fen') from e

    is_valid, errors = board_validator.full_validation(board)
    if not is_valid:
        raise click.BadParameter("; ".join(errors), param_hint='--fen')
    return board, side


def render_board(board: ChessBoard, title: str):
    console.print(Panel(Text(board.to_visual_string()), title=title, border_style="blue"))


@click.group()
@click.version_option(version=__version__, prog_name="Xiangqi AI")
@click.option('--debug', is_flag=True, help='启用调试模式')
@click.option('--config-dir', type=click.Path(file_okay=False), default=DEFAULT_CONFIG_DIR,
              show_default=True, help='配置文件目录')
@click.pass_context
def cli(ctx: click.Context, debug: bool, config_dir: str):
    """中国象棋AI - 规则引擎与电脑对手"""
    configs = load_configs(config_dir)
    system = configs['system']

    for logger_name in ('xiangqi', 'xiangqi_ai_project'):
        setup_logger(
            name=logger_name,
            level='DEBUG' if debug else system.log_level,
            log_file=system.log_file or None,
            log_dir=system.log_dir,
            max_size=system.log_max_size,
            backup_count=system.log_backup_count,
            console_output=debug
        )

    if debug:
        console.print("[yellow]调试模式已启用[/yellow]")

    ctx.obj = {'debug': debug, 'config_dir': config_dir, **configs}


@cli.command()
@click.option('--fen', type=str, help='FEN格式的棋局，默认为初始局面')
def show(fen: Optional[str]):
    """显示棋局"""
    board, side = board_from_option(fen)
    render_board(board, f"轮到{side.chinese_name}")

    status = game_status(board, side)
    if status.is_over:
        console.print(f"[bold red]{RESULT_TEXT[status]}[/bold red]")
    elif is_in_check(board, side):
        console.print(f"[red]{side.chinese_name}被将军[/red]")
    console.print(f"FEN: {board.to_fen(side)}")


@cli.command()
@click.argument('square')
@click.option('--fen', type=str, help='FEN格式的棋局，默认为初始局面')
def moves(square: str, fen: Optional[str]):
    """列出指定格子上棋子的合法走法"""
    board, _ = board_from_option(fen)
    try:
        pos = parse_square(square)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='SQUARE') from e

    piece = board.at(pos)
    if piece is None:
        console.print(f"[yellow]{square} 没有棋子[/yellow]")
        return

    targets = legal_moves(board, pos)
    if not targets:
        console.print(f"[yellow]{piece.side.chinese_name}{piece.glyph} ({square}) 没有合法走法[/yellow]")
        return

    table = Table(title=f"{piece.side.chinese_name}{piece.glyph} ({square}) 的合法走法")
    table.add_column("走法", style="cyan")
    table.add_column("中文记法", style="green")
    for target in targets:
        record = MoveRecord(pos, target, piece, board.at(target))
        table.add_row(f"{square_name(pos)}{square_name(target)}", record.to_chinese_notation())
    console.print(table)


@cli.command()
@click.option('--fen', type=str, help='FEN格式的棋局，默认为初始局面')
@click.option('--difficulty', type=click.Choice(DIFFICULTY_CHOICES), default=None, help='电脑难度')
@click.option('--depth', type=click.IntRange(min=1), default=None, help='困难难度的搜索深度')
@click.option('--seed', type=int, default=None, help='简单难度的随机种子')
@click.pass_obj
def suggest(obj: dict, fen: Optional[str], difficulty: Optional[str], depth: Optional[int],
            seed: Optional[int]):
    """计算电脑建议的走法"""
    board, side = board_from_option(fen)
    search_config = obj['search']
    if depth is not None:
        search_config = replace(search_config, depth=depth)
    if seed is not None:
        search_config = replace(search_config, random_seed=seed)
    level = Difficulty.parse(difficulty or obj['game'].default_difficulty)

    move = select_move(board, side, level, config=search_config, evaluation_config=obj['evaluation'])
    if move is None:
        console.print(f"[red]{side.chinese_name}没有合法走法[/red]")
        return

    record = MoveRecord(move.from_pos, move.to_pos, board.at(move.from_pos), board.at(move.to_pos))
    score = evaluate(board.apply(move), side, obj['evaluation'],
                     stalemate_policy=search_config.stalemate_policy)
    console.print(f"[green]建议走法 ({level.value}): {move} {record.to_chinese_notation()}[/green]")
    console.print(f"走后评估 ({side.chinese_name}视角): {score}")


def _undo_to_human(state: GameState, human: Side) -> GameState:
    """悔棋直到轮到人类走子"""
    state = undo_move(state)
    while state.history and state.side_to_move is not human:
        state = undo_move(state)
    return state


@cli.command()
@click.option('--difficulty', type=click.Choice(DIFFICULTY_CHOICES), default=None, help='电脑难度')
@click.option('--human', type=click.Choice(['red', 'black']), default=None, help='人类执子方')
@click.option('--load', 'load_path', type=click.Path(exists=True, dir_okay=False), help='加载存档')
@click.option('--save', 'save_path', type=click.Path(dir_okay=False), help='结束时保存到此路径')
@click.pass_obj
def play(obj: dict, difficulty: Optional[str], human: Optional[str],
         load_path: Optional[str], save_path: Optional[str]):
    """在终端与电脑对弈"""
    game_config = obj['game']
    level = Difficulty.parse(difficulty or game_config.default_difficulty)
    human_side = Side.parse(human or game_config.human_side)
    default_save_path = save_path or game_config.save_path

    state = load_game(load_path) if load_path else GameState.new()

    print_banner()
    console.print(f"你执{human_side.chinese_name}，电脑难度: {level.value}")
    console.print("输入坐标走法（如 b7e7），或 undo / save / quit")

    while not state.is_over:
        render_board(state.board, f"第{state.move_count + 1}步 · 轮到{state.side_to_move.chinese_name}")

        if state.side_to_move is not human_side:
            move = computer_move(state, level, config=obj['search'], evaluation_config=obj['evaluation'])
            if move is None:
                break
            state = apply_move(state, move, config=obj['search'])
            console.print(f"[magenta]电脑: {move} {state.last_record.to_chinese_notation()}[/magenta]")
            continue

        if is_in_check(state.board, human_side):
            console.print("[red]你被将军了！[/red]")

        command = click.prompt("你的走法", type=str).strip().lower()
        if command in ('quit', 'exit', 'q'):
            break
        if command == 'undo':
            if not state.history:
                console.print("[yellow]没有可以悔的棋[/yellow]")
            else:
                state = _undo_to_human(state, human_side)
            continue
        if command == 'save':
            save_game(state, default_save_path)
            console.print(f"[green]已保存到 {default_save_path}[/green]")
            continue

        try:
            move = Move.from_coordinate_notation(command)
            state = apply_move(state, move, config=obj['search'])
        except ValueError as e:
            console.print(f"[red]无法识别的输入: {escape(str(e))}[/red]")
            continue
        except InvalidMoveError as e:
            console.print(f"[red]{escape(e.message)}[/red]")
            continue
        console.print(f"[cyan]你: {move} {state.last_record.to_chinese_notation()}[/cyan]")

    if state.is_over:
        render_board(state.board, "终局")
        console.print(f"[bold red]{RESULT_TEXT[state.status]}[/bold red]")

    if save_path:
        save_game(state, save_path)
        console.print(f"[green]对局已保存到 {save_path}[/green]")


@cli.command('init-config')
@click.option('--config-dir', 'target_dir', type=click.Path(file_okay=False), default=None,
              help='配置文件目录，默认使用全局 --config-dir')
@click.pass_obj
def init_config(obj: dict, target_dir: Optional[str]):
    """写入默认配置文件"""
    config_dir = target_dir or obj['config_dir']
    manager = ConfigManager(config_dir, create_defaults=True)

    for config_name, config_file in manager.config_files.items():
        console.print(f"[green]{config_name}: {config_file}[/green]")


@cli.command()
def info():
    """显示系统信息"""
    print_banner()


def main():
    """主入口函数"""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]程序被用户中断[/yellow]")
        sys.exit(0)
    except XiangqiError as e:
        console.print(f"[red]发生错误: {escape(str(e))}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
