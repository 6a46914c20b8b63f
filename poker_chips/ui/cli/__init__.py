"""命令行界面."""

from .app import cli, main
from .render import render_state, render_pots

__all__ = ['cli', 'main', 'render_state', 'render_pots']
