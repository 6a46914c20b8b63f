"""
德州扑克筹码管理.

记录线下牌局的下注、底池和结算；发牌和比牌由玩家在牌桌上完成.
"""

__version__ = "0.1.0"
