"""
筹码引擎外层异常定义
引擎本身从不抛出异常，这些异常只用于存储、广播和命令行等外层
"""


class PokerChipsError(Exception):
    """筹码引擎基础异常类"""
    pass


class SerializationError(PokerChipsError):
    """序列化失败"""
    pass


class DeserializationError(PokerChipsError):
    """反序列化失败（数据损坏或格式不兼容）"""
    pass


class RoomNotFoundError(PokerChipsError):
    """观战房间不存在"""

    def __init__(self, code: str):
        super().__init__(f"房间不存在: {code}")
        self.code = code


class SessionError(PokerChipsError):
    """会话状态不允许执行该操作"""
    pass
