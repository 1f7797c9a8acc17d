"""
功能开关：进程级布尔值，控制全部数据接口的开启 / 关闭

读取不加锁；toggle 用独立的小锁保证读-改-写是一步完成的。
开关与 Todo 存储锁互相独立：某个操作在检查开关之后、进入临界区之前，
开关可能已被切换，这种竞态是允许的（最终一致的门控，而非严格门控）。
"""

import threading

import structlog

from todo_service.todo.errors import FeatureDisabledError

log = structlog.get_logger()


class FlagGate:
    """数据接口的全局开关，初始为关闭"""

    def __init__(self, enabled: bool = False):
        self._enabled = enabled
        self._toggle_lock = threading.Lock()

    def is_enabled(self) -> bool:
        return self._enabled

    def ensure_enabled(self) -> None:
        """开关关闭时抛出 FeatureDisabledError"""
        if not self._enabled:
            raise FeatureDisabledError()

    def disable(self) -> None:
        """强制关闭（启动时调用）"""
        with self._toggle_lock:
            self._enabled = False
        log.info("Flag disabled.")

    def toggle(self) -> bool:
        """翻转开关，返回翻转后的状态"""
        with self._toggle_lock:
            self._enabled = not self._enabled
            enabled = self._enabled
        log.info("功能开关已切换", enabled=enabled)
        return enabled
