"""自动保存：把连续的表单编辑合并为一次保存调用（防抖）。

状态：idle → saving → saved / error。saved 显示一段时间后自动回到 idle。
保存函数读取的永远是定时器触发那一刻的最新快照。
"""
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from pet_sitter.config import AUTO_SAVE_DEBOUNCE_MS, AUTO_SAVE_SAVED_DISPLAY_MS, LOGGER
from pet_sitter.ids import to_iso, utc_now


class SaveStatus(str, Enum):
    IDLE = "idle"        # 空闲，或有编辑等待保存
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


class AutoSaveCoordinator(QObject):
    """监听编辑并防抖保存；保存失败只记录在 error 状态里，不向调用方抛出。"""
    statusChanged = pyqtSignal(str)  # 新状态
    saved = pyqtSignal(str)          # 保存完成时间 ISO
    failed = pyqtSignal(str)         # 错误信息

    def __init__(
        self,
        save_fn: Callable[[Any], Any],
        debounce_ms: int = AUTO_SAVE_DEBOUNCE_MS,
        enabled: bool = True,
        saved_display_ms: int = AUTO_SAVE_SAVED_DISPLAY_MS,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._save_fn = save_fn
        self._enabled = enabled
        self._status = SaveStatus.IDLE
        self._last_saved: Optional[datetime] = None
        self._error: Optional[str] = None
        # 最新快照：每次编辑覆盖，只在真正保存时读取
        self._latest: Any = None
        self._initialized = False
        self._closed = False
        # 关闭期间有未保存的编辑
        self._dirty = False

        self._debounce_timer = QTimer(self)
        self._debounce_timer.setSingleShot(True)
        self._debounce_timer.setInterval(debounce_ms)
        self._debounce_timer.timeout.connect(self._perform_save)

        self._display_timer = QTimer(self)
        self._display_timer.setSingleShot(True)
        self._display_timer.setInterval(saved_display_ms)
        self._display_timer.timeout.connect(self._revert_to_idle)

    @property
    def status(self) -> SaveStatus:
        return self._status

    @property
    def last_saved(self) -> Optional[datetime]:
        return self._last_saved

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def is_pending(self) -> bool:
        """是否有等待触发的保存。"""
        return self._debounce_timer.isActive()

    def _set_status(self, status: SaveStatus) -> None:
        if status == self._status:
            return
        self._status = status
        self.statusChanged.emit(status.value)

    def set_data(self, data: Any) -> None:
        """记录一次编辑。第一次调用是初始数据，不触发保存。"""
        if self._closed:
            return
        self._latest = data
        if not self._initialized:
            self._initialized = True
            return
        if not self._enabled:
            self._dirty = True
            return
        self._schedule()

    def _schedule(self) -> None:
        self._set_status(SaveStatus.IDLE)
        self._debounce_timer.start()  # 重新计时

    def set_enabled(self, enabled: bool) -> None:
        """关闭后仍记录编辑，但不再安排保存；已排队的保存被取消。

        重新开启时，关闭期间（或被取消）的编辑会重新进入防抖。
        """
        if enabled == self._enabled:
            return
        self._enabled = enabled
        if not enabled:
            if self._debounce_timer.isActive():
                self._debounce_timer.stop()
                self._dirty = True
            return
        if self._dirty and not self._closed:
            self._dirty = False
            self._schedule()

    def save_now(self) -> None:
        """取消等待中的防抖，立即保存。"""
        if self._closed:
            return
        self._debounce_timer.stop()
        self._perform_save()

    def close(self) -> None:
        """调用方销毁时调用：取消所有定时器，之后的编辑一律忽略。"""
        self._closed = True
        self._debounce_timer.stop()
        self._display_timer.stop()

    def _perform_save(self) -> None:
        if not self._enabled or self._closed:
            return
        self._display_timer.stop()
        self._dirty = False
        self._error = None
        self._set_status(SaveStatus.SAVING)
        try:
            self._save_fn(self._latest)
        except Exception as err:  # 保存失败进入 error 状态，不自动重试
            self._error = str(err) or "Failed to save"
            LOGGER.warning("Auto-save failed: %s", self._error)
            self._set_status(SaveStatus.ERROR)
            self.failed.emit(self._error)
            return
        self._last_saved = utc_now()
        self._set_status(SaveStatus.SAVED)
        self.saved.emit(to_iso(self._last_saved))
        self._display_timer.start()

    def _revert_to_idle(self) -> None:
        # 期间有新的编辑或保存时状态已不是 saved，不能覆盖
        if self._status == SaveStatus.SAVED:
            self._set_status(SaveStatus.IDLE)


def for_pet(service, pet_id: str, **kwargs: Any) -> AutoSaveCoordinator:
    """宠物表单的自动保存：快照为要合并的字段字典。"""
    return AutoSaveCoordinator(lambda data: service.update_pet(pet_id, data), **kwargs)


def for_guide(service, guide_id: str, **kwargs: Any) -> AutoSaveCoordinator:
    """指南表单的自动保存。"""
    return AutoSaveCoordinator(lambda data: service.update_guide(guide_id, data), **kwargs)
