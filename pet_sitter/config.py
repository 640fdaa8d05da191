"""全局配置：数据目录、存储键、分享码与自动保存参数。"""
import logging
import string
from pathlib import Path

LOGGER = logging.getLogger(__package__)

# 项目根目录（pet_sitter 包所在目录的上一级）
ROOT_DIR = Path(__file__).resolve().parent.parent
# 数据目录：每个集合一个 JSON 文件
DATA_DIR = ROOT_DIR / "data"
STORAGE_DIR = DATA_DIR / "storage"
EXPORTS_DIR = DATA_DIR / "exports"  # 导出的备份文件

# 存储键：每种实体一个集合；设置与引导按用户后缀
KEY_PREFIX = "petsitter"
PETS_KEY = f"{KEY_PREFIX}:pets"
GUIDES_KEY = f"{KEY_PREFIX}:guides"
TASK_COMPLETIONS_KEY = f"{KEY_PREFIX}:task_completions"
SHARE_LINKS_KEY = f"{KEY_PREFIX}:share_links"
CHEAT_SHEETS_KEY = f"{KEY_PREFIX}:cheat_sheets"
USERS_KEY = f"{KEY_PREFIX}:users"
SETTINGS_KEY = f"{KEY_PREFIX}:settings"
ONBOARDING_KEY = f"{KEY_PREFIX}:onboarding"

# 分享码：数字与大小写字母去掉易混淆的 0 O 1 l I，共 57 个字符
SHARE_CODE_LENGTH = 8
SHARE_CODE_ALPHABET = "".join(
    c for c in string.digits + string.ascii_uppercase + string.ascii_lowercase if c not in "0O1lI"
)
SHARE_CODE_MAX_ATTEMPTS = 10

# 自动保存（毫秒）
AUTO_SAVE_DEBOUNCE_MS = 1000
AUTO_SAVE_SAVED_DISPLAY_MS = 2000

# 导出格式版本
EXPORT_VERSION = "1.0"
COPY_SUFFIX = " (Copy)"


def settings_key(user_id: str) -> str:
    return f"{SETTINGS_KEY}:{user_id}"


def onboarding_key(user_id: str) -> str:
    return f"{ONBOARDING_KEY}:{user_id}"


def ensure_dirs() -> None:
    """确保数据目录存在。"""
    for d in (DATA_DIR, STORAGE_DIR, EXPORTS_DIR):
        d.mkdir(parents=True, exist_ok=True)
