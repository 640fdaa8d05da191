"""表单自动保存。"""
from pet_sitter.autosave.coordinator import AutoSaveCoordinator, SaveStatus, for_guide, for_pet

__all__ = ["AutoSaveCoordinator", "SaveStatus", "for_pet", "for_guide"]
