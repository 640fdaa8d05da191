"""指南分享链接。"""
from pet_sitter.sharing.links import ShareLinkManager
from pet_sitter.sharing.models import ShareableLink

__all__ = ["ShareableLink", "ShareLinkManager"]
