"""宠物照看指南：本地数据层（档案、指南、分享链接、自动保存）。"""

__version__ = "2.0.0"
