"""导出信封：按用户备份 / 恢复。

分享链接与速查表不在其中，它们可以重新生成，不属于需要往返的用户数据。
"""
import json
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field

from pet_sitter.account.models import AppSettings
from pet_sitter.config import EXPORT_VERSION
from pet_sitter.guides.models import Guide, TaskCompletion
from pet_sitter.pets.models import Pet


class ExportedData(BaseModel):
    version: str = EXPORT_VERSION
    exported_at: str
    pets: List[Pet] = Field(default_factory=list)
    guides: List[Guide] = Field(default_factory=list)
    task_completions: List[TaskCompletion] = Field(default_factory=list)
    settings: AppSettings

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)

    @classmethod
    def from_json(cls, text: str) -> "ExportedData":
        return cls.model_validate(json.loads(text))


def write_export(data: ExportedData, path: Path) -> Path:
    """写出备份文件。"""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(data.to_json())
    return path


def read_export(path: Path) -> ExportedData:
    with open(path, "r", encoding="utf-8") as f:
        return ExportedData.from_json(f.read())
