"""
组织管理模块 - 记录源

记录源负责把外部文件转换为原始行列表（列名 -> 值），不做任何校验。
解析失败时抛出 ValueError / OSError / csv.Error，由导入处理器转换为第 0 行的 file 错误。
"""

import csv
import io
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Union

from .schemas import RawRow


class RecordSource(Protocol):
    """记录源协议"""

    def read(self) -> List[RawRow]:
        """读取全部原始行"""
        ...


class RowsRecordSource:
    """包装已解析好的原始行"""

    def __init__(self, rows: Iterable[RawRow]):
        self._rows = [dict(row) for row in rows]

    def read(self) -> List[RawRow]:
        return [dict(row) for row in self._rows]


class CsvRecordSource:
    """简单 CSV 记录源

    第一行为表头，按标准 CSV 规则解析（支持双引号包裹含逗号的单元格）：
    - 空行被跳过
    - 表头与单元格去除首尾空白
    - 缺失的单元格为空字符串，多余的单元格被忽略
    - 少于两行（只有表头或为空）时返回空列表

    使用示例:
        source = CsvRecordSource(text="name,email\\n张三,zhangsan@example.com")
        source.read()   # [{"name": "张三", "email": "zhangsan@example.com"}]

        source = CsvRecordSource(path="imports/personnel.csv")
    """

    def __init__(
        self,
        text: Optional[str] = None,
        path: Optional[Union[str, Path]] = None,
        encoding: str = "utf-8-sig",
    ):
        if (text is None) == (path is None):
            raise ValueError("text 和 path 必须且只能提供一个")
        self.text = text
        self.path = Path(path) if path is not None else None
        self.encoding = encoding

    def _load_text(self) -> str:
        if self.text is not None:
            return self.text
        if self.path.suffix.lower() != ".csv":
            raise ValueError(f"不支持的文件格式: {self.path.suffix or self.path.name}")
        return self.path.read_text(encoding=self.encoding)

    def read(self) -> List[RawRow]:
        reader = csv.reader(io.StringIO(self._load_text(), newline=""), skipinitialspace=True)
        records = [[cell.strip() for cell in record] for record in reader]
        records = [record for record in records if any(record)]
        if len(records) < 2:
            return []

        headers = records[0]
        rows: List[RawRow] = []
        for values in records[1:]:
            rows.append({
                header: values[i] if i < len(values) else ""
                for i, header in enumerate(headers)
            })
        return rows


__all__ = [
    "RecordSource",
    "RowsRecordSource",
    "CsvRecordSource",
]
