"""追蹤作者即將出版的新書，輸出依出版日期分組的文字報表。"""

__version__ = "0.1.0"
