"""repokit - 仓库限定包引用解析 + 远程仓库拉取缓存"""

__version__ = "1.5.0"
