"""yaml_io / fs 工具测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from repokit.core.exceptions import ConfigError
from repokit.utils.fs import atomic_copy, make_temp_repo_dir
from repokit.utils.yaml_io import dump_yaml, read_config, read_config_path, save_yaml


class TestLoadSave:
    """read_config_path(missing_ok=True) 与 save_yaml"""

    def test_missing_returns_empty(self, tmp_path: Path) -> None:
        assert read_config_path(tmp_path / "nope.yml", missing_ok=True) == {}

    def test_non_mapping_raises_even_if_optional(self, tmp_path: Path) -> None:
        """可选文件存在但不是映射时也要报错"""
        f = tmp_path / "list.yml"
        f.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="list"):
            read_config_path(f, missing_ok=True)

    def test_malformed_yaml_raises(self, tmp_path: Path) -> None:
        """YAML 语法错误转换为 ConfigError"""
        f = tmp_path / "bad.yml"
        f.write_text("key: [1\n")
        with pytest.raises(ConfigError, match="解析配置失败") as exc:
            read_config_path(f, missing_ok=True)
        assert exc.value.path == str(f)

    def test_save_then_read_keeps_order(self, tmp_path: Path) -> None:
        f = tmp_path / "sub" / "data.yml"
        save_yaml(f, {"zeta": 1, "alpha": "中文"})
        assert list(read_config_path(f)) == ["zeta", "alpha"]
        assert "中文" in f.read_text(encoding="utf-8")

    def test_dump_yaml(self) -> None:
        """块格式输出，不排序"""
        assert dump_yaml({"b": 1, "a": [1, 2]}) == "b: 1\na:\n- 1\n- 2\n"


class TestReadConfig:
    """read_config 按名称读取必需文件"""

    def test_reads_named_file(self, tmp_path: Path) -> None:
        (tmp_path / "pkg.yml").write_text("pkg.name: apps/blinky\n")
        assert read_config(tmp_path, "pkg") == {"pkg.name": "apps/blinky"}

    def test_missing_raises(self, tmp_path: Path) -> None:
        """必需文件缺失时报错并带路径"""
        with pytest.raises(ConfigError) as exc:
            read_config(tmp_path, "pkg")
        assert exc.value.path == str(tmp_path / "pkg.yml")

    def test_not_mapping_raises(self, tmp_path: Path) -> None:
        (tmp_path / "pkg.yml").write_text("just a string\n")
        with pytest.raises(ConfigError, match="映射"):
            read_config(tmp_path, "pkg")

    def test_empty_file(self, tmp_path: Path) -> None:
        (tmp_path / "pkg.yml").write_text("")
        assert read_config(tmp_path, "pkg") == {}


class TestFs:
    """原子复制与临时目录"""

    def test_atomic_copy_overwrites(self, tmp_path: Path) -> None:
        src = tmp_path / "src.txt"
        src.write_bytes(b"\x00\x01data")
        dest = tmp_path / "out" / "dest.txt"
        atomic_copy(src, dest)
        atomic_copy(src, dest)
        assert dest.read_bytes() == b"\x00\x01data"
        assert [p.name for p in dest.parent.iterdir()] == ["dest.txt"]

    def test_atomic_copy_missing_source(self, tmp_path: Path) -> None:
        """源文件缺失时保留原目标且不留临时文件"""
        dest = tmp_path / "dest.txt"
        dest.write_text("keep")
        with pytest.raises(OSError):
            atomic_copy(tmp_path / "nope", dest)
        assert dest.read_text() == "keep"
        assert [p.name for p in tmp_path.iterdir()] == ["dest.txt"]

    def test_make_temp_repo_dir_unique(self, tmp_path: Path) -> None:
        a = make_temp_repo_dir("repo-", str(tmp_path))
        b = make_temp_repo_dir("repo-", str(tmp_path))
        assert a != b
        assert a.is_dir() and a.name.startswith("repo-")
