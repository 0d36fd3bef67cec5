"""Config 加载测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from repokit.core.config import Config, get_config, init_config
from repokit.core.exceptions import ConfigError


class TestConfig:
    """repokit.yml 加载与全局单例"""

    def test_defaults_when_missing(self, tmp_path: Path) -> None:
        """文件不存在时使用默认值"""
        cfg = Config.from_file(str(tmp_path / "nope.yml"))
        assert cfg == Config()
        assert cfg.clone_depth == 1
        assert cfg.default_branch == "master"

    def test_known_and_extra_keys(self, tmp_path: Path) -> None:
        """未知键放入 extra"""
        f = tmp_path / "repokit.yml"
        f.write_text("clone_timeout: 30\ngit_cmd: /usr/bin/git\nteam: firmware\n")
        cfg = Config.from_file(str(f))
        assert cfg.clone_timeout == 30
        assert cfg.git_cmd == "/usr/bin/git"
        assert cfg.extra == {"team": "firmware"}

    def test_init_replaces_global(self, tmp_path: Path) -> None:
        f = tmp_path / "repokit.yml"
        f.write_text("repos_dir: vendor\n")
        cfg = init_config(str(f))
        assert get_config() is cfg
        assert get_config().repos_dir == "vendor"

    def test_downloader_reads_config(self, tmp_path: Path, fake_git) -> None:
        """Downloader 默认参数取自全局配置"""
        from repokit.core.downloader import Downloader
        f = tmp_path / "repokit.yml"
        f.write_text("tmp_prefix: fw-\nclone_depth: 0\n")
        init_config(str(f))
        dl = Downloader(fake_git)
        assert dl.tmp_prefix == "fw-"
        assert dl.clone_depth == 0


class TestConfigErrors:
    """配置文件格式错误统一报 ConfigError"""

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        f = tmp_path / "repokit.yml"
        f.write_text("clone_depth: [1\n")
        with pytest.raises(ConfigError) as exc:
            Config.from_file(str(f))
        assert exc.value.path == str(f)
        assert exc.value.code == "CONFIG_ERROR"

    def test_top_level_not_mapping(self, tmp_path: Path) -> None:
        f = tmp_path / "repokit.yml"
        f.write_text("- git_cmd\n")
        with pytest.raises(ConfigError, match="映射"):
            Config.from_file(str(f))

    def test_numeric_string_coerced(self, tmp_path: Path) -> None:
        """数字字符串转换为整数"""
        f = tmp_path / "repokit.yml"
        f.write_text('clone_depth: "2"\nclone_timeout: "45"\n')
        cfg = Config.from_file(str(f))
        assert cfg.clone_depth == 2
        assert cfg.clone_timeout == 45

    def test_scalar_coerced_to_str(self, tmp_path: Path) -> None:
        f = tmp_path / "repokit.yml"
        f.write_text("default_branch: 1.0\ntmp_root:\n")
        cfg = Config.from_file(str(f))
        assert cfg.default_branch == "1.0"
        assert cfg.tmp_root == ""

    @pytest.mark.parametrize("value", ['"abc"', "true", "-1", "[1, 2]", "{a: 1}"])
    def test_bad_integer(self, tmp_path: Path, value: str) -> None:
        """非整数、布尔和负数都拒绝"""
        f = tmp_path / "repokit.yml"
        f.write_text(f"clone_depth: {value}\n")
        with pytest.raises(ConfigError, match="clone_depth"):
            Config.from_file(str(f))

    def test_bad_string(self, tmp_path: Path) -> None:
        f = tmp_path / "repokit.yml"
        f.write_text("git_cmd: [git, --no-pager]\n")
        with pytest.raises(ConfigError, match="git_cmd"):
            Config.from_file(str(f))

    def test_init_keeps_previous_on_error(self, tmp_path: Path) -> None:
        """加载失败不替换全局配置"""
        before = get_config()
        f = tmp_path / "repokit.yml"
        f.write_text("clone_depth: nope\n")
        with pytest.raises(ConfigError):
            init_config(str(f))
        assert get_config() is before
