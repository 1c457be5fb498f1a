"""Tests for the install flow: dir, archive, url, uninstall."""

import io
import json
import shutil
import tarfile
from unittest.mock import patch

import pytest

from pluginkit.core.config import Config
from pluginkit.core.errors import VersionParseError
from pluginkit.plugins.install import (
    install_plugin_from_archive,
    install_plugin_from_dir,
    install_plugin_from_url,
    uninstall_plugin,
)
from pluginkit.plugins.locator import PluginLocator
from pluginkit.plugins.version import Version


@pytest.fixture
def config(tmp_path):
    return Config(home=tmp_path / "home", shared_dirs=[tmp_path / "share"], cwd=tmp_path)


@pytest.fixture
def source(tmp_path):
    src = tmp_path / "unpacked" / "html-report"
    (src / "bin").mkdir(parents=True)
    (src / "plugin.json").write_text(json.dumps({"id": "html-report", "version": "2.1.0"}))
    (src / "bin" / "report").write_text("#!/bin/sh\n")
    (src / "bin" / "report").chmod(0o755)
    return src


class TestInstallFromDir:
    def test_fresh_install_goes_to_user_root(self, config, source):
        result = install_plugin_from_dir(config, source)
        expected = config.home / "plugins" / "html-report" / "2.1.0"
        assert result.path == expected
        assert result.name == "html-report"
        assert result.version == Version(2, 1, 0)
        assert result.mirror.written == ["bin/report", "plugin.json"]
        assert result.updated_count == 2
        assert (expected / "bin" / "report").read_text() == "#!/bin/sh\n"
        assert PluginLocator.from_config(config).locate("html-report") == expected

    def test_reinstall_writes_nothing(self, config, source):
        install_plugin_from_dir(config, source)
        result = install_plugin_from_dir(config, source)
        assert result.updated_count == 0

    def test_update_in_existing_root(self, config, source, tmp_path):
        team_root = tmp_path / "team"
        (team_root / "html-report" / "2.0.0").mkdir(parents=True)
        config.extra_plugin_roots.append(team_root)
        result = install_plugin_from_dir(config, source)
        assert result.path == team_root / "html-report" / "2.1.0"

    def test_explicit_name_and_version(self, config, source):
        result = install_plugin_from_dir(config, source, name="custom", version="0.0.1")
        assert result.path == config.home / "plugins" / "custom" / "0.0.1"

    def test_prints_summary(self, config, source):
        with patch("pluginkit.plugins.install.print_success") as success:
            install_plugin_from_dir(config, source)
        success.assert_called_once_with("Installed html-report 2.1.0 (2 file(s) updated)")


class TestInstallFromArchive:
    def test_single_top_level_dir(self, config, source, tmp_path):
        archive = shutil.make_archive(
            str(tmp_path / "html-report"), "zip", root_dir=source.parent, base_dir=source.name
        )
        result = install_plugin_from_archive(config, archive)
        assert (result.path / "plugin.json").is_file()
        assert (result.path / "bin" / "report").is_file()

    def test_flat_archive(self, config, source, tmp_path):
        archive = shutil.make_archive(str(tmp_path / "flat"), "gztar", root_dir=source)
        result = install_plugin_from_archive(config, archive)
        assert result.path == config.home / "plugins" / "html-report" / "2.1.0"
        assert (result.path / "plugin.json").is_file()

    def test_from_url(self, config, source, tmp_path):
        archive = shutil.make_archive(str(tmp_path / "dl"), "zip", root_dir=source)

        def fake_download(url, target_dir):
            return shutil.copy(archive, target_dir)

        with patch("pluginkit.plugins.install.download", side_effect=fake_download) as dl:
            result = install_plugin_from_url(config, "https://example.com/dl.zip")
        assert dl.call_args[0][0] == "https://example.com/dl.zip"
        assert (result.path / "plugin.json").is_file()


class TestUninstall:
    def test_single_version(self, config, source):
        install_plugin_from_dir(config, source)
        install_plugin_from_dir(config, source, version="3.0.0")
        assert uninstall_plugin(config, "html-report", "3.0.0")
        locator = PluginLocator.from_config(config)
        assert locator.latest_installed("html-report") == Version(2, 1, 0)

    def test_whole_plugin(self, config, source):
        install_plugin_from_dir(config, source)
        assert uninstall_plugin(config, "html-report")
        assert not PluginLocator.from_config(config).is_installed("html-report")

    def test_absent(self, config):
        assert not uninstall_plugin(config, "nothing")
        assert not uninstall_plugin(config, "nothing", "1.0.0")

    @pytest.mark.parametrize("name", ["", ".", ".."])
    def test_rejects_bad_names_without_deleting(self, config, source, name):
        install_plugin_from_dir(config, source)
        install_plugin_from_dir(config, source, name="other")
        with pytest.raises(ValueError):
            uninstall_plugin(config, name)
        names = [p.name for p in PluginLocator.from_config(config).installed_plugins()]
        assert names == ["html-report", "other"]

    @pytest.mark.parametrize("version", ["..", ".", "latest"])
    def test_rejects_bad_versions_without_deleting(self, config, source, version):
        install_plugin_from_dir(config, source)
        with pytest.raises(VersionParseError):
            uninstall_plugin(config, "html-report", version)
        assert PluginLocator.from_config(config).is_installed("html-report", "2.1.0")


class TestInstallStaysUnderRoot:
    def test_traversing_id_is_rejected(self, config, tmp_path):
        src = tmp_path / "evil"
        src.mkdir()
        (src / "plugin.json").write_text(json.dumps({"id": "../../escaped", "version": "1.0.0"}))
        with pytest.raises(ValueError):
            install_plugin_from_dir(config, src)
        assert not (tmp_path / "escaped").exists()
        assert not (config.home / "escaped").exists()

    def test_traversing_explicit_name_is_rejected(self, config, source, tmp_path):
        with pytest.raises(ValueError):
            install_plugin_from_dir(config, source, name="../outside")
        assert not (config.home / "outside").exists()

    @pytest.mark.skipif(not hasattr(tarfile, "data_filter"), reason="needs tarfile extraction filters")
    def test_archive_member_outside_dest_is_rejected(self, config, tmp_path):
        archive = tmp_path / "evil.tar"
        payload = b"owned"
        with tarfile.open(archive, "w") as tar:
            info = tarfile.TarInfo("../../escaped.txt")
            info.size = len(payload)
            tar.addfile(info, io.BytesIO(payload))
        with pytest.raises(tarfile.TarError):
            install_plugin_from_archive(config, archive, name="evil", version="1.0.0")
