"""Tests for binary path probing."""
import itertools

import pytest

from rootcheck_core.logic.models import DetectionConfig
from rootcheck_core.heuristics.binaries import PathProbe, CandidatePathSet

from conftest import make_host


class TestCandidatePathSet:
    def test_normalizes_trailing_slash(self):
        paths = CandidatePathSet.build(["/sbin", "/system/xbin/"])
        assert list(paths) == ["/sbin/", "/system/xbin/"]

    def test_appends_path_env_and_dedupes(self):
        paths = CandidatePathSet.build(["/sbin/", "/system/bin/"], "/system/bin:/vendor/bin::/sbin")
        assert list(paths) == ["/sbin/", "/system/bin/", "/vendor/bin/"]

    def test_full_paths(self):
        paths = CandidatePathSet.build(["/a/", "/b"])
        assert paths.full_paths("su") == ["/a/su", "/b/su"]

    def test_extend_keeps_order(self):
        paths = CandidatePathSet.build(["/a/"]).extend(["/c", "/a/"])
        assert list(paths) == ["/a/", "/c/"]
        assert len(paths) == 2

    def test_extend_with_nothing_is_identity(self):
        paths = CandidatePathSet.build(["/a/"])
        assert paths.extend(None) is paths


class TestPathProbe:
    def test_no_hits(self, config, sink):
        probe = PathProbe(make_host(), config, sink)
        result = probe.check_for_su_binary()
        assert not result.positive
        assert sink.records == []

    def test_every_hit_is_logged(self, config, sink):
        host = make_host(existing=["/sbin/su", "/system/xbin/su"])
        result = PathProbe(host, config, sink).check_for_su_binary()

        assert result.positive
        assert result.evidence == ["/sbin/su", "/system/xbin/su"]
        assert sink.records == [
            ("su_binary", "/sbin/su binary detected!"),
            ("su_binary", "/system/xbin/su binary detected!"),
        ]

    def test_scan_does_not_stop_at_first_hit(self, config, sink):
        host = make_host(existing=["/data/local/su"])
        PathProbe(host, config, sink).check_for_su_binary()
        assert len(host.file_probe.probed) == len(config.su_paths)

    def test_busybox_and_magisk(self, config, sink):
        host = make_host(existing=["/system/bin/busybox", "/sbin/magisk"])
        probe = PathProbe(host, config, sink)

        assert probe.check_for_busybox_binary().positive
        assert probe.check_for_magisk_binary().positive
        assert not probe.check_for_su_binary().positive
        assert sink.signals() == ["busybox_binary", "magisk_binary"]

    def test_path_env_directories_probed_when_enabled(self, sink):
        host = make_host(existing=["/opt/tools/su"], path_env="/opt/tools")

        enabled = PathProbe(host, DetectionConfig(include_path_env=True), sink)
        disabled = PathProbe(host, DetectionConfig(include_path_env=False), sink)

        assert enabled.check_for_su_binary().positive
        assert not disabled.check_for_su_binary().positive

    def test_custom_paths(self, config, sink):
        host = make_host(existing=["/custom/su"])
        probe = PathProbe(host, config, sink)
        paths = probe.candidate_paths().extend(["/custom"])
        assert probe.check_for_binary("su", paths).positive

    @pytest.mark.parametrize("order", list(itertools.permutations(["/sbin", "/system/xbin", "/data/local"])))
    def test_directory_order_does_not_change_verdict(self, config, sink, order):
        host = make_host(existing=["/system/xbin/su"])
        result = PathProbe(host, config, sink).check_for_binary("su", CandidatePathSet.build(order))

        assert result.positive
        assert result.evidence == ["/system/xbin/su"]
        assert len(host.file_probe.probed) == 3
