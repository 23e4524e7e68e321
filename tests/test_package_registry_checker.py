"""Tests for package registry lookups and checks."""
import itertools

import pytest

from rootcheck_core.heuristics.packages import PackageRegistryChecker
from rootcheck_core.infrastructure.packages import (
    PackageNotFoundError,
    ShellPackageRegistry,
    StaticPackageRegistry,
)

from conftest import FakeInvoker, make_host


class TestShellPackageRegistry:
    def test_installed_package(self):
        invoker = FakeInvoker({
            ("pm", "path", "com.topjohnwu.magisk"): ["package:/data/app/com.topjohnwu.magisk-1/base.apk"],
        })
        registry = ShellPackageRegistry(invoker)
        assert registry.lookup("com.topjohnwu.magisk") == "/data/app/com.topjohnwu.magisk-1/base.apk"

    def test_missing_package(self):
        registry = ShellPackageRegistry(FakeInvoker({("pm", "path", "a.b"): []}))
        with pytest.raises(PackageNotFoundError):
            registry.lookup("a.b")

    def test_unexpected_output_is_a_miss(self):
        registry = ShellPackageRegistry(FakeInvoker({("pm", "path", "a.b"): ["Error: something"]}))
        with pytest.raises(PackageNotFoundError):
            registry.lookup("a.b")

    def test_static_registry(self):
        registry = StaticPackageRegistry(["x.y"])
        assert registry.lookup("x.y") == "x.y"
        with pytest.raises(PackageNotFoundError):
            registry.lookup("z")


class TestPackageRegistryChecker:
    def test_nothing_installed(self, config, sink):
        checker = PackageRegistryChecker(make_host(), config, sink)
        assert not checker.detect_root_management_apps().positive
        assert not checker.detect_potentially_dangerous_apps().positive
        assert not checker.detect_root_cloaking_packages().positive

    def test_root_management_app(self, config, sink):
        host = make_host(installed=["com.topjohnwu.magisk"])
        result = PackageRegistryChecker(host, config, sink).detect_root_management_apps()

        assert result.positive
        assert result.evidence == ["com.topjohnwu.magisk"]
        assert sink.signals() == ["root_management_apps"]
        assert "com.topjohnwu.magisk ROOT management app detected!" in sink.records[0][1]

    def test_every_installed_match_logged(self, config, sink):
        host = make_host(installed=["eu.chainfire.supersu", "com.kingo.root"])
        result = PackageRegistryChecker(host, config, sink).detect_root_management_apps()
        assert result.evidence == ["eu.chainfire.supersu", "com.kingo.root"]

    def test_additional_packages_are_not_kept(self, config, sink):
        host = make_host(installed=["com.example.custom"])
        checker = PackageRegistryChecker(host, config, sink)

        assert checker.detect_potentially_dangerous_apps(["com.example.custom"]).positive
        assert not checker.detect_potentially_dangerous_apps().positive
        assert "com.example.custom" not in config.dangerous_apps_packages

    def test_cloaking_packages(self, config, sink):
        host = make_host(installed=["com.devadvance.rootcloak"])
        assert PackageRegistryChecker(host, config, sink).detect_root_cloaking_packages().positive

    def test_registry_failure_propagates(self, config, sink):
        class BrokenRegistry(StaticPackageRegistry):
            def lookup(self, package_name):
                raise RuntimeError("package service down")

        host = make_host()
        host.package_registry = BrokenRegistry()

        with pytest.raises(RuntimeError):
            PackageRegistryChecker(host, config, sink).detect_root_management_apps()

    @pytest.mark.parametrize("order", list(itertools.permutations(
        ["com.noshufou.android.su", "com.topjohnwu.magisk", "com.kingroot.kinguser"]
    )))
    def test_list_order_does_not_change_verdict(self, config, sink, order):
        host = make_host(installed=["com.topjohnwu.magisk"])
        result = PackageRegistryChecker(host, config, sink).is_any_package_from_list_installed(order)

        assert result.positive
        assert result.evidence == ["com.topjohnwu.magisk"]
        assert len(sink.records) == 1
