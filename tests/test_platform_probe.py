import pytest

from ctraits import FixedProbe, LibcUsableSizeProbe, NullProbe, default_probe
from ctraits.platform_detect import get_current_platform, parse_triple


@pytest.mark.parametrize("triple,os,abi,query", [
    ("x86_64-pc-linux-gnu", "linux", "gnu", ((None,), "malloc_usable_size")),
    ("aarch64-unknown-linux-musl", "linux", "musl", ((None,), "malloc_usable_size")),
    ("arm64-apple-darwin25.0.0", "darwin", "", ((None,), "malloc_size")),
    ("x86_64-pc-windows-msvc", "windows", "msvc", (("ucrtbase", "msvcrt"), "_msize")),
    ("riscv64-unknown-none-elf", "none", "elf", ((), None)),
])
def test_parse_triple(triple, os, abi, query):
    platform = parse_triple(triple)
    assert platform.os == os
    assert platform.abi == abi
    assert platform.usable_size_query == query


def test_darwin_version_is_dropped_from_triple():
    assert parse_triple("arm64-apple-darwin25.0.0").triple == "arm64-apple-darwin"


def test_current_platform_has_a_triple():
    platform = get_current_platform()
    assert platform.arch
    assert platform.triple.startswith(platform.arch)


def test_null_probe_never_reports_an_allocation():
    assert NullProbe().usable_size(0x1000) == 0


def test_fixed_probe_answers_known_addresses_only():
    probe = FixedProbe({0x1000: 48})
    assert probe.usable_size(0x1000) == 48
    assert probe.usable_size(0x2000) == 0


def test_libc_probe_without_query_reads_zero():
    probe = LibcUsableSizeProbe(parse_triple("riscv64-unknown-none-elf"))
    assert not probe.available
    assert probe.usable_size(0x1000) == 0


def test_libc_probe_ignores_null_address():
    assert default_probe().usable_size(0) == 0


def test_default_probe_is_shared():
    assert default_probe() is default_probe()


class _FakeQuery:
    def __call__(self, address):
        return 24


def test_windows_prefers_ucrt_then_falls_back_to_msvcrt(monkeypatch):
    opened = []

    def fake_cdll(name):
        opened.append(name)
        if name == "ucrtbase":
            raise OSError("ucrtbase not found")
        return type("Library", (), {"_msize": _FakeQuery()})()

    monkeypatch.setattr("ctraits.probe.ctypes.CDLL", fake_cdll)
    probe = LibcUsableSizeProbe(parse_triple("x86_64-pc-windows-msvc"))

    assert opened == ["ucrtbase", "msvcrt"]
    assert probe.library == "msvcrt"
    assert probe.available
    assert probe.usable_size(0x1000) == 24


def test_windows_binds_ucrt_when_present(monkeypatch):
    opened = []

    def fake_cdll(name):
        opened.append(name)
        return type("Library", (), {"_msize": _FakeQuery()})()

    monkeypatch.setattr("ctraits.probe.ctypes.CDLL", fake_cdll)
    probe = LibcUsableSizeProbe(parse_triple("x86_64-pc-windows-msvc"))

    assert opened == ["ucrtbase"]
    assert probe.library == "ucrtbase"
