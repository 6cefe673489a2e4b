"""
test_flags — mode → flag resolution.

Tests verify invariant properties:
  - Each bake mode emits its table flags first, then codegen units,
    then the optional gold flag, then -Zno-verify.
  - Codegen units are min(cpu_count, 4) and never below 1.
  - Only slow mode omits cargo's --release.
  - Resolution is pure: same inputs, same ordered output.
"""
import pytest

from cargo_bake.core.flags import (
    orchestrator_flags_for,
    resolve_bake_flags,
    resolve_debug_flags,
)
from cargo_bake.core.host import codegen_units, detect_cpu_count, have_gold_linker
from cargo_bake.policy.modes import BakeMode, DebugMode
from cargo_bake.policy.profile import FlagProfile

GOLD = "-Clink-args=-fuse-ld=gold"


class TestBakeFlags:
    """Unit tests for resolve_bake_flags()."""

    def test_fast(self):
        assert resolve_bake_flags(BakeMode.FAST, 2, False) == [
            "-Copt-level=0",
            "-Ccodegen-units=2",
            "-Zno-verify",
        ]

    def test_normal(self):
        assert resolve_bake_flags(BakeMode.NORMAL, 4, False) == [
            "-Copt-level=1",
            "-Cinline-threshold=25",
            "-Cno-vectorize-loops",
            "-Ccodegen-units=4",
            "-Zno-verify",
        ]

    def test_slow(self):
        assert resolve_bake_flags(BakeMode.SLOW, 3, False) == [
            "-Copt-level=3",
            "-Cinline-threshold=275",
            "-Ccodegen-units=3",
            "-Zno-verify",
        ]

    def test_glacial_has_lto(self):
        flags = resolve_bake_flags(BakeMode.GLACIAL, 8, False)
        assert flags[:3] == ["-Copt-level=3", "-Cinline-threshold=275", "-Clto"]
        assert "-Clto" in flags

    def test_gold_flag_between_units_and_common(self):
        flags = resolve_bake_flags(BakeMode.FAST, 1, True)
        assert flags == ["-Copt-level=0", "-Ccodegen-units=1", GOLD, "-Zno-verify"]

    def test_no_gold_flag_when_absent(self):
        for mode in BakeMode:
            assert GOLD not in resolve_bake_flags(mode, 4, False)

    @pytest.mark.parametrize("mode", list(BakeMode))
    def test_pure(self, mode):
        """Calling twice with identical inputs yields identical ordered output."""
        assert resolve_bake_flags(mode, 6, True) == resolve_bake_flags(mode, 6, True)

    def test_result_is_a_fresh_list(self):
        first = resolve_bake_flags(BakeMode.FAST, 2, False)
        first.append("-Cjunk")
        assert "-Cjunk" not in resolve_bake_flags(BakeMode.FAST, 2, False)


class TestCodegenUnits:
    """Parallelism overlay: capped at 4, floored at 1."""

    @pytest.mark.parametrize("cpus,expected", [
        (None, 1),
        (0, 1),
        (1, 1),
        (2, 2),
        (4, 4),
        (5, 4),
        (64, 4),
    ])
    def test_cap_and_floor(self, cpus, expected):
        assert codegen_units(cpus) == expected

    def test_flag_value_for_single_cpu(self):
        flags = resolve_bake_flags(BakeMode.NORMAL, 1, False)
        assert "-Ccodegen-units=1" in flags
        assert "-Ccodegen-units=4" not in flags

    def test_flag_value_for_unknown_cpu_count(self):
        assert "-Ccodegen-units=1" in resolve_bake_flags(BakeMode.SLOW, None, False)

    def test_detect_cpu_count_falls_back_to_one(self, monkeypatch):
        monkeypatch.setattr("cargo_bake.core.host.os.cpu_count", lambda: None)
        assert detect_cpu_count() == 1

    def test_detect_cpu_count_positive(self):
        assert detect_cpu_count() >= 1


class TestGoldProbe:

    def test_present(self, tmp_path):
        ld = tmp_path / "ld.gold"
        ld.write_bytes(b"\x7fELF")
        assert have_gold_linker(str(ld)) is True

    def test_absent(self, tmp_path):
        assert have_gold_linker(str(tmp_path / "missing")) is False

    def test_directory_is_not_a_linker(self, tmp_path):
        assert have_gold_linker(str(tmp_path)) is False


class TestDebugFlags:

    def test_off(self):
        assert resolve_debug_flags(DebugMode.OFF) == ["-Cdebuginfo=0"]

    def test_on(self):
        assert resolve_debug_flags(DebugMode.ON) == ["-Cdebuginfo=2"]


class TestOrchestratorFlags:

    @pytest.mark.parametrize("mode", [BakeMode.FAST, BakeMode.NORMAL, BakeMode.GLACIAL])
    def test_release_for_all_but_slow(self, mode):
        assert orchestrator_flags_for(mode) == ["--release"]

    def test_slow_omits_release(self):
        assert orchestrator_flags_for(BakeMode.SLOW) == []


class TestCustomProfile:
    """Flag spellings are profile data; the overlay structure is fixed."""

    def test_retuned_normal_mode(self):
        base = FlagProfile.v0()
        tables = dict(base.bake_flags)
        tables[BakeMode.NORMAL] = ("-Copt-level=2",)
        profile = FlagProfile(
            profile_id="test",
            bake_flags=tables,
            debug_flags=base.debug_flags,
            codegen_units_cap=2,
            gold_linker_flag="-Clink-arg=-fuse-ld=gold",
            common_flags=(),
        )
        assert resolve_bake_flags(BakeMode.NORMAL, 16, True, profile) == [
            "-Copt-level=2",
            "-Ccodegen-units=2",
            "-Clink-arg=-fuse-ld=gold",
        ]
        # nothing exempt from --release in this profile
        assert orchestrator_flags_for(BakeMode.SLOW, profile) == ["--release"]
