"""Tests for file-backed hosts and threshold storage."""

from pathlib import Path

import pytest

from marshall.config.store import (
    FileHostRegistry,
    FileThresholdStore,
    describe_config,
    parse_threshold,
)
from marshall.errors import InvalidThresholdValue
from marshall.protocols import HostRegistry, ThresholdStore


class TestParseThreshold:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("0", 0), ("7", 7), ("80", 80), ("100", 100), ("80%", 80), (" 55 \n", 55), (42, 42)],
    )
    def test_valid(self, value, expected: int) -> None:
        assert parse_threshold(value) == expected

    @pytest.mark.parametrize(
        "value", ["", "101", "-1", "abc", "%80", "80%%", "8.5", "007", 101, -5, True]
    )
    def test_invalid(self, value) -> None:
        with pytest.raises(InvalidThresholdValue):
            parse_threshold(value)


class TestFileHostRegistry:
    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert FileHostRegistry(tmp_path).list() == []

    def test_list_trims_and_deduplicates(self, tmp_path: Path) -> None:
        (tmp_path / "hosts").write_text("10.0.0.1\n  10.0.0.2 \n\n10.0.0.1\nweb1\n")

        assert FileHostRegistry(tmp_path).list() == ["10.0.0.1", "10.0.0.2", "web1"]

    def test_add_creates_directory(self, tmp_path: Path) -> None:
        config_dir = tmp_path / "marshall"
        registry = FileHostRegistry(config_dir)

        assert registry.add("10.0.0.1")
        assert registry.add("10.0.0.2")
        assert not registry.add("10.0.0.1")
        assert (config_dir / "hosts").read_text() == "10.0.0.1\n10.0.0.2\n"

    def test_add_rejects_invalid_host(self, tmp_path: Path) -> None:
        registry = FileHostRegistry(tmp_path)

        with pytest.raises(ValueError):
            registry.add("   ")
        with pytest.raises(ValueError):
            registry.add("web1 && reboot")
        assert registry.list() == []

    def test_remove(self, tmp_path: Path) -> None:
        registry = FileHostRegistry(tmp_path)
        registry.add("h1")
        registry.add("h2")

        assert registry.remove("h1")
        assert not registry.remove("h1")
        assert registry.list() == ["h2"]

    def test_removing_last_host_deletes_file(self, tmp_path: Path) -> None:
        registry = FileHostRegistry(tmp_path)
        registry.add("h1")

        assert registry.remove("h1")
        assert not registry.path.exists()

    def test_implements_protocol(self, tmp_path: Path) -> None:
        assert isinstance(FileHostRegistry(tmp_path), HostRegistry)


class TestFileThresholdStore:
    def test_unset_is_none(self, tmp_path: Path) -> None:
        assert FileThresholdStore(tmp_path).get() is None

    def test_set_and_get(self, tmp_path: Path) -> None:
        store = FileThresholdStore(tmp_path / "marshall")

        assert store.set("75%") == 75
        assert store.get() == 75
        assert store.path.read_text() == "75\n"

    def test_zero_is_a_real_value(self, tmp_path: Path) -> None:
        store = FileThresholdStore(tmp_path)
        store.set(0)

        assert store.get() == 0

    def test_invalid_set_keeps_previous(self, tmp_path: Path) -> None:
        store = FileThresholdStore(tmp_path)
        store.set(50)

        with pytest.raises(InvalidThresholdValue):
            store.set("150")
        assert store.get() == 50

    def test_corrupt_file_raises(self, tmp_path: Path) -> None:
        (tmp_path / "threshold").write_text("-1\n")

        with pytest.raises(InvalidThresholdValue):
            FileThresholdStore(tmp_path).get()

    def test_clear(self, tmp_path: Path) -> None:
        store = FileThresholdStore(tmp_path)
        store.set(10)

        assert store.clear()
        assert store.get() is None
        assert not store.clear()

    def test_implements_protocol(self, tmp_path: Path) -> None:
        assert isinstance(FileThresholdStore(tmp_path), ThresholdStore)


class TestDescribeConfig:
    def test_nothing_configured(self, tmp_path: Path) -> None:
        text = describe_config(FileHostRegistry(tmp_path), FileThresholdStore(tmp_path))

        assert text == "No configuration files detected"

    def test_hosts_and_threshold(self, tmp_path: Path) -> None:
        registry = FileHostRegistry(tmp_path)
        store = FileThresholdStore(tmp_path)
        registry.add("h1")
        registry.add("h2")
        store.set(80)

        assert describe_config(registry, store) == (
            "MARSHALLED HOSTS:\nh1\nh2\n\nCURRENT THRESHOLD:\n80"
        )

    def test_threshold_only(self, tmp_path: Path) -> None:
        store = FileThresholdStore(tmp_path)
        store.set(5)

        assert describe_config(FileHostRegistry(tmp_path), store) == "CURRENT THRESHOLD:\n5"
