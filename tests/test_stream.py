from __future__ import annotations

import gzip
import io
import logging
from pathlib import Path

import pytest
from debian import deb822

from pkgreader.config import ParserConfig, get_config, set_config
from pkgreader.errors import LineTooLongError, StreamError
from pkgreader.models.fields import FieldMask
from pkgreader.models.package import Package
from pkgreader.models.state import StateFlag, StateWant
from pkgreader.parsing.stream import (
    LineSource,
    ParseStatus,
    iter_packages,
    parse_control_text,
    parse_from_stream,
)


def test_status_file_records(status_text: str) -> None:
    busybox, zlib, base_files = parse_control_text(status_text)

    assert busybox.name == "busybox"
    assert busybox.full_version == "1.36.1-r0"
    assert busybox.depends == ["libc6 (>= 2.35)", "libxcrypt"]
    assert busybox.status == "install ok installed"
    assert [c.path for c in busybox.conffiles] == ["/etc/busybox.links.nosuid", "/etc/syslog.conf"]
    assert busybox.installed_time == 1700000000
    assert busybox.auto_installed is True

    assert zlib.epoch == 1
    assert zlib.version == "1.3"
    assert zlib.revision == "r0"

    assert base_files.state_want is StateWant.INSTALL
    assert base_files.state_flag == StateFlag.HOLD | StateFlag.USER
    assert base_files.essential is True
    assert base_files.installed_size == 1024


def test_consecutive_records_do_not_share_state(status_text: str) -> None:
    busybox, zlib, base_files = parse_control_text(status_text)

    assert busybox.description is None
    assert zlib.description == (
        "compression library\n"
        " zlib is a general purpose data compression library.\n"
        " It is used by many programs."
    )
    assert zlib.conffiles == []
    assert base_files.description is None
    assert base_files.depends == []


def test_record_ending_inside_description_does_not_leak() -> None:
    text = "Package: a\nDescription: first\n body of a\n\nPackage: b\n continued?\nSection: misc\n\n"
    first, second = parse_control_text(text)
    assert first.description == "first\n body of a"
    assert second.description is None
    assert second.section == "misc"


def test_driver_reports_record_then_empty() -> None:
    source = LineSource(io.StringIO("Package: a\nVersion: 1.0\n\n\n"))

    package = Package()
    assert parse_from_stream(package, source) is ParseStatus.RECORD
    assert package.name == "a"

    trailing = Package()
    assert parse_from_stream(trailing, source) is ParseStatus.EMPTY
    assert trailing.name is None


def test_blank_padding_between_and_around_records() -> None:
    text = "\n\nPackage: a\n\n\n\nPackage: b\n\n  \n"
    assert [p.name for p in parse_control_text(text)] == ["a", "b"]
    assert parse_control_text("") == []
    assert parse_control_text("\n \n\n") == []


def test_record_without_name_is_skipped() -> None:
    packages = parse_control_text("Version: 1.0\nSection: misc\n\nPackage: named\n\n")
    assert [p.name for p in packages] == ["named"]


def test_unterminated_last_record_keeps_description(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        (package,) = parse_control_text("Package: a\nDescription: summary\n body")
    assert package.description == "summary\n body"
    assert "missing newline" in caplog.text


def test_masked_parse_of_whole_file(packages_text: str) -> None:
    mask = FieldMask.PACKAGE | FieldMask.VERSION
    libfoo, foo_data = parse_control_text(packages_text, mask=mask)
    assert libfoo.full_version == "2:1.4.2-3"
    assert libfoo.depends == []
    assert libfoo.description is None
    assert libfoo.architecture is None
    assert foo_data.name == "foo-data"


def test_forced_mask_from_environment(monkeypatch: pytest.MonkeyPatch, packages_text: str) -> None:
    monkeypatch.setenv("PKGREADER_FORCED_MASK", "Description, Depends")
    set_config(None)
    assert get_config().forced_mask == FieldMask.DESCRIPTION | FieldMask.DEPENDS

    libfoo, _ = parse_control_text(packages_text)
    assert libfoo.description is None
    assert libfoo.depends == []
    assert libfoo.pre_depends == ["init-system-helpers (>= 1.54~)"]


def test_arch_list_from_environment(monkeypatch: pytest.MonkeyPatch, packages_text: str) -> None:
    monkeypatch.setenv("PKGREADER_ARCH_LIST", "all:1,amd64:5")
    set_config(None)
    libfoo, foo_data = parse_control_text(packages_text)
    assert libfoo.arch_priority == 5
    assert foo_data.arch_priority == 1


def test_invalid_environment_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PKGREADER_FORCED_MASK", "Bogus")
    set_config(None)
    with pytest.raises(ValueError):
        get_config()


def test_line_source_strips_newlines_and_counts() -> None:
    source = LineSource(io.StringIO("a\nb\n"), name="sample")
    assert list(source) == ["a", "b"]
    assert source.lineno == 2
    assert source.exhausted
    assert list(source) == []


def test_line_source_rejects_excessive_lines() -> None:
    source = LineSource(io.StringIO("Package: a\n" + "x" * 40 + "\n"), max_line_len=16)
    assert next(source) == "Package: a"
    with pytest.raises(LineTooLongError):
        next(source)
    assert source.exhausted


def test_excessive_line_is_a_stream_error(caplog: pytest.LogCaptureFixture) -> None:
    config = ParserConfig(max_line_len=16)
    text = "Package: a\n\nPackage: b\nDescription: " + "x" * 40 + "\n\n"

    package = Package()
    source = LineSource(io.StringIO(text), max_line_len=config.max_line_len)
    assert parse_from_stream(package, source, config=config) is ParseStatus.RECORD
    with caplog.at_level(logging.ERROR):
        assert parse_from_stream(Package(), source, config=config) is ParseStatus.ERROR
    assert "Excessively long line" in caplog.text

    names = []
    with pytest.raises(StreamError):
        for pkg in iter_packages(io.StringIO(text), config=config):
            names.append(pkg.name)
    assert names == ["a"]


def test_iter_packages_reads_plain_and_gzip_files(tmp_path: Path, packages_text: str) -> None:
    plain = tmp_path / "Packages"
    plain.write_text(packages_text, encoding="utf-8")
    compressed = tmp_path / "Packages.gz"
    with gzip.open(compressed, "wt", encoding="utf-8") as f:
        f.write(packages_text)

    assert [p.name for p in iter_packages(plain)] == ["libfoo1", "foo-data"]
    assert [p.name for p in iter_packages(str(compressed))] == ["libfoo1", "foo-data"]


def _lines(value: str) -> list[str]:
    return [line.strip() for line in value.splitlines()]


def test_agrees_with_python_debian(packages_text: str) -> None:
    ours = parse_control_text(packages_text)
    theirs = list(deb822.Packages.iter_paragraphs(packages_text, use_apt_pkg=False))
    assert len(ours) == len(theirs)

    for package, paragraph in zip(ours, theirs):
        assert package.name == paragraph["Package"]
        assert package.full_version == paragraph["Version"]
        assert package.architecture == paragraph["Architecture"]
        assert package.depends == [d.strip() for d in paragraph.get("Depends", "").split(",") if d.strip()]
        assert _lines(package.description) == _lines(paragraph["Description"])
        for field, attr in (("Section", "section"), ("Source", "source"), ("MD5sum", "md5sum")):
            assert getattr(package, attr) == paragraph.get(field)


def test_truncated_gzip_is_a_stream_error(
    tmp_path: Path, packages_text: str, caplog: pytest.LogCaptureFixture
) -> None:
    data = gzip.compress(packages_text.encode("utf-8"))
    truncated = tmp_path / "Packages.gz"
    truncated.write_bytes(data[: len(data) // 2])

    with caplog.at_level(logging.ERROR), pytest.raises(StreamError):
        list(iter_packages(truncated))
    assert "corrupt or truncated" in caplog.text


def test_corrupt_gzip_is_a_stream_error(tmp_path: Path, packages_text: str) -> None:
    data = bytearray(gzip.compress(packages_text.encode("utf-8")))
    data[10:40] = b"\xff" * 30
    corrupt = tmp_path / "Packages.gz"
    corrupt.write_bytes(bytes(data))

    with pytest.raises(StreamError):
        list(iter_packages(corrupt))
