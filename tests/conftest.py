from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from pkgreader.config import set_config  # noqa: E402
from pkgreader.constants import ARCH_LIST_ENV, FORCED_MASK_ENV, MAX_LINE_LEN_ENV  # noqa: E402

STATUS_TEXT = """\
Package: busybox
Version: 1.36.1-r0
Depends: libc6 (>= 2.35), libxcrypt
Status: install ok installed
Architecture: armv7a
Conffiles:
 /etc/busybox.links.nosuid 0c2c5bbd4bbf4b5a1e3a4f5c7d1f2e3a
 /etc/syslog.conf 3b2cf3e6d1e1a4c0b2f6c2fbb1c7e0a1
Installed-Time: 1700000000
Auto-Installed: yes

Package: zlib
Version: 1:1.3-r0
Description: compression library
 zlib is a general purpose data compression library.
 It is used by many programs.

Package: base-files
Version: 3.0.14-r89
Status: install hold,user installed
Architecture: all
Essential: yes
Installed-Size: 1024

"""

PACKAGES_TEXT = """\
Package: libfoo1
Version: 2:1.4.2-3
Architecture: amd64
Maintainer: Foo Team <foo@example.org>
Installed-Size: 120
Depends: libc6 (>= 2.34), zlib1g (>= 1:1.2.0)
Pre-Depends: init-system-helpers (>= 1.54~)
Recommends: foo-data
Suggests: foo-doc
Conflicts: libfoo0
Replaces: libfoo0
Provides: libfoo
Section: libs
Priority: optional
Filename: pool/main/f/foo/libfoo1_1.4.2-3_amd64.deb
Size: 45678
MD5sum: 5d41402abc4b2a76b9719d911017c592
SHA256sum: 2c26b46b68ffc68ff99b453c1d30413413422d706483bfa0f98a5e886266e7ae
Description: shared library for foo
 Foo does things.
 .
 This package contains the shared library.

Package: foo-data
Version: 1.4.2-3
Architecture: all
Source: foo
Tags: role::data
Description: data files for foo

"""


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    for name in (ARCH_LIST_ENV, FORCED_MASK_ENV, MAX_LINE_LEN_ENV):
        monkeypatch.delenv(name, raising=False)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def status_text() -> str:
    return STATUS_TEXT


@pytest.fixture
def packages_text() -> str:
    return PACKAGES_TEXT


@pytest.fixture
def status_file(tmp_path: Path) -> Path:
    path = tmp_path / "status"
    path.write_text(STATUS_TEXT, encoding="utf-8")
    return path
