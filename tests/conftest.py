"""Pytest configuration and shared fixtures for update-reporter tests."""

import subprocess

import pytest

ZYPPER_XML = """<?xml version='1.0'?>
<stream>
<message type="info">Loading repository data...</message>
<message type="info">Reading installed packages...</message>
<update-status version="0.6">
<update-list>
<update kind="package" name="curl" edition="8.0.1-150400.5.41.1" arch="x86_64" edition-old="8.0.1-150400.5.38.1">
<summary>A Tool for Transferring Data from URLs</summary>
<description>A tool for transferring data from URLs.</description>
<license/>
<source url="http://download.opensuse.org/update/leap/15.5/sle" alias="repo-sle-update"/>
</update>
<update kind="package" name="libopenssl3" edition="3.0.8-150500.5.14.1" arch="x86_64" edition-old="3.0.8-150500.5.8.1">
<summary>Secure Sockets and Transport Layer Security</summary>
<source url="http://download.opensuse.org/update/leap/15.5/sle" alias="repo-sle-update"/>
</update>
<update kind="package" name="tzdata" edition="2024a-150000.75.28.1" arch="noarch" edition-old="2023c-150000.75.23.1">
<summary>Time Zone Descriptions</summary>
</update>
</update-list>
</update-status>
</stream>
"""

EMPTY_ZYPPER_XML = """<?xml version='1.0'?>
<stream>
<update-status version="0.6">
<update-list>
</update-list>
</update-status>
</stream>
"""

APT_OUTPUT = """Listing...
curl/jammy-updates 7.81.0-1ubuntu1.16 amd64 [upgradable from: 7.81.0-1ubuntu1.15]
tzdata/jammy-updates 2024a-0ubuntu0.22.04 all [upgradable from: 2023c-0ubuntu0.22.04.2]
"""

LEAP_OS_RELEASE = """NAME="openSUSE Leap"
VERSION="15.5"
ID="opensuse-leap"
ID_LIKE="suse opensuse"
VERSION_ID="15.5"
PRETTY_NAME="openSUSE Leap 15.5"
"""

UBUNTU_OS_RELEASE = """PRETTY_NAME="Ubuntu 22.04.4 LTS"
NAME="Ubuntu"
VERSION_ID="22.04"
VERSION="22.04.4 LTS (Jammy Jellyfish)"
ID=ubuntu
ID_LIKE=debian
"""

FEDORA_OS_RELEASE = """NAME="Fedora Linux"
VERSION="39 (Workstation Edition)"
ID=fedora
VERSION_ID=39
"""


class FakeSystemInfo:
    """SystemInfo returning fixed host descriptors."""

    def __init__(self, fqdn="build01.example.com", os_family="linux", platform="x86_64"):
        self._fqdn = fqdn
        self._os_family = os_family
        self._platform = platform

    def fqdn(self) -> str:
        return self._fqdn

    def os_family(self) -> str:
        return self._os_family

    def platform(self) -> str:
        return self._platform


@pytest.fixture
def system_info():
    """Fixed host descriptors."""
    return FakeSystemInfo()


@pytest.fixture
def leap_release(tmp_path):
    """os-release file for openSUSE Leap 15.5."""
    path = tmp_path / "os-release"
    path.write_text(LEAP_OS_RELEASE)
    return path


@pytest.fixture
def ubuntu_release(tmp_path):
    """os-release file for Ubuntu 22.04."""
    path = tmp_path / "os-release"
    path.write_text(UBUNTU_OS_RELEASE)
    return path


@pytest.fixture
def fedora_release(tmp_path):
    """os-release file for an unsupported distribution."""
    path = tmp_path / "os-release"
    path.write_text(FEDORA_OS_RELEASE)
    return path


@pytest.fixture
def fake_subprocess(monkeypatch):
    """
    Replace subprocess.run with a stub returning canned output.

    Returns a function taking (stdout, returncode, stderr) that installs
    the stub; the list of recorded argv lists is returned from each call.
    """

    def install(stdout="", returncode=0, stderr=""):
        calls = []

        def mock_run(cmd, *args, **kwargs):
            calls.append(list(cmd))
            return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)

        monkeypatch.setattr(subprocess, "run", mock_run)
        return calls

    return install
