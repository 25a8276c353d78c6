"""Tests for OS identity detection."""

import pytest

from update_reporter.core.errors import ConfigurationError
from update_reporter.core.osrelease import OsIdentity, parse_os_release, read_os_release


class TestParseOsRelease:
    """Test parsing of os-release text."""

    def test_quoted_values(self):
        """Test quotes are stripped from ID and VERSION_ID."""
        identity = parse_os_release('ID="opensuse-leap"\nVERSION_ID="15.5"\n')

        assert identity == OsIdentity(id="opensuse-leap", version="15.5")

    def test_unquoted_values(self):
        """Test unquoted values are taken verbatim."""
        identity = parse_os_release("ID=ubuntu\nVERSION_ID=22.04\n")

        assert identity.id == "ubuntu"
        assert identity.version == "22.04"

    def test_irrelevant_lines_ignored(self):
        """Test ID_LIKE, VERSION and friends do not leak into the identity."""
        content = (
            'NAME="openSUSE Leap"\n'
            'ID_LIKE="suse opensuse"\n'
            'VERSION="15.5"\n'
            'ID="opensuse-leap"\n'
            'VERSION_ID="15.5"\n'
            "# comment\n"
        )
        identity = parse_os_release(content)

        assert identity.id == "opensuse-leap"
        assert identity.version == "15.5"

    def test_missing_keys_yield_empty_strings(self):
        """Test missing keys are not an error at this stage."""
        identity = parse_os_release('NAME="Something"\n')

        assert identity.id == ""
        assert identity.version == ""

    def test_last_assignment_wins(self):
        """Test a repeated key takes the value of its last line."""
        identity = parse_os_release("ID=first\nID=second\nVERSION_ID=1\nVERSION_ID=2\n")

        assert identity.id == "second"
        assert identity.version == "2"

    def test_value_containing_equals(self):
        """Test only the first '=' separates key from value."""
        identity = parse_os_release('ID="a=b"\n')

        assert identity.id == "a=b"

    def test_identity_is_frozen(self):
        """Test identity cannot be mutated after parsing."""
        identity = parse_os_release("ID=ubuntu\n")

        with pytest.raises(Exception):
            identity.id = "fedora"


class TestReadOsRelease:
    """Test reading os-release from disk."""

    def test_read_file(self, leap_release):
        """Test reading a real descriptor file."""
        identity = read_os_release(leap_release)

        assert identity.id == "opensuse-leap"
        assert identity.version == "15.5"

    def test_accepts_string_path(self, ubuntu_release):
        """Test a str path is accepted."""
        identity = read_os_release(str(ubuntu_release))

        assert identity.id == "ubuntu"
        assert identity.version == "22.04"

    def test_missing_file(self, tmp_path):
        """Test a missing descriptor is a configuration error."""
        missing = tmp_path / "nope"

        with pytest.raises(ConfigurationError, match="nope"):
            read_os_release(missing)

    def test_directory_instead_of_file(self, tmp_path):
        """Test an unreadable path (a directory) is a configuration error."""
        with pytest.raises(ConfigurationError):
            read_os_release(tmp_path)

    def test_invalid_utf8(self, tmp_path):
        """Test undecodable content is a configuration error."""
        path = tmp_path / "os-release"
        path.write_bytes(b"ID=\xff\xfe\n")

        with pytest.raises(ConfigurationError):
            read_os_release(path)
