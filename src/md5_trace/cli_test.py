import hashlib
import logging

import pytest
from click.testing import CliRunner

from md5_trace.cli import cli

ABC_MD5 = "900150983cd24fb0d6963f7d28e17f72"


@pytest.fixture
def runner():
    yield CliRunner()
    # The CLI points the root logger at the runner's stderr.
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)


class TestDigestCommand:
    """Test suite for the digest command"""

    def test_text(self, runner):
        """Test the digest of a text argument"""
        result = runner.invoke(cli, ["digest", "abc"])
        assert result.exit_code == 0
        assert result.output.strip() == ABC_MD5

    def test_empty(self, runner):
        """Test no message hashes the empty string"""
        result = runner.invoke(cli, ["digest"])
        assert result.exit_code == 0
        assert result.output.strip() == "d41d8cd98f00b204e9800998ecf8427e"

    def test_undecodable_argument(self, runner):
        """Test a surrogate-escaped argument hashes as U+FFFD instead of crashing"""
        result = runner.invoke(cli, ["digest", "\udcff"])
        assert result.exit_code == 0
        assert result.output.strip() == hashlib.md5(b"\xef\xbf\xbd").hexdigest()

    def test_hex(self, runner):
        """Test hex mode"""
        result = runner.invoke(cli, ["digest", "--mode", "hex", "61 62 63"])
        assert result.exit_code == 0
        assert result.output.strip() == ABC_MD5

    def test_invalid_hex(self, runner):
        """Test bad hex is a usage error carrying the normalizer message"""
        result = runner.invoke(cli, ["digest", "-m", "hex", "zz"])
        assert result.exit_code == 2
        assert "Hex input can only contain 0-9 and a-f." in result.output

    def test_file(self, runner, tmp_path):
        """Test reading the message from a file"""
        path = tmp_path / "message.txt"
        path.write_bytes(b"abc")
        result = runner.invoke(cli, ["digest", "--file", str(path)])
        assert result.exit_code == 0
        assert result.output.strip() == ABC_MD5

    def test_hex_file(self, runner, tmp_path):
        """Test hex digits read from a file"""
        path = tmp_path / "message.hex"
        path.write_text("61\n62\n63\n")
        result = runner.invoke(cli, ["digest", "-m", "hex", "-f", str(path)])
        assert result.exit_code == 0
        assert result.output.strip() == ABC_MD5

    def test_message_and_file(self, runner, tmp_path):
        """Test MESSAGE and --file are mutually exclusive"""
        path = tmp_path / "message.txt"
        path.write_bytes(b"abc")
        result = runner.invoke(cli, ["digest", "abc", "--file", str(path)])
        assert result.exit_code == 2

    def test_mode_from_environment(self, runner):
        """Test options can be set through MD5_TRACE_* variables"""
        result = runner.invoke(cli, ["digest", "616263"], env={"MD5_TRACE_DIGEST_MODE": "hex"})
        assert result.exit_code == 0
        assert result.output.strip() == ABC_MD5

    def test_debug_logging(self, runner):
        """Test debug logging reports the built trace"""
        result = runner.invoke(cli, ["--log-level", "debug", "digest", "abc"])
        assert result.exit_code == 0
        assert "trace built" in result.output


class TestShowCommand:
    """Test suite for the show command"""

    def test_first_step(self, runner):
        """Test the default step is the preprocess event"""
        result = runner.invoke(cli, ["show", "abc"])
        assert result.exit_code == 0
        assert "Preprocess input" in result.output

    def test_last_step(self, runner):
        """Test steps past the end clamp to the final digest"""
        result = runner.invoke(cli, ["show", "abc", "--step", "9999"])
        assert result.exit_code == 0
        assert ABC_MD5 in result.output


class TestRoundsCommand:
    """Test suite for the rounds command"""

    def test_chunk(self, runner):
        """Test the round table renders"""
        result = runner.invoke(cli, ["rounds", "abc", "--chunk", "0"])
        assert result.exit_code == 0
        assert "Chunk 1 / 1" in result.output

    def test_chunk_out_of_range(self, runner):
        """Test chunk indexes are validated against the trace"""
        result = runner.invoke(cli, ["rounds", "abc", "--chunk", "1"])
        assert result.exit_code == 2


class TestConstantsCommand:
    """Test suite for the constants command"""

    def test_constants(self, runner):
        """Test the tables are printed"""
        result = runner.invoke(cli, ["constants"])
        assert result.exit_code == 0
        assert "0xd76aa478" in result.output
        assert "0x67452301" in result.output
