"""
End-to-end tests for the command-line interface.
"""

import pytest

from nk2_builder import contact_row, file_bytes
from nk2_export.main import _create_argument_parser, main


class TestArgumentParser:

    def test_defaults(self):
        args = _create_argument_parser().parse_args(['-f', 'in.dat', '-o', 'out.csv'])
        assert args.output_format == 'csv'
        assert args.verbose is False
        assert args.max_string_length == 10_000
        assert args.max_binary_length == 2_000_000
        assert args.max_array_elements == 500_000

    def test_rejects_unknown_format(self):
        with pytest.raises(SystemExit) as exc_info:
            _create_argument_parser().parse_args(
                ['-f', 'in.dat', '-o', 'out', '--output-format', 'xml']
            )
        assert exc_info.value.code != 0

    def test_rejects_non_positive_limit(self):
        with pytest.raises(SystemExit):
            _create_argument_parser().parse_args(
                ['-f', 'in.dat', '-o', 'out', '--max-string-length', '0']
            )

    def test_requires_input_and_output(self):
        with pytest.raises(SystemExit):
            _create_argument_parser().parse_args([])


class TestMain:

    def test_exports_csv(self, nk2_file, tmp_path):
        output = tmp_path / "contacts.csv"
        main(['--file', str(nk2_file), '--output-file', str(output)])

        assert output.read_bytes() == (
            b'name,email,server_email,weight\r\n'
            b'Jane Doe,jane@example.com,/o=Org/cn=jane,5\r\n'
            b'Bob Smith,bob@example.com,bob@example.com,?\r\n'
        )

    def test_exports_vcard(self, nk2_file, tmp_path):
        output = tmp_path / "contacts.vcf"
        main(['-f', str(nk2_file), '-o', str(output), '--output-format', 'vcard', '-v'])

        text = output.read_text(encoding='utf-8')
        assert text.count('BEGIN:VCARD') == 2
        assert 'FN:Bob Smith' in text

    def test_verbose_traces_contacts(self, nk2_file, tmp_path, nk2_logs):
        main(['-f', str(nk2_file), '-o', str(tmp_path / "out.csv"), '--verbose'])
        assert "Contact | Jane Doe | jane@example.com | 5" in nk2_logs.text
        assert "Property Tag: 0x3001001f" in nk2_logs.text

    def test_log_file(self, nk2_file, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        main(['-f', str(nk2_file), '-o', str(tmp_path / "out.csv"), '--log-file', str(log_file)])
        assert "Failed to parse contact 1 (ghost)" in log_file.read_text(encoding='utf-8')

    def test_missing_input_exits_non_zero(self, tmp_path):
        output = tmp_path / "out.csv"
        with pytest.raises(SystemExit) as exc_info:
            main(['-f', str(tmp_path / "missing.dat"), '-o', str(output)])
        assert exc_info.value.code == 1
        assert not output.exists()

    def test_corrupt_input_writes_nothing(self, tmp_path):
        source = tmp_path / "corrupt.dat"
        source.write_bytes(file_bytes([contact_row()], row_count=4))
        output = tmp_path / "out.csv"

        with pytest.raises(SystemExit) as exc_info:
            main(['-f', str(source), '-o', str(output)])
        assert exc_info.value.code == 1
        assert not output.exists()

    def test_decoder_limits_from_command_line(self, nk2_file, tmp_path):
        output = tmp_path / "out.csv"
        with pytest.raises(SystemExit):
            main(['-f', str(nk2_file), '-o', str(output), '--max-string-length', '4'])
        assert not output.exists()

    def test_empty_file_writes_header_only(self, tmp_path):
        source = tmp_path / "empty.dat"
        source.write_bytes(file_bytes([]))
        output = tmp_path / "out.csv"
        main(['-f', str(source), '-o', str(output)])
        assert output.read_bytes() == b'name,email,server_email,weight\r\n'
