"""
Tests for the CSV and vCard writers.
"""

import pytest
import vobject

from nk2_export.contact_parser import Contact
from nk2_export.contact_writer import OutputFormat, write_contacts
from nk2_export.csv_exporter import export_contacts_to_csv
from nk2_export.vcard_writer import write_vcard_file


@pytest.fixture
def contacts():
    return [
        Contact('Jane Doe', 'jane@example.com', '/o=Org/cn=jane', 5),
        Contact('Bob', 'bob@example.com', 'bob@example.com', None),
    ]


class TestCsvExport:
    """CSV layout: fixed header, CRLF, minimal quoting."""

    def test_contact_without_weight(self, tmp_path):
        path = tmp_path / "out.csv"
        export_contacts_to_csv([Contact('Bob', 'bob@example.com', 'bob@example.com')], path)
        assert path.read_bytes() == (
            b'name,email,server_email,weight\r\n'
            b'Bob,bob@example.com,bob@example.com,?\r\n'
        )

    def test_weight_is_decimal(self, tmp_path, contacts):
        path = tmp_path / "out.csv"
        export_contacts_to_csv(contacts, path)
        lines = path.read_bytes().split(b'\r\n')
        assert lines[1] == b'Jane Doe,jane@example.com,/o=Org/cn=jane,5'

    def test_special_characters_are_quoted(self, tmp_path):
        path = tmp_path / "out.csv"
        export_contacts_to_csv([Contact('Doe, "JD" Jane', 'j@example.com', 'j@example.com', -1)], path)
        lines = path.read_bytes().split(b'\r\n')
        assert lines[1] == b'"Doe, ""JD"" Jane",j@example.com,j@example.com,-1'

    def test_empty_list_writes_header(self, tmp_path):
        path = tmp_path / "out.csv"
        export_contacts_to_csv([], path)
        assert path.read_bytes() == b'name,email,server_email,weight\r\n'

    def test_utf8_output(self, tmp_path):
        path = tmp_path / "out.csv"
        export_contacts_to_csv([Contact('Jörg', 'j@example.com', 'j@example.com')], path)
        assert 'Jörg' in path.read_text(encoding='utf-8')

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "out.csv"
        export_contacts_to_csv([], path)
        assert path.exists()


class TestVcardWriter:
    """One card per contact with a formatted name and one email."""

    def test_cards_round_trip_through_vobject(self, tmp_path, contacts):
        path = tmp_path / "out.vcf"
        assert write_vcard_file(contacts, path) == 2

        cards = list(vobject.readComponents(path.read_text(encoding='utf-8')))
        assert [card.fn.value for card in cards] == ['Jane Doe', 'Bob']
        assert [card.email.value for card in cards] == ['jane@example.com', 'bob@example.com']
        assert all(len(card.contents['email']) == 1 for card in cards)

    def test_invalid_email_is_skipped(self, tmp_path, nk2_logs):
        path = tmp_path / "out.vcf"
        skipped = Contact('Exchange User', '/o=Org/cn=user', '/o=Org/cn=user')
        written = write_vcard_file([skipped, Contact('Bob', 'bob@example.com', 'bob@example.com')], path)

        assert written == 1
        assert "Failed to create vcard for contact Exchange User" in nk2_logs.text
        cards = list(vobject.readComponents(path.read_text(encoding='utf-8')))
        assert [card.fn.value for card in cards] == ['Bob']

    def test_empty_name_is_skipped(self, tmp_path):
        path = tmp_path / "out.vcf"
        assert write_vcard_file([Contact('  ', 'a@example.com', 'a@example.com')], path) == 0
        assert path.read_text(encoding='utf-8') == ''

    def test_name_is_split_for_structured_field(self, tmp_path):
        path = tmp_path / "out.vcf"
        write_vcard_file([Contact('Jane Q Doe', 'jane@example.com', 'jane@example.com')], path)
        card = next(vobject.readComponents(path.read_text(encoding='utf-8')))
        assert card.n.value.family == 'Doe'
        assert card.n.value.given == 'Jane Q'


class TestWriteContacts:
    """Output format dispatch."""

    def test_csv(self, tmp_path, contacts):
        path = tmp_path / "out.csv"
        assert write_contacts(OutputFormat.CSV, contacts, path) == 2
        assert path.read_bytes().startswith(b'name,email,server_email,weight\r\n')

    def test_vcard_by_name(self, tmp_path, contacts):
        path = tmp_path / "out.vcf"
        assert write_contacts('vcard', contacts, path) == 2
        assert 'BEGIN:VCARD' in path.read_text(encoding='utf-8')

    def test_unknown_format(self, tmp_path, contacts):
        with pytest.raises(ValueError):
            write_contacts('xml', contacts, tmp_path / "out.xml")
