import logging

import pytest

from nk2_builder import contact_row, file_bytes


@pytest.fixture
def nk2_logs(caplog):
    """Capture everything the application logger emits."""
    caplog.set_level(logging.DEBUG, logger="nk2_export")
    return caplog


@pytest.fixture
def nk2_file(tmp_path):
    """A small autocomplete file with two good rows and one without a name."""
    path = tmp_path / "Stream_Autocomplete.dat"
    path.write_bytes(file_bytes([
        contact_row('Jane Doe', '/o=Org/cn=jane', smtp='jane@example.com', weight=5),
        contact_row(None, 'ghost@example.com', nickname='ghost'),
        contact_row("'Bob Smith'", 'bob@example.com'),
    ]))
    return path
