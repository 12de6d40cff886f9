"""
Shared test configuration and fixtures for the Tanita Viewer tests.
Provides builders for on-disk Tanita export folders.
"""

import pytest

from tanita_viewer.example_data import generate_example_folder


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests that read folders from disk"
    )


# =============================================================================
# RECORD LINES
# =============================================================================

PROFILE_LINE = (
    '"MO","BC-601","DB","14/06/1991","GE","1","Hm","175.0",'
    '"AL","2","Bt","0","CS","AB"'
)

DATA_LINE = (
    '{0,16,~0,1,MO,"BC-601",DT,"14/06/2019",Ti,"08:18:58",Bt,0,GE,1,'
    'AG,28,Hm,175.0,AL,2,Wk,78.4,MI,25.6,FW,19.8,Fr,16.1,Fl,16.9,'
    'FR,18.3,FL,18.7,FT,21.4,mW,59.8,IF,7,rD,2310,CS,4F'
)


@pytest.fixture
def profile_line():
    """Fully quoted profile line for a male user born 14/06/1991."""
    return PROFILE_LINE


@pytest.fixture
def data_line():
    """Measurement line with visceral fat but no metabolic age."""
    return DATA_LINE


# =============================================================================
# FOLDER FIXTURES
# =============================================================================

@pytest.fixture
def make_tanita_folder(tmp_path):
    """Factory building a ``SYSTEM`` / ``DATA`` folder under tmp_path.

    Call with ``profiles={file_name: text}`` and ``data={file_name: text}``.
    Either subfolder is left out entirely when its argument is ``None``.
    """
    def _make(profiles=None, data=None, name="export"):
        root = tmp_path / name
        root.mkdir()
        for folder, files in (("SYSTEM", profiles), ("DATA", data)):
            if files is None:
                continue
            (root / folder).mkdir()
            for file_name, text in files.items():
                (root / folder / file_name).write_text(text, newline="")
        return root

    return _make


@pytest.fixture
def example_folder(tmp_path):
    """The generated two-user example export."""
    root = tmp_path / "example"
    generate_example_folder(str(root))
    return root
