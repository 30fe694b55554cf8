import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture
def data_dir():
    return DATA_DIR


@pytest.fixture
def js_dir(tmp_path):
    """A scratch directory holding two small sources and one minified file."""
    (tmp_path / "one.js").write_text("// first\nvar one = 1;\n")
    (tmp_path / "two.js").write_text("function two(a, b) {\n    return a * b;\n}\n")
    (tmp_path / "old.min.js").write_text("var x=1;")
    (tmp_path / "notes.txt").write_text("not javascript")
    return tmp_path
