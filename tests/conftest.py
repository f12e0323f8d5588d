import pytest
import sys
from datetime import date, datetime
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import marks_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from marks_toolkit.core.models import Student, TestConfig
from marks_toolkit.store import InMemoryMarkStore


FIXED_NOW = datetime(2025, 3, 14, 9, 30, 0)


# Common test fixtures
@pytest.fixture
def fixed_clock():
    """Clock returning a constant timestamp."""
    return lambda: FIXED_NOW


@pytest.fixture
def cycle_test():
    """Cycle test marked out of 50, converted to 15."""
    return TestConfig(
        id="T1",
        max_raw_score=50,
        max_converted_score=15,
        name="Cycle Test 1",
        subject_name="Data Structures",
        subject_code="21CSC201J",
        test_date=date(2025, 3, 10),
    )


@pytest.fixture
def students():
    """Three CSE-A students and one CSE-B student."""
    return [
        Student("S1", "RA001", "Asha Kumar", "CSE-A"),
        Student("S2", "RA002", "Bala Murugan", "CSE-A"),
        Student("S3", "RA003", "Chitra Devi", "CSE-A"),
        Student("S4", "RB001", "Dinesh Raj", "CSE-B"),
    ]


@pytest.fixture
def store(students, cycle_test, fixed_clock):
    """In-memory store seeded with the students and the cycle test."""
    return InMemoryMarkStore(students=students, tests=[cycle_test], clock=fixed_clock)


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple logo image."""
    img = Image.new("RGB", (200, 200), color="navy")
    img_path = tmp_path / "logo.png"
    img.save(img_path)
    return img_path
