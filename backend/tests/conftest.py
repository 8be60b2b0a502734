import os
import sys

# Add the parent directory (backend) to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
from fastapi.testclient import TestClient

from main import app
from starrez_fakes import FakeStarRez

@pytest.fixture(scope="session")
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fake_starrez():
    return FakeStarRez(
        tables={
            "Student": [
                ("Student", {}),
                ("StudentID", {"type": "Integer", "required": "True", "size": "0", "allowNull": "False"}),
                ("NameFirst", {"type": "String", "required": "True", "size": "50", "allowNull": "False"}),
                ("Email", {"type": "String", "size": "100", "allowNull": "True"}),
                ("Student_PaymentTypeEnum", {"type": "Integer", "allowNull": "True"}),
            ],
            "Booking": [
                ("BookingID", {"type": "Integer", "required": "True"}),
                ("StudentID", {"type": "Integer"}),
                ("CheckInDate", {"type": "DateTime", "allowNull": "True"}),
                ("Booking_PaymentTypeEnum", {"type": "Integer", "allowNull": "False"}),
            ],
        },
        enums={
            "PaymentTypeEnum": [
                {"enumId": 0, "description": "Credit Card"},
                {"enumId": 1, "description": "Bank Transfer"},
            ],
        },
    )
