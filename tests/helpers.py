"""
Shared test data helpers
"""
import uuid
from faker import Faker

fake = Faker()

TEST_PASSWORD = 'testpassword123'


def fake_email() -> str:
    return f"{fake.user_name()}.{uuid.uuid4().hex[:6]}@gmail.com"


def fake_member() -> dict:
    return {
        'name': fake.name(),
        'usn': f"1SN{fake.random_number(digits=5, fix_len=True)}",
        'phone': f"9{fake.random_number(digits=9, fix_len=True)}",
    }


def bearer(token: str) -> dict:
    return {'Authorization': f'Bearer {token}'}
