import asyncio
import os
import tempfile

# the application reads its settings at import time
_db_dir = tempfile.mkdtemp(prefix="lppm-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from lppm.core.roles import Role
from lppm.core.security import create_access_token, get_password_hash
from lppm.db.database import async_session, drop_db, init_db
from lppm.main import app
from lppm.models.author import Author, StudyProgram
from lppm.models.user import User
from lppm.services.cms_service import CategoryService


def run(coro):
    return asyncio.run(coro)


async def _add(instance):
    async with async_session() as session:
        session.add(instance)
        await session.commit()
        return instance.id


@pytest.fixture(autouse=True)
def database():
    run(drop_db())
    run(init_db())
    yield


@pytest.fixture
def client():
    return TestClient(app)


def make_user(role: Role = Role.SUPERADMIN, email: str = None, password: str = "secret123") -> int:
    email = email or f"{role.value}@lppm.ac.id"
    return run(_add(User(
        name=f"{role.value.title()} User",
        email=email,
        password_hash=get_password_hash(password),
        role=role.value,
    )))


def auth_headers(user_id: int, role: Role) -> dict:
    token = create_access_token({"sub": str(user_id), "role": role.value})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def superadmin_id():
    return make_user(Role.SUPERADMIN)


@pytest.fixture
def admin_id():
    return make_user(Role.ADMIN)


@pytest.fixture
def superadmin(superadmin_id):
    return auth_headers(superadmin_id, Role.SUPERADMIN)


@pytest.fixture
def admin(admin_id):
    return auth_headers(admin_id, Role.ADMIN)


def make_study_program(name: str = "Teknik Informatika") -> int:
    return run(_add(StudyProgram(name=name)))


def make_author(nidn: str, name: str, study_program_id: int = None) -> int:
    return run(_add(Author(
        sinta_id=f"S{nidn}",
        nidn=nidn,
        name=name,
        affiliation="Universitas Contoh",
        study_program_id=study_program_id,
        last_education="S2",
        functional_position="Lektor",
    )))


@pytest.fixture
def categories():
    async def seed():
        async with async_session() as session:
            await CategoryService.seed_defaults(session)

    run(seed())


def link_count(table, record_column: str, record_id: int) -> int:
    """Rows of an author join table pointing at one record."""
    async def count():
        async with async_session() as session:
            query = select(func.count()).select_from(table).where(table.c[record_column] == record_id)
            return (await session.execute(query)).scalar_one()

    return run(count())
