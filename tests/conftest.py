# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory stand-in for the Supabase client (tables + auth) that the app
#   receives through FastAPI dependency overrides
# - Signed-in admin and canvasser fixtures
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("CAPTCHA_SECRET", "test-captcha-secret")
os.environ.setdefault("CONTACT_RATE_LIMIT", "1000/minute")
os.environ.setdefault("ROLE_LOOKUP_TIMEOUT_SEC", "2")

import re
import time
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient


# =============================================================================
# In-memory Supabase
# =============================================================================

class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


def _ilike(value, pattern) -> bool:
    if value is None:
        return False
    regex = ".*".join(re.escape(part) for part in pattern.split("%"))
    return re.fullmatch(regex, str(value), flags=re.IGNORECASE | re.DOTALL) is not None


def _comparable(value):
    if isinstance(value, bool) or value is None:
        return value
    return str(value) if not isinstance(value, (int, float)) else value


class FakeQuery:
    """Chainable query mirroring the parts of postgrest-py the services use."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self._op = "select"
        self._columns = "*"
        self._payload = None
        self._on_conflict = None
        self._filters = []
        self._order = []
        self._limit = None
        self._offset = 0
        self._single = None
        self._count = None

    # Operations

    def select(self, columns="*", count=None):
        self._op, self._columns, self._count = "select", columns, count
        return self

    def insert(self, payload):
        self._op, self._payload = "insert", payload
        return self

    def update(self, payload):
        self._op, self._payload = "update", payload
        return self

    def upsert(self, payload, on_conflict=None):
        self._op, self._payload, self._on_conflict = "upsert", payload, on_conflict
        return self

    def delete(self):
        self._op = "delete"
        return self

    # Filters

    def _add(self, fn):
        self._filters.append(fn)
        return self

    def eq(self, column, value):
        return self._add(lambda row: row.get(column) == value)

    def neq(self, column, value):
        return self._add(lambda row: row.get(column) != value)

    def gt(self, column, value):
        return self._add(lambda row: row.get(column) is not None and _comparable(row[column]) > _comparable(value))

    def gte(self, column, value):
        return self._add(lambda row: row.get(column) is not None and _comparable(row[column]) >= _comparable(value))

    def lt(self, column, value):
        return self._add(lambda row: row.get(column) is not None and _comparable(row[column]) < _comparable(value))

    def lte(self, column, value):
        return self._add(lambda row: row.get(column) is not None and _comparable(row[column]) <= _comparable(value))

    def in_(self, column, values):
        return self._add(lambda row: row.get(column) in list(values))

    def is_(self, column, value):
        if value in ("null", None):
            return self._add(lambda row: row.get(column) is None)
        return self._add(lambda row: row.get(column) == value)

    def ilike(self, column, pattern):
        return self._add(lambda row: _ilike(row.get(column), pattern))

    def or_(self, expression):
        clauses = []
        for clause in expression.split(","):
            column, op, value = clause.split(".", 2)
            clauses.append((column, op, value))

        def match(row):
            for column, op, value in clauses:
                if op == "ilike" and _ilike(row.get(column), value):
                    return True
                if op == "eq" and str(row.get(column)) == value:
                    return True
            return False
        return self._add(match)

    # Modifiers

    def order(self, column, desc=False, **kwargs):
        self._order.append((column, desc))
        return self

    def limit(self, count):
        self._limit = count
        return self

    def offset(self, count):
        self._offset = count
        return self

    def range(self, start, end):
        self._offset, self._limit = start, end - start + 1
        return self

    def single(self):
        self._single = "single"
        return self

    def maybe_single(self):
        self._single = "maybe"
        return self

    # Execution

    def _rows(self):
        return self.db.tables.setdefault(self.table_name, [])

    def _matching(self):
        return [row for row in self._rows() if all(f(row) for f in self._filters)]

    def _project(self, row):
        if self._columns.strip() == "*":
            return dict(row)
        columns = [c.strip() for c in self._columns.split(",")]
        return {c: row.get(c) for c in columns}

    def execute(self):
        if self.db.fail_tables.get(self.table_name):
            raise Exception(f"relation {self.table_name} unavailable")
        if self.db.delay_tables.get(self.table_name):
            time.sleep(self.db.delay_tables[self.table_name])
        self.db.calls.append((self.table_name, self._op))

        if self._op == "insert":
            payload = self._payload if isinstance(self._payload, list) else [self._payload]
            created = [self.db.new_row(self.table_name, item) for item in payload]
            return FakeResponse([dict(row) for row in created])

        if self._op == "upsert":
            keys = [k.strip() for k in (self._on_conflict or "id").split(",")]
            payload = self._payload if isinstance(self._payload, list) else [self._payload]
            saved = []
            for item in payload:
                existing = next(
                    (row for row in self._rows() if all(row.get(k) == item.get(k) for k in keys)),
                    None
                )
                if existing is not None:
                    existing.update(item)
                    saved.append(dict(existing))
                else:
                    saved.append(dict(self.db.new_row(self.table_name, item)))
            return FakeResponse(saved)

        if self._op == "update":
            matched = self._matching()
            for row in matched:
                row.update(self._payload)
            return FakeResponse([dict(row) for row in matched])

        if self._op == "delete":
            matched = self._matching()
            self.db.tables[self.table_name] = [row for row in self._rows() if row not in matched]
            return FakeResponse([dict(row) for row in matched])

        rows = self._matching()
        for column, desc in reversed(self._order):
            present = [row for row in rows if row.get(column) is not None]
            missing = [row for row in rows if row.get(column) is None]
            present.sort(key=lambda row: _comparable(row[column]), reverse=desc)
            rows = present + missing
        total = len(rows)
        rows = rows[self._offset:]
        if self._limit is not None:
            rows = rows[:self._limit]
        data = [self._project(row) for row in rows]

        if self._single == "maybe":
            if not data:
                return None
            return FakeResponse(data[0], count=total)
        if self._single == "single":
            if len(data) != 1:
                raise Exception("JSON object requested, multiple (or no) rows returned")
            return FakeResponse(data[0], count=total)
        return FakeResponse(data, count=total if self._count else None)


class FakeRpc:
    def __init__(self, db, name, params):
        self.db, self.name, self.params = db, name, params

    def execute(self):
        self.db.rpc_calls.append((self.name, self.params))
        handler = self.db.rpc_handlers.get(self.name)
        return FakeResponse(handler(self.params) if handler else None)


class FakeAuthAdmin:
    def __init__(self, auth: "FakeAuth"):
        self.auth = auth

    def create_user(self, attributes):
        email = attributes["email"].lower()
        if email in self.auth.users:
            raise Exception("A user with this email address has already been registered")
        user = self.auth.add_user(email, attributes["password"], attributes.get("user_metadata"))
        return SimpleNamespace(user=user)

    def delete_user(self, user_id):
        for email, record in list(self.auth.users.items()):
            if record["user"].id == user_id:
                del self.auth.users[email]
                return None
        raise Exception("User not found")


class FakeAuth:
    def __init__(self):
        self.users = {}
        self.tokens = {}
        self.refresh_tokens = {}
        self.signed_out = 0
        self.admin = FakeAuthAdmin(self)

    def add_user(self, email, password="password123", user_metadata=None, last_sign_in_at=None):
        # Supabase Auth keeps emails lower-cased
        email = email.lower()
        now = datetime.now(timezone.utc).isoformat()
        user = SimpleNamespace(
            id=str(uuid.uuid4()),
            email=email,
            user_metadata=user_metadata or {},
            app_metadata={},
            created_at=now,
            updated_at=now,
            last_sign_in_at=last_sign_in_at,
        )
        self.users[email] = {"password": password, "user": user}
        return user

    def issue_token(self, user):
        token = f"token-{uuid.uuid4()}"
        refresh = f"refresh-{uuid.uuid4()}"
        self.tokens[token] = user
        self.refresh_tokens[refresh] = user
        return SimpleNamespace(access_token=token, refresh_token=refresh, expires_in=3600)

    def sign_in_with_password(self, credentials):
        record = self.users.get(credentials["email"].lower())
        if record is None or record["password"] != credentials["password"]:
            raise Exception("Invalid login credentials")
        user = record["user"]
        user.last_sign_in_at = datetime.now(timezone.utc).isoformat()
        return SimpleNamespace(user=user, session=self.issue_token(user))

    def get_user(self, jwt=None):
        user = self.tokens.get(jwt)
        if user is None:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=user)

    def refresh_session(self, refresh_token=None):
        user = self.refresh_tokens.pop(refresh_token, None)
        if user is None:
            raise Exception("Invalid Refresh Token: Refresh Token Not Found")
        return SimpleNamespace(user=user, session=self.issue_token(user))

    def sign_out(self):
        self.signed_out += 1


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.calls = []
        self.rpc_calls = []
        self.rpc_handlers = {}
        self.fail_tables = {}
        self.delay_tables = {}
        self.auth = FakeAuth()
        self._clock = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def tick(self) -> str:
        self._clock += timedelta(milliseconds=1)
        return self._clock.isoformat()

    def new_row(self, table, values):
        stamp = self.tick()
        row = {"id": str(uuid.uuid4()), "created_at": stamp, "updated_at": stamp}
        if table == "form_submissions":
            row["submitted_at"] = stamp
        row.update(values)
        self.tables.setdefault(table, []).append(row)
        return row

    def seed(self, table, **values):
        return dict(self.new_row(table, values))

    def table(self, name):
        return FakeQuery(self, name)

    def rpc(self, name, params=None):
        return FakeRpc(self, name, params or {})


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_db():
    """Fresh in-memory database and auth for each test."""
    return FakeSupabase()


@pytest.fixture
def app(fake_db):
    from app.main import app as fastapi_app
    from app.database.supabase_client import get_supabase, get_service_supabase
    from app.modules.auth.service import clear_auth_cache

    clear_auth_cache()
    fastapi_app.dependency_overrides[get_supabase] = lambda: fake_db
    fastapi_app.dependency_overrides[get_service_supabase] = lambda: fake_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()
    clear_auth_cache()


@pytest.fixture
def client(app):
    return TestClient(app)


def _bearer(fake_db, user):
    session = fake_db.auth.issue_token(user)
    return {"Authorization": f"Bearer {session.access_token}"}


@pytest.fixture
def admin_user(fake_db):
    user = fake_db.auth.add_user("owner@pines.test", "admin-pass")
    fake_db.seed("admins", user_id=user.id, username="owner")
    return user


@pytest.fixture
def admin_headers(fake_db, admin_user):
    return _bearer(fake_db, admin_user)


@pytest.fixture
def canvasser(fake_db):
    """Active canvasser with a login; returns the canvassers row."""
    user = fake_db.auth.add_user("walker@pines.test", "field-pass")
    row = fake_db.seed(
        "canvassers",
        name="Wally Walker",
        email=user.email,
        phone=None,
        assigned_territories=["North"],
        active=True,
        total_visits=0,
        leads_generated=0,
        conversion_rate=0,
    )
    row["user"] = user
    return row


@pytest.fixture
def canvasser_headers(fake_db, canvasser):
    return _bearer(fake_db, canvasser["user"])


@pytest.fixture
def outsider_headers(fake_db):
    """Signed-in user with neither role."""
    user = fake_db.auth.add_user("visitor@pines.test", "visitor-pass")
    return _bearer(fake_db, user)


@pytest.fixture
def salesperson(fake_db):
    return fake_db.seed(
        "salespeople",
        name="Sam Seller",
        email="sam@pines.test",
        phone=None,
        job_types=["General Contracting"],
        commission_percentage=5,
        total_sales=0,
        total_profit=0,
        active=True,
    )


@pytest.fixture
def lead(fake_db):
    return fake_db.seed(
        "leads",
        name="Jane Homeowner",
        email="jane@example.com",
        phone="555-0100",
        service="Renovations & Remodeling",
        message="Kitchen remodel",
        status="New",
        salesperson_id=None,
        canvasser_id=None,
    )
