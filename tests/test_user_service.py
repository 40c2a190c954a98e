"""Tests for user administration."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import patch
from datetime import datetime, timedelta
from app.errors import NotFoundError, ConflictError, ValidationFailure
from app.models.user import User, Role
from app.services import client_service, user_service

T0 = datetime(2026, 4, 1, 8, 0, 0)


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_create_normalizes_email_and_name(self, db):
        user = await user_service.create_user(db, "  Operador@RM.com ", "  Ana Operadora ", "OPERATOR")
        assert user.email == "operador@rm.com"
        assert user.full_name == "Ana Operadora"
        assert user.role == "OPERATOR"
        assert user.is_active is True
        assert user.created_at is not None

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, db):
        await user_service.create_user(db, "admin@rm.com", "Admin", Role.ADMIN_PARKING)
        with pytest.raises(ConflictError) as exc:
            await user_service.create_user(db, "ADMIN@rm.com", "Otro Admin", Role.OPERATOR)
        assert exc.value.detail == "El correo ya está registrado"
        assert db.query(User).count() == 1
        assert db.query(User).one().role == "ADMIN_PARKING"

    @pytest.mark.asyncio
    async def test_unknown_role_rejected(self, db):
        with pytest.raises(ValidationFailure) as exc:
            await user_service.create_user(db, "x@rm.com", "Equis", "JANITOR")
        assert exc.value.__cause__ is None
        assert db.query(User).count() == 0

    @pytest.mark.asyncio
    async def test_client_registration_reuses_created_client(self, db, site):
        created = await user_service.create_user(db, "cliente@rm.com", "Cliente", "CLIENT")
        contract = await client_service.create_client_contract(
            db, "Cliente", "cliente@rm.com", site.id, T0, T0 + timedelta(days=30), 120000, now=T0,
        )
        assert contract.user_id == created.id


class TestListUsers:
    @pytest.fixture
    def staff(self, db):
        rows = [
            User(email="super@rm.com", full_name="Super", role="SUPER_ADMIN", is_active=True, created_at=T0),
            User(email="op1@rm.com", full_name="Op Uno", role="OPERATOR", is_active=True,
                 created_at=T0 + timedelta(days=1)),
            User(email="op2@rm.com", full_name="Op Dos", role="OPERATOR", is_active=False,
                 created_at=T0 + timedelta(days=2)),
        ]
        db.add_all(rows)
        db.commit()
        return rows

    def test_newest_first(self, db, staff):
        assert [u.email for u in user_service.list_users(db)] == ["op2@rm.com", "op1@rm.com", "super@rm.com"]

    def test_filter_by_role(self, db, staff):
        assert [u.email for u in user_service.list_users(db, role="OPERATOR")] == ["op2@rm.com", "op1@rm.com"]

    def test_filter_by_role_and_status(self, db, staff):
        users = user_service.list_users(db, role=Role.OPERATOR, is_active=True)
        assert [u.email for u in users] == ["op1@rm.com"]
        assert [u.email for u in user_service.list_users(db, is_active=False)] == ["op2@rm.com"]


class TestUpdates:
    @pytest.mark.asyncio
    async def test_update_role(self, db):
        user = await user_service.create_user(db, "op@rm.com", "Operador", "OPERATOR")
        with patch("app.services.user_service.logger") as mock_logger:
            updated = await user_service.update_role(db, user.id, "ADMIN_PARKING")
        assert updated.role == "ADMIN_PARKING"
        assert "OPERATOR → ADMIN_PARKING" in mock_logger.info.call_args[0][0]

    @pytest.mark.asyncio
    async def test_update_status(self, db):
        user = await user_service.create_user(db, "op@rm.com", "Operador", "OPERATOR")
        await user_service.update_status(db, user.id, False)
        db.expire_all()
        assert db.query(User).one().is_active is False

    @pytest.mark.asyncio
    async def test_unknown_user(self, db):
        with pytest.raises(NotFoundError) as exc:
            await user_service.update_role(db, 404, "OPERATOR")
        assert exc.value.detail == "Usuario no encontrado"
        with pytest.raises(NotFoundError):
            await user_service.update_status(db, 404, True)
