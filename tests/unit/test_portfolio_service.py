"""Tests for PortfolioService against the database directly."""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from portfolio_builder.core.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PrivateResourceError,
)
from portfolio_builder.models import Portfolio, Project, User
from portfolio_builder.schemas.portfolio import CustomizationPatch, PortfolioFields
from portfolio_builder.services.portfolio_service import PortfolioService


@pytest.fixture
def make_db_user(db_session):
    def _make(username):
        user = User(name=username.title(), username=username, email=f"{username}@gmail.com", password_hash="x")
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def service(db_session):
    return PortfolioService(db_session)


class TestCreate:
    """One portfolio per user."""

    def test_create_once(self, service, make_db_user):
        user = make_db_user("alice")

        portfolio = service.create(user.id, PortfolioFields())

        assert portfolio.user_id == user.id
        assert portfolio.views == 0
        assert portfolio.is_public is True

    def test_second_create_conflicts(self, service, make_db_user):
        user = make_db_user("alice")
        service.create(user.id, PortfolioFields())

        with pytest.raises(ConflictError):
            service.create(user.id, PortfolioFields())

    def test_storage_enforces_uniqueness(self, db_session, make_db_user):
        user = make_db_user("alice")
        db_session.add(Portfolio(user_id=user.id))
        db_session.commit()

        db_session.add(Portfolio(user_id=user.id))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_lost_race_surfaces_as_conflict(self, service, make_db_user, monkeypatch):
        user = make_db_user("alice")
        service.create(user.id, PortfolioFields())
        # simulate a concurrent create that passed the pre-check
        monkeypatch.setattr(service, "_find_by_owner", lambda owner_id: None)

        with pytest.raises(ConflictError):
            service.create(user.id, PortfolioFields())


class TestGetPublic:
    """Visibility rules of the public view."""

    def test_unknown_user(self, service):
        view = service.get_public("ghost")

        assert view.portfolio is None
        assert view.owner is None
        assert view.projects == []

    def test_no_portfolio_lists_projects(self, service, make_db_user, db_session):
        user = make_db_user("bob")
        db_session.add(Project(user_id=user.id, title="CLI", description="tool"))
        db_session.commit()

        view = service.get_public("bob")

        assert view.portfolio is None
        assert [project.title for project in view.projects] == ["CLI"]

    def test_private_raises(self, service, make_db_user):
        user = make_db_user("alice")
        service.create(user.id, PortfolioFields(is_public=False))

        with pytest.raises(PrivateResourceError):
            service.get_public("alice")

    def test_each_read_adds_one_view(self, service, make_db_user):
        user = make_db_user("alice")
        service.create(user.id, PortfolioFields())

        counts = [service.get_public("alice").portfolio.views for _ in range(4)]

        assert counts == [1, 2, 3, 4]


class TestUpdateByIdOrOwner:
    """Resolution by id first, then by owner."""

    def test_foreign_id_is_rejected_and_unchanged(self, service, make_db_user, db_session):
        alice = make_db_user("alice")
        bob = make_db_user("bob")
        target = service.create(alice.id, PortfolioFields(theme="light"))
        service.create(bob.id, PortfolioFields())

        with pytest.raises(AuthorizationError):
            service.update_by_id_or_owner(bob.id, str(target.id), PortfolioFields(theme="dark"))

        db_session.expire_all()
        assert db_session.get(Portfolio, target.id).theme == "light"

    def test_unknown_id_updates_own(self, service, make_db_user, db_session):
        alice = make_db_user("alice")
        own = service.create(alice.id, PortfolioFields())

        updated = service.update_by_id_or_owner(alice.id, str(uuid.uuid4()), PortfolioFields(theme="dark"))

        assert updated.id == own.id
        assert updated.theme == "dark"
        assert db_session.query(Portfolio).count() == 1

    def test_unknown_id_without_portfolio(self, service, make_db_user):
        alice = make_db_user("alice")

        with pytest.raises(NotFoundError):
            service.update_by_id_or_owner(alice.id, None, PortfolioFields(theme="dark"))


class TestCustomization:
    def test_merge_keeps_unset_keys(self, service, make_db_user):
        alice = make_db_user("alice")
        service.create(alice.id, PortfolioFields())

        portfolio = service.update_customization(alice.id, CustomizationPatch(font_family="Georgia"))

        assert portfolio.customization["fontFamily"] == "Georgia"
        assert portfolio.customization["primaryColor"] == "#4F3B78"
