"""
Tests for the scheduled tour completion job and the admin bootstrap
"""
from datetime import date, timedelta

from sqlalchemy import select

from estate_enquiry.models.database import Inquiry, User
from estate_enquiry.services.inquiry_service import InquiryService
from estate_enquiry.utils.create_admin import ADMIN_EMAIL, create_admin_user
from estate_enquiry.utils.tour_status_job import complete_past_tours


def _tour(tour_date, tour_status, inquiry_type="tour"):
    return Inquiry(
        name="Visitor",
        email="visitor@example.com",
        message="Tour request",
        inquiry_type=inquiry_type,
        status="unread",
        priority="normal",
        category="general",
        source="website",
        tour_date=tour_date,
        tour_time="10:00 AM",
        tour_type=["siteVisit"],
        tour_status=tour_status,
    )


async def _seed(session_factory, *inquiries):
    async with session_factory() as db:
        db.add_all(inquiries)
        await db.commit()
        return [i.id for i in inquiries]


async def _tour_statuses(session_factory):
    async with session_factory() as db:
        result = await db.execute(select(Inquiry.id, Inquiry.tour_status))
        return dict(result.all())


class TestCompletePastTours:

    async def test_only_confirmed_past_tours_complete(self, session_factory):
        today = date(2026, 10, 18)
        past_confirmed, past_pending, today_confirmed, future_confirmed = await _seed(
            session_factory,
            _tour(today - timedelta(days=2), "confirmed"),
            _tour(today - timedelta(days=2), "pending"),
            _tour(today, "confirmed"),
            _tour(today + timedelta(days=3), "confirmed"),
        )

        async with session_factory() as db:
            updated = await InquiryService.complete_past_tours(db, today)

        assert updated == 1
        statuses = await _tour_statuses(session_factory)
        assert statuses[past_confirmed] == "completed"
        assert statuses[past_pending] == "pending"
        assert statuses[today_confirmed] == "confirmed"
        assert statuses[future_confirmed] == "confirmed"

    async def test_job_uses_wall_clock(self, session_factory):
        (old_tour,) = await _seed(session_factory, _tour(date.today() - timedelta(days=30), "confirmed"))

        assert await complete_past_tours(session_factory) == 1
        assert (await _tour_statuses(session_factory))[old_tour] == "completed"

    async def test_job_with_nothing_to_do(self, session_factory):
        assert await complete_past_tours(session_factory) == 0


class TestCreateAdmin:

    async def test_creates_once(self, session_factory):
        assert await create_admin_user(session_factory) is True
        assert await create_admin_user(session_factory) is False

        async with session_factory() as db:
            result = await db.execute(select(User).where(User.email == ADMIN_EMAIL))
            admins = result.scalars().all()

        assert len(admins) == 1
        assert admins[0].role == "admin"
        assert admins[0].hashed_password.startswith("$2")
