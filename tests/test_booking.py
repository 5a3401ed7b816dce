"""
Tests for services/appointment/appointment_service.py
"""
import os
import re
import tempfile
import threading
import unittest
from datetime import time
from decimal import Decimal
from unittest import mock

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from app.core.exceptions import (
    Conflict,
    InvalidTransition,
    NotFound,
    ServiceUnavailable,
    ValidationError,
)
from app.models import Base, Business, Service, User
from app.models.appointment import Appointment, AppointmentStatus
from app.services.appointment import appointment_service
from app.services.appointment.appointment_service import AppointmentService, generate_booking_code
from app.services.catalog.catalog_service import CatalogService

from tests.base import DatabaseTestCase, MONDAY

CODE_PATTERN = re.compile(r"^[A-Z]{1,10}-[A-Z0-9]{6}$")


class TestBookingCode(unittest.TestCase):

    def test_prefix_is_uppercase_letters_truncated_to_ten(self):
        code = generate_booking_code("Juan's Barber Shop 2")
        self.assertTrue(code.startswith("JUANSBARBE-"))
        self.assertRegex(code, CODE_PATTERN)

    def test_short_names_keep_full_prefix(self):
        self.assertTrue(generate_booking_code("Spa 1").startswith("SPA-"))

    def test_name_without_letters_gets_fallback_prefix(self):
        self.assertRegex(generate_booking_code("123"), r"^BOOKING-[A-Z0-9]{6}$")


class TestCreateBooking(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.business = self.make_business()
        self.service = self.make_service(self.business)

    def book(self, **overrides):
        params = dict(
            slug="juans-barbershop",
            service_id=self.service.id,
            customer_name="Maria Santos",
            day=MONDAY,
            start_time="2:30 PM",
            email="maria@example.com",
            phone="09171234567",
        )
        params.update(overrides)
        return AppointmentService.create_booking(self.db, **params)

    def test_creates_pending_appointment_in_24_hour_time(self):
        appointment = self.book()

        self.assertEqual(appointment.status, AppointmentStatus.PENDING.value)
        self.assertEqual(appointment.time, time(14, 30))
        self.assertEqual(appointment.date, MONDAY)
        self.assertEqual(appointment.business_id, self.business.id)
        self.assertRegex(appointment.booking_code, CODE_PATTERN)
        self.assertTrue(appointment.booking_code.startswith("JUANSBARBE-"))

    def test_12_and_24_hour_inputs_hit_the_same_slot(self):
        self.book(start_time="2:30 PM")
        with self.assertRaises(Conflict):
            self.book(start_time="14:30", customer_name="Pedro")

    def test_optional_contact_fields(self):
        appointment = self.book(email=None, phone="")
        self.assertIsNone(appointment.email)
        self.assertIsNone(appointment.phone)

    def test_slot_taken_by_any_service_is_a_conflict(self):
        other_service = self.make_service(self.business, name="Shave", duration=30)
        self.book()

        with self.assertRaises(Conflict):
            self.book(service_id=other_service.id, customer_name="Pedro")

        self.assertEqual(self.db.query(Appointment).count(), 1)

    def test_cancelled_booking_frees_the_slot(self):
        self.make_appointment(self.business, self.service, start=time(14, 30), status="cancelled")

        appointment = self.book()

        self.assertEqual(appointment.status, "pending")
        self.assertEqual(self.db.query(Appointment).count(), 2)

    def test_unknown_slug_is_not_found(self):
        with self.assertRaises(NotFound) as ctx:
            self.book(slug="nobody")
        self.assertEqual(ctx.exception.detail, "Business not found")

    def test_service_of_another_business_is_not_found(self):
        other = self.make_business(name="Other Salon", slug="other-salon")
        foreign_service = self.make_service(other)
        # Even with the slot taken, ownership is checked first
        self.book()

        with self.assertRaises(NotFound) as ctx:
            self.book(service_id=foreign_service.id)
        self.assertEqual(ctx.exception.detail, "Service not found")

    def test_deactivated_service_cannot_be_booked(self):
        CatalogService.update_service(
            self.db, self.business.id, self.service.id,
            name="Haircut", price=250, duration=60, is_active=False
        )

        with self.assertRaises(NotFound) as ctx:
            self.book(start_time="10:00")
        self.assertEqual(ctx.exception.detail, "Service not found")
        self.assertEqual(self.db.query(Appointment).count(), 0)

    def test_seconds_do_not_make_a_new_slot(self):
        first = self.book(start_time="10:00")
        self.assertEqual(first.time, time(10, 0))

        with self.assertRaises(Conflict):
            self.book(start_time="10:00:30", customer_name="Pedro")

        self.assertEqual(self.db.query(Appointment).count(), 1)

    def test_validation_runs_before_any_lookup(self):
        with self.assertRaises(ValidationError) as ctx:
            self.book(slug="nobody", start_time="25:00")
        self.assertEqual(ctx.exception.field, "time")

    def test_blank_customer_name_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            self.book(customer_name="   ")
        self.assertEqual(ctx.exception.field, "customerName")

    def test_malformed_email_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            self.book(email="not-an-email")
        self.assertEqual(ctx.exception.field, "email")

    def test_stale_availability_read_still_conflicts(self):
        existing = self.make_appointment(self.business, self.service, start=time(14, 30), status="confirmed")

        # Simulate a concurrent request: the pre-insert check saw a free slot
        with mock.patch.object(
                AppointmentService, "_find_active_slot", side_effect=[None, existing]
        ):
            with self.assertRaises(Conflict):
                self.book()

        self.assertEqual(self.db.query(Appointment).count(), 1)

    def test_storage_rejects_two_live_bookings_for_one_slot(self):
        self.make_appointment(self.business, self.service, start=time(9, 0), status="pending", code="A-1")

        with self.assertRaises(IntegrityError):
            self.make_appointment(self.business, self.service, start=time(9, 0), status="confirmed", code="A-2")
        self.db.rollback()

    def test_storage_allows_many_cancelled_rows_for_one_slot(self):
        self.make_appointment(self.business, self.service, start=time(9, 0), status="cancelled", code="C-1")
        self.make_appointment(self.business, self.service, start=time(9, 0), status="cancelled", code="C-2")
        self.make_appointment(self.business, self.service, start=time(9, 0), status="pending", code="C-3")

        self.assertEqual(self.db.query(Appointment).count(), 3)

    def test_booking_code_collision_is_retried(self):
        taken = self.make_appointment(self.business, self.service, start=time(9, 0), code="JUANSBARBE-AAAAAA")

        with mock.patch.object(
                appointment_service,
                "generate_booking_code",
                side_effect=[taken.booking_code, "JUANSBARBE-BBBBBB"]
        ):
            appointment = self.book()

        self.assertEqual(appointment.booking_code, "JUANSBARBE-BBBBBB")

    def test_gives_up_after_bounded_code_attempts(self):
        taken = self.make_appointment(self.business, self.service, start=time(9, 0), code="JUANSBARBE-AAAAAA")

        with mock.patch.object(
                appointment_service, "generate_booking_code", return_value=taken.booking_code
        ) as generator:
            with self.assertRaises(ServiceUnavailable):
                self.book(max_code_attempts=5)

        self.assertEqual(generator.call_count, 5)
        self.assertEqual(self.db.query(Appointment).count(), 1)


class TestConcurrentBooking(unittest.TestCase):
    """Two sessions on two threads racing for one slot, against a file database."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.engine = create_engine(
            f"sqlite:///{os.path.join(self.tmpdir.name, 'race.db')}",
            connect_args={"check_same_thread": False, "timeout": 10},
        )
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

        db = self.Session()
        owner = User(email="owner@example.com", hashed_password="not-a-real-hash")
        business = Business(owner=owner, name="Juan's Barbershop", slug="juans-barbershop")
        service = Service(business=business, name="Haircut", price=Decimal("250.00"), duration=60)
        db.add_all([owner, business, service])
        db.commit()
        self.service_id = service.id
        db.close()

    def tearDown(self):
        self.engine.dispose()
        self.tmpdir.cleanup()

    def test_only_one_of_two_racing_bookings_commits(self):
        barrier = threading.Barrier(2, timeout=10)
        waited = threading.local()
        find_active_slot = AppointmentService._find_active_slot

        def check_then_wait(db, *args):
            # Both requests pass the pre-insert check before either inserts
            result = find_active_slot(db, *args)
            if not getattr(waited, "done", False):
                waited.done = True
                barrier.wait()
            return result

        outcomes = []

        def attempt(customer_name):
            db = self.Session()
            try:
                AppointmentService.create_booking(
                    db,
                    slug="juans-barbershop",
                    service_id=self.service_id,
                    customer_name=customer_name,
                    day=MONDAY,
                    start_time="10:00",
                )
                outcomes.append("ok")
            except Conflict:
                outcomes.append("conflict")
            except Exception as e:
                outcomes.append(repr(e))
            finally:
                db.close()

        with mock.patch.object(AppointmentService, "_find_active_slot", side_effect=check_then_wait):
            threads = [threading.Thread(target=attempt, args=(name,)) for name in ("Maria", "Pedro")]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join(timeout=30)

        self.assertEqual(sorted(outcomes), ["conflict", "ok"])

        db = self.Session()
        try:
            self.assertEqual(db.query(Appointment).count(), 1)
        finally:
            db.close()


class TestStatusTransitions(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.business = self.make_business()
        self.service = self.make_service(self.business)
        self.appointment = self.make_appointment(self.business, self.service)

    def move(self, status, appointment=None, business=None):
        return AppointmentService.update_status(
            self.db,
            (business or self.business).id,
            (appointment or self.appointment).id,
            AppointmentStatus(status),
        )

    def test_happy_path_to_done(self):
        self.assertEqual(self.move("confirmed").status, "confirmed")
        self.assertEqual(self.move("done").status, "done")

    def test_pending_and_confirmed_can_be_cancelled(self):
        self.assertEqual(self.move("cancelled").status, "cancelled")

        confirmed = self.make_appointment(self.business, self.service, start=time(11, 0), status="confirmed")
        self.assertEqual(self.move("cancelled", appointment=confirmed).status, "cancelled")

    def test_pending_cannot_skip_to_done(self):
        with self.assertRaises(InvalidTransition):
            self.move("done")

    def test_terminal_states_are_final(self):
        self.move("cancelled")
        for status in ("pending", "confirmed", "done"):
            with self.assertRaises(InvalidTransition):
                self.move(status)

        done = self.make_appointment(self.business, self.service, start=time(12, 0), status="done")
        with self.assertRaises(InvalidTransition):
            self.move("cancelled", appointment=done)

    def test_same_status_is_not_a_transition(self):
        with self.assertRaises(InvalidTransition):
            self.move("pending")

    def test_other_business_cannot_touch_the_appointment(self):
        other = self.make_business(name="Other Salon", slug="other-salon")

        with self.assertRaises(NotFound):
            self.move("confirmed", business=other)

        self.db.refresh(self.appointment)
        self.assertEqual(self.appointment.status, "pending")
