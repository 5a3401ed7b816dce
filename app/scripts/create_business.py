#!/usr/bin/env python3
"""
Script to create a business owner, their business, default working hours
and a starter service, then print a dashboard access token.

Usage: python -m app.scripts.create_business --email owner@example.com --password secret123 --name "Juan's Barbershop"
"""
import argparse
import sys
from datetime import timedelta
from sqlalchemy.orm import Session

from app.api.dependencies import create_access_token
from app.config.database import SessionLocal
from app.core.exceptions import BookingError
from app.services.business.business_service import BusinessService
from app.services.catalog.catalog_service import CatalogService
from app.utils.my_logging import setup_logging


def create_business(email: str, password: str, name: str, service_name: str, price: float, duration: int):
    """Create the owner account, business and one service"""
    db: Session = SessionLocal()

    try:
        user, business = BusinessService.register_business(
            db,
            email=email,
            password=password,
            business_name=name,
        )
        service = CatalogService.create_service(
            db,
            business_id=business.id,
            name=service_name,
            price=price,
            duration=duration,
        )

        token = create_access_token({"sub": str(user.id)}, expires_delta=timedelta(days=7))

        print("✅ Business created")
        print(f"   Business ID:  {business.id}")
        print(f"   Booking slug: {business.slug}")
        print(f"   Service:      {service.name} ({service.formatted_duration}, {service.price})")
        print(f"   Access token: {token}")

    except BookingError as e:
        db.rollback()
        print(f"❌ Error creating business: {e.detail}")
        sys.exit(1)
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Create a business with default working hours")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--name", required=True, help="Business display name")
    parser.add_argument("--service", default="Consultation")
    parser.add_argument("--price", type=float, default=0)
    parser.add_argument("--duration", type=int, default=30, help="Minutes")
    args = parser.parse_args()

    setup_logging(verbose=False)

    create_business(args.email, args.password, args.name, args.service, args.price, args.duration)


if __name__ == "__main__":
    main()
