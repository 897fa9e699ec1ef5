#!/usr/bin/env python3
"""
Create the database tables and, optionally, the first admin account.

Admins are never created through the API; set ADMIN_EMAIL and ADMIN_PASSWORD
to create or promote one here.
"""

import os
import sys

from sqlalchemy import func, select

from safari_booking.core.security import hash_password
from safari_booking.db.session import Base, engine, SessionLocal
from safari_booking.db.models import User, Attraction, Safari, Booking, Review


def create_database() -> bool:
	"""Create all tables and report row counts."""
	if engine is None:
		print("❌ Database engine is not configured, check DATABASE_URL")
		return False

	print("🚀 Creating tables...")
	try:
		Base.metadata.create_all(bind=engine)
		with SessionLocal() as db:
			admin_email = os.getenv("ADMIN_EMAIL")
			admin_password = os.getenv("ADMIN_PASSWORD")
			if admin_email and admin_password:
				ensure_admin(db, admin_email, admin_password)

			print("📊 Current data:")
			for model in (User, Attraction, Safari, Booking, Review):
				count = db.scalar(select(func.count()).select_from(model))
				print(f"   - {model.__tablename__}: {count}")
	except Exception as e:
		print(f"❌ Error creating database: {e}")
		return False

	print("✅ Database ready!")
	return True


def ensure_admin(db, email: str, password: str) -> None:
	email = email.strip().lower()
	user = db.scalars(select(User).where(User.email == email)).first()
	if user is None:
		user = User(name="Administrator", email=email)
		db.add(user)
	user.role = "admin"
	user.password_hash = hash_password(password)
	db.commit()
	print(f"👤 Admin account ready: {email}")


if __name__ == "__main__":
	sys.exit(0 if create_database() else 1)
