from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
import logging

from safari_booking.core.config import settings

logger = logging.getLogger(__name__)

class Base(DeclarativeBase):
	pass


def build_engine(database_url: str) -> Engine:
	if database_url.startswith("sqlite"):
		return create_engine(database_url, connect_args={"check_same_thread": False})
	return create_engine(
		database_url,
		pool_pre_ping=True,
		pool_recycle=3600,
		pool_timeout=10,
		connect_args={"connect_timeout": 10},
	)


def build_sessionmaker(bind: Engine) -> sessionmaker:
	return sessionmaker(bind=bind, autoflush=False, autocommit=False, expire_on_commit=False)


# A missing driver or bad URL must not stop the app from importing
try:
	engine = build_engine(settings.database_url)
	SessionLocal = build_sessionmaker(engine)
	logger.info("Database engine created successfully")
except Exception as e:
	logger.error(f"Failed to create database engine: {e}")
	engine = None
	SessionLocal = None


def get_db():
	if SessionLocal is None:
		raise RuntimeError("Database not available. Please check your database connection.")

	db = SessionLocal()
	try:
		yield db
	finally:
		db.close()
