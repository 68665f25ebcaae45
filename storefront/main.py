# storefront/main.py
import uvicorn

from storefront.api import create_app
from storefront.data.database import Base, SessionLocal, engine
from storefront.services.user_service import UserService
from storefront.utils.logging import get_logger
from storefront.utils.settings import ADMIN_EMAIL, ADMIN_NAME

# models must be imported before create_all
import storefront.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db():
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables ready")

    if ADMIN_EMAIL:
        db = SessionLocal()
        try:
            UserService(db).ensure_admin(ADMIN_EMAIL, ADMIN_NAME)
        finally:
            db.close()


init_db()
app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
