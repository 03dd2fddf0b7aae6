# create_tables.py
from sqlalchemy.exc import SQLAlchemyError
from app.database import Base, engine, SessionLocal
from app.models import User  # registers every model on Base.metadata
from app.utils.security import get_password_hash

DEFAULT_ADMIN = {
    "name": "System Administrator",
    "email": "admin@example.com",
    "password": "admin123",
}

def create_tables(drop_existing: bool = True):
    """Create all tables, dropping existing ones first"""
    try:
        if drop_existing:
            Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)
        print("✅ All tables created successfully!")

        create_default_admin()

    except SQLAlchemyError as e:
        print(f"❌ Error creating tables: {e}")
        raise

def create_default_admin():
    """Create a default platform admin user"""
    db = SessionLocal()
    try:
        if db.query(User).filter(User.email == DEFAULT_ADMIN["email"]).first():
            print("ℹ️  Admin user already exists")
            return

        db.add(User(
            name=DEFAULT_ADMIN["name"],
            email=DEFAULT_ADMIN["email"],
            hashed_password=get_password_hash(DEFAULT_ADMIN["password"]),
            role="admin",
            is_active=True,
        ))
        db.commit()
        print("✅ Default admin user created!")
        print(f"   Email: {DEFAULT_ADMIN['email']}")
        print(f"   Password: {DEFAULT_ADMIN['password']}")
    finally:
        db.close()

if __name__ == "__main__":
    create_tables()
