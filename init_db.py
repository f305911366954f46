from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

# Import models after environment is loaded
from app.core.database import Base, engine
from app.models.order import PrintOrder


def init_db():
    print(f"Connecting to database at: {engine.url.render_as_string(hide_password=True)}")

    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("Database tables created successfully!")

if __name__ == "__main__":
    print("Initializing database...")
    init_db()
    print("Done!")
