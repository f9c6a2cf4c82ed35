from alcateia_auth.db.session import engine
from alcateia_auth.db.base import Base
import alcateia_auth.models  # noqa: F401 register all models

print("Creating database tables...")
Base.metadata.create_all(bind=engine)
print("✅ All tables created successfully!")
